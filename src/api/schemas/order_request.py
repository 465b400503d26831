"""Request schemas for Order API

Pydantic models for validating incoming HTTP requests.
"""

import base64
import binascii
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

MAX_SIGNATURE_LENGTH = 2_000_000


def validate_signature(value: Optional[str]) -> Optional[str]:
    """
    Check a signature is base64 (optionally a data URL) of bounded size

    The payload itself is stored as-is and never decoded again.
    """
    if value is None or value == "":
        return None
    if len(value) > MAX_SIGNATURE_LENGTH:
        raise ValueError("Signature image is too large")
    encoded = value.split(",", 1)[1] if value.startswith("data:") else value
    try:
        base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        raise ValueError("Signature must be base64 encoded")
    return value


class OrderItemRequestSchema(BaseModel):
    product_id: int = Field(..., description="Catalog product ID")

    quantity: int = Field(..., gt=0, description="Ordered quantity (must be > 0)")

    unit_price: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Agreed unit price (omit for catalog price)"
    )


class CreateOrderRequestSchema(BaseModel):
    """
    Request schema for creating an order

    Used for POST /orders endpoint. sales_person_id defaults to the caller.
    """

    customer_id: int = Field(..., description="Ordering customer")

    sales_person_id: Optional[str] = Field(
        default=None,
        description="Sales person user ID (defaults to the calling user)"
    )

    items: List[OrderItemRequestSchema] = Field(..., min_length=1)

    tax_amount: Decimal = Field(default=Decimal("0.00"), ge=0)

    notes: Optional[str] = Field(default=None)

    delivery_address: Optional[str] = Field(default=None)

    class Config:
        json_schema_extra = {
            "example": {
                "customer_id": 1,
                "items": [
                    {"product_id": 7, "quantity": 3, "unit_price": "100.00"},
                    {"product_id": 9, "quantity": 1, "unit_price": "50.00"}
                ],
                "notes": "Deliver before noon"
            }
        }


class TransitionOrderRequestSchema(BaseModel):
    """
    Request schema for changing order status

    Used for PUT /orders/{order_id}/status endpoint.
    """

    status: str = Field(..., min_length=1, description="Target status")

    delivery_recipient: Optional[str] = Field(
        default=None,
        max_length=255,
        description="Required when status is delivered"
    )

    delivery_signature: Optional[str] = Field(
        default=None,
        description="Base64 signature image (optionally a data URL)"
    )

    production_notes: Optional[str] = Field(default=None)

    @field_validator('delivery_signature')
    @classmethod
    def validate_delivery_signature(cls, v):
        return validate_signature(v)

    class Config:
        json_schema_extra = {
            "example": {
                "status": "delivered",
                "delivery_recipient": "Ali Veli",
                "delivery_signature": "iVBORw0KGgoAAAANSUhEUgAA..."
            }
        }


class UpdateOrderItemsRequestSchema(BaseModel):
    """Used for PUT /orders/{order_id}/items endpoint"""

    items: List[OrderItemRequestSchema] = Field(..., min_length=1)

    production_notes: Optional[str] = Field(default=None)
