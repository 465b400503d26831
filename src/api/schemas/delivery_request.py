"""Request schemas for Delivery Slip API"""

from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from src.api.schemas.order_request import validate_signature


class DeliverySlipItemRequestSchema(BaseModel):
    product_id: int

    delivered_quantity: int = Field(..., ge=0)


class CreateDeliverySlipRequestSchema(BaseModel):
    """
    Request schema for preparing a delivery slip

    Used for POST /orders/{order_id}/delivery-slips. Omit items to ship
    everything still undelivered.
    """

    items: Optional[List[DeliverySlipItemRequestSchema]] = Field(default=None)

    driver_name: Optional[str] = Field(default=None, max_length=255)

    vehicle_plate: Optional[str] = Field(default=None, max_length=50)

    delivery_address: Optional[str] = Field(default=None)

    notes: Optional[str] = Field(default=None)


class ChangeDeliverySlipStatusRequestSchema(BaseModel):
    """Used for PUT /delivery-slips/{slip_id}/status"""

    status: str = Field(..., min_length=1)

    recipient_name: Optional[str] = Field(default=None, max_length=255)

    customer_signature: Optional[str] = Field(default=None)

    @field_validator('customer_signature')
    @classmethod
    def validate_customer_signature(cls, v):
        return validate_signature(v)
