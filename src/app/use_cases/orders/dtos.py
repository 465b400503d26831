"""Data Transfer Objects for Order Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field

from src.domain.order import Order
from src.domain.order_item import OrderItem


class OrderItemInputDTO(BaseModel):
    """One requested product line"""

    product_id: int = Field(..., description="Catalog product ID")

    quantity: int = Field(..., gt=0, description="Ordered quantity (must be > 0)")

    unit_price: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Agreed unit price (None = current catalog price)"
    )


class CreateOrderCommandDTO(BaseModel):
    """
    Command DTO for creating an order

    Used as input to CreateOrder use case.
    """

    customer_id: int = Field(..., description="Ordering customer")

    sales_person_id: str = Field(..., min_length=1, description="User ID of the sales person")

    items: List[OrderItemInputDTO] = Field(..., min_length=1, description="Product lines")

    tax_amount: Decimal = Field(default=Decimal("0.00"), ge=0)

    notes: Optional[str] = Field(default=None)

    delivery_address: Optional[str] = Field(
        default=None,
        description="Delivery address (None = customer address)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "customer_id": 1,
                "sales_person_id": "user_42",
                "items": [
                    {"product_id": 7, "quantity": 3, "unit_price": "100.00"},
                    {"product_id": 9, "quantity": 1, "unit_price": "50.00"}
                ],
                "notes": "Deliver before noon"
            }
        }


class TransitionOrderCommandDTO(BaseModel):
    """
    Command DTO for changing an order's status

    delivery_recipient is required only when target_status is delivered.
    """

    order_id: int

    target_status: str = Field(..., description="Target lifecycle status")

    delivery_recipient: Optional[str] = Field(default=None)

    delivery_signature: Optional[str] = Field(
        default=None,
        description="Base64 signature image, stored as-is"
    )

    production_notes: Optional[str] = Field(default=None)


class UpdateOrderItemsCommandDTO(BaseModel):
    """Command DTO for replacing an order's item list during production"""

    order_id: int

    items: List[OrderItemInputDTO] = Field(..., min_length=1)

    production_notes: Optional[str] = Field(default=None)


class OrderItemDTO(BaseModel):
    item_id: Optional[int] = None
    product_id: int
    quantity: int
    unit_price: Decimal
    total_price: Decimal


class OrderResponseDTO(BaseModel):
    """
    Response DTO for order operations

    Returned by CreateOrder, TransitionOrder, UpdateOrderItems and GetOrder.
    """

    order_id: int
    order_number: str
    customer_id: int
    sales_person_id: str
    status: str
    total_amount: Decimal
    tax_amount: Decimal
    notes: Optional[str] = None
    production_notes: Optional[str] = None
    delivery_address: Optional[str] = None
    delivery_recipient: Optional[str] = None
    has_signature: bool = False
    invoice_id: Optional[int] = None
    production_started_at: Optional[datetime] = None
    production_completed_at: Optional[datetime] = None
    shipped_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    items: List[OrderItemDTO] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, order: Order, items: List[OrderItem]) -> "OrderResponseDTO":
        return cls(
            order_id=order.id,
            order_number=order.order_number,
            customer_id=order.customer_id,
            sales_person_id=order.sales_person_id,
            status=order.status.value,
            total_amount=order.total_amount,
            tax_amount=order.tax_amount,
            notes=order.notes,
            production_notes=order.production_notes,
            delivery_address=order.delivery_address,
            delivery_recipient=order.delivery_recipient,
            has_signature=bool(order.delivery_signature),
            invoice_id=order.invoice_id,
            production_started_at=order.production_started_at,
            production_completed_at=order.production_completed_at,
            shipped_at=order.shipped_at,
            delivered_at=order.delivered_at,
            cancelled_at=order.cancelled_at,
            created_at=order.created_at,
            updated_at=order.updated_at,
            items=[
                OrderItemDTO(
                    item_id=item.id,
                    product_id=item.product_id,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    total_price=item.total_price,
                )
                for item in items
            ],
        )


class ListOrdersResponseDTO(BaseModel):
    orders: List[OrderResponseDTO]
    limit: int
    offset: int


class DeliveryConfirmationItemDTO(BaseModel):
    product_name: str
    unit: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal


class DeliveryConfirmationDTO(BaseModel):
    """
    Payload handed to the notification service after delivery

    Built from the finalized order; the notification service renders it
    and computes nothing.
    """

    order_id: int
    order_number: str
    customer_id: int
    customer_name: str
    customer_email: Optional[str] = None
    delivery_recipient: str
    delivered_at: datetime
    total_amount: Decimal
    items: List[DeliveryConfirmationItemDTO]
