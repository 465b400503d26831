"""Data Transfer Objects for Delivery Slip Use Cases"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field

from src.domain.delivery_slip import DeliverySlip, DeliverySlipItem


class DeliverySlipItemInputDTO(BaseModel):
    product_id: int

    delivered_quantity: int = Field(..., ge=0, description="Quantity handed over on this slip")


class CreateDeliverySlipCommandDTO(BaseModel):
    """
    Command DTO for preparing a delivery slip

    When items is None every order line is shipped with its full
    remaining quantity.
    """

    order_id: int

    items: Optional[List[DeliverySlipItemInputDTO]] = Field(
        default=None,
        description="Partial delivery lines (None = deliver everything remaining)"
    )

    driver_name: Optional[str] = Field(default=None)

    vehicle_plate: Optional[str] = Field(default=None)

    delivery_address: Optional[str] = Field(
        default=None,
        description="None = order delivery address, then customer address"
    )

    notes: Optional[str] = Field(default=None)

    class Config:
        json_schema_extra = {
            "example": {
                "order_id": 12,
                "items": [{"product_id": 7, "delivered_quantity": 2}],
                "driver_name": "Mehmet Kaya",
                "vehicle_plate": "34 ABC 123"
            }
        }


class ChangeDeliverySlipStatusCommandDTO(BaseModel):
    slip_id: int

    target_status: str

    recipient_name: Optional[str] = Field(default=None)

    customer_signature: Optional[str] = Field(
        default=None,
        description="Base64 signature image, stored as-is"
    )


class DeliverySlipItemDTO(BaseModel):
    product_id: Optional[int] = None
    product_name: str
    unit: str
    quantity: int
    delivered_quantity: int
    unit_price: Decimal
    total_price: Decimal


class DeliverySlipResponseDTO(BaseModel):
    slip_id: int
    delivery_slip_number: str
    order_id: int
    customer_id: int
    invoice_id: Optional[int] = None
    status: str
    driver_name: Optional[str] = None
    vehicle_plate: Optional[str] = None
    delivery_address: Optional[str] = None
    recipient_name: Optional[str] = None
    has_signature: bool = False
    notes: Optional[str] = None
    delivered_at: Optional[datetime] = None
    returned_at: Optional[datetime] = None
    created_at: datetime
    items: List[DeliverySlipItemDTO] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, slip: DeliverySlip, items: List[DeliverySlipItem]) -> "DeliverySlipResponseDTO":
        return cls(
            slip_id=slip.id,
            delivery_slip_number=slip.delivery_slip_number,
            order_id=slip.order_id,
            customer_id=slip.customer_id,
            invoice_id=slip.invoice_id,
            status=slip.status.value,
            driver_name=slip.driver_name,
            vehicle_plate=slip.vehicle_plate,
            delivery_address=slip.delivery_address,
            recipient_name=slip.recipient_name,
            has_signature=bool(slip.customer_signature),
            notes=slip.notes,
            delivered_at=slip.delivered_at,
            returned_at=slip.returned_at,
            created_at=slip.created_at,
            items=[
                DeliverySlipItemDTO(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    unit=item.unit,
                    quantity=item.quantity,
                    delivered_quantity=item.delivered_quantity,
                    unit_price=item.unit_price,
                    total_price=item.total_price,
                )
                for item in items
            ],
        )
