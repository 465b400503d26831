"""Delivery Slip Domain Entities

Proof-of-delivery documents. An order may ship in several slips; each
slip may later be linked to the invoice that bills its order.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, CheckConstraint, ForeignKey, Integer, Numeric, String, Text
from src.domain.base import BaseModel, BigIntegerKey


class DeliverySlipStatus(str, Enum):
    PREPARED = "prepared"
    DELIVERED = "delivered"
    RETURNED = "returned"


DELIVERY_SLIP_TRANSITIONS = {
    DeliverySlipStatus.PREPARED: {DeliverySlipStatus.DELIVERED},
    DeliverySlipStatus.DELIVERED: {DeliverySlipStatus.RETURNED},
    DeliverySlipStatus.RETURNED: set(),
}


class DeliverySlip(BaseModel, table=True):
    """
    Delivery Slip - Proof of delivery for (part of) an order

    Domain Rules:
    - delivery_slip_number is unique
    - Status transitions: prepared -> delivered -> returned
    - recipient_name is required to mark a slip delivered
    - invoice_id is set when the slip's order is invoiced
    """

    __tablename__ = "delivery_slips"
    __table_args__ = (
        Index('ix_delivery_slips_order_id', 'order_id'),
        Index('ix_delivery_slips_invoice_id', 'invoice_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntegerKey, primary_key=True, autoincrement=True),
    )

    delivery_slip_number: str = Field(sa_column=Column(String(50), nullable=False, unique=True))

    order_id: int = Field(
        sa_column=Column(BigInteger, ForeignKey("orders.id"), nullable=False),
    )

    customer_id: int = Field(
        sa_column=Column(BigInteger, ForeignKey("customers.id"), nullable=False),
    )

    invoice_id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigInteger, ForeignKey("invoices.id"), nullable=True),
    )

    status: DeliverySlipStatus = Field(default=DeliverySlipStatus.PREPARED)

    driver_name: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))

    vehicle_plate: Optional[str] = Field(default=None, sa_column=Column(String(50), nullable=True))

    delivery_address: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    recipient_name: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))

    customer_signature: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Opaque base64 signature image"
    )

    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    delivered_at: Optional[datetime] = Field(default=None)

    returned_at: Optional[datetime] = Field(default=None)

    created_at: datetime = Field(default_factory=datetime.utcnow)

    updated_at: datetime = Field(default_factory=datetime.utcnow)


class DeliverySlipItem(BaseModel, table=True):
    """Line of a delivery slip; delivered_quantity may be below the ordered quantity"""

    __tablename__ = "delivery_slip_items"
    __table_args__ = (
        Index('ix_delivery_slip_items_slip_id', 'delivery_slip_id'),
        CheckConstraint('delivered_quantity >= 0', name='slip_item_delivered_non_negative'),
        CheckConstraint('delivered_quantity <= quantity', name='slip_item_delivered_within_ordered'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntegerKey, primary_key=True, autoincrement=True),
    )

    delivery_slip_id: int = Field(
        sa_column=Column(BigInteger, ForeignKey("delivery_slips.id", ondelete="CASCADE"), nullable=False),
    )

    product_id: Optional[int] = Field(default=None, sa_column=Column(BigInteger, nullable=True))

    product_name: str = Field(sa_column=Column(String(255), nullable=False))

    unit: str = Field(default="adet", sa_column=Column(String(20), nullable=False, default="adet"))

    quantity: int = Field(sa_column=Column(Integer, nullable=False), description="Ordered quantity")

    delivered_quantity: int = Field(sa_column=Column(Integer, nullable=False))

    unit_price: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False))

    total_price: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False))
