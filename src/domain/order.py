"""Order Domain Entity

One customer purchase request moving through the production and
delivery lifecycle. Orders are never deleted; cancellation is a
terminal status.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, CheckConstraint, ForeignKey, Numeric, String, Text
from src.domain.base import BaseModel, BigIntegerKey


class OrderStatus(str, Enum):
    """Order lifecycle states"""
    PENDING = "pending"
    PRODUCTION = "production"
    PRODUCTION_READY = "production_ready"
    SHIPPING = "shipping"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class Order(BaseModel, table=True):
    """
    Order - Customer purchase request

    Domain Rules:
    - order_number is unique
    - Created in status=pending with no milestone timestamps
    - Status only changes through OrderLifecycle.apply_transition
    - One milestone timestamp is set per transition and never cleared
    - invoice_id is set once, by bulk invoicing, while status=delivered
    - total_amount is the sum of the item line totals
    """

    __tablename__ = "orders"
    __table_args__ = (
        Index('ix_orders_customer_status', 'customer_id', 'status'),
        Index('ix_orders_sales_person_id', 'sales_person_id'),
        CheckConstraint('total_amount >= 0', name='order_total_non_negative'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntegerKey, primary_key=True, autoincrement=True),
        description="Unique order identifier (auto-increment)"
    )

    order_number: str = Field(
        sa_column=Column(String(50), nullable=False, unique=True),
        description="Human-readable order number (e.g., SIP-2024-123456)"
    )

    customer_id: int = Field(
        sa_column=Column(BigInteger, ForeignKey("customers.id"), nullable=False),
        description="Foreign key to Customer"
    )

    sales_person_id: str = Field(
        description="User ID of the sales person who took the order"
    )

    status: OrderStatus = Field(
        default=OrderStatus.PENDING,
        description="Lifecycle status"
    )

    total_amount: Decimal = Field(
        default=Decimal("0.00"),
        sa_column=Column(Numeric(12, 2), nullable=False, default=0),
        description="Sum of item line totals"
    )

    tax_amount: Decimal = Field(
        default=Decimal("0.00"),
        sa_column=Column(Numeric(12, 2), nullable=False, default=0),
    )

    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    production_notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    delivery_address: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    delivery_recipient: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Name of the person who received the goods"
    )

    delivery_signature: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Opaque base64 signature image"
    )

    invoice_id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigInteger, ForeignKey("invoices.id"), nullable=True, index=True),
        description="Invoice that bills this order (None = uninvoiced)"
    )

    production_started_at: Optional[datetime] = Field(default=None)

    production_completed_at: Optional[datetime] = Field(default=None)

    shipped_at: Optional[datetime] = Field(default=None)

    delivered_at: Optional[datetime] = Field(default=None)

    cancelled_at: Optional[datetime] = Field(default=None)

    created_at: datetime = Field(default_factory=datetime.utcnow)

    updated_at: datetime = Field(default_factory=datetime.utcnow)
