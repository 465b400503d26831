"""Invoice Domain Entity

Billing document aggregating one or more delivered orders of a customer.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, CheckConstraint, ForeignKey, Integer, Numeric, String, Text
from src.domain.base import BaseModel, BigIntegerKey


class InvoiceStatus(str, Enum):
    """Invoice status types"""
    DRAFT = "draft"
    GENERATED = "generated"
    PAID = "paid"
    CANCELLED = "cancelled"


INVOICE_TRANSITIONS = {
    InvoiceStatus.DRAFT: {InvoiceStatus.GENERATED, InvoiceStatus.CANCELLED},
    InvoiceStatus.GENERATED: {InvoiceStatus.PAID, InvoiceStatus.CANCELLED},
    InvoiceStatus.PAID: set(),
    InvoiceStatus.CANCELLED: set(),
}


class Invoice(BaseModel, table=True):
    """
    Invoice - Bulk invoice for delivered orders

    Domain Rules:
    - invoice_number must be unique
    - Status transitions: draft -> generated -> paid (or cancelled)
    - total_amount = subtotal_amount + tax_amount
    - tax_amount = round(subtotal_amount * tax_rate / 100, 2)
    - Amount fields are never updated after creation
    - References at least one order (orders.invoice_id)
    """

    __tablename__ = "invoices"
    __table_args__ = (
        Index('ix_invoices_customer_id', 'customer_id'),
        Index('ix_invoices_status', 'status'),
        CheckConstraint('subtotal_amount >= 0', name='invoice_subtotal_non_negative'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntegerKey, primary_key=True, autoincrement=True),
        description="Unique invoice identifier (auto-increment)"
    )

    invoice_number: str = Field(
        sa_column=Column(String(50), nullable=False, unique=True),
        description="Unique invoice number (e.g., INV-2024-000001)"
    )

    customer_id: int = Field(
        sa_column=Column(BigInteger, ForeignKey("customers.id"), nullable=False),
        description="Foreign key to Customer"
    )

    status: InvoiceStatus = Field(
        default=InvoiceStatus.GENERATED,
        description="Invoice status (draft, generated, paid, cancelled)"
    )

    subtotal_amount: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Sum of the billed orders' total amounts"
    )

    tax_rate: Decimal = Field(
        sa_column=Column(Numeric(5, 2), nullable=False),
        description="Tax rate in percent applied to the subtotal"
    )

    tax_amount: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False))

    total_amount: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="subtotal_amount + tax_amount"
    )

    order_count: int = Field(
        default=1,
        sa_column=Column(Integer, nullable=False, default=1),
    )

    description: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    shipping_address: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    paid_at: Optional[datetime] = Field(default=None)

    cancelled_at: Optional[datetime] = Field(default=None)

    created_at: datetime = Field(default_factory=datetime.utcnow)

    updated_at: datetime = Field(default_factory=datetime.utcnow)
