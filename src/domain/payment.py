"""Payment Domain Entity

Ledger entry for money received from a customer.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, CheckConstraint, Date, ForeignKey, Numeric, Text
from src.domain.base import BaseModel, BigIntegerKey


class PaymentMethod(str, Enum):
    CASH = "cash"
    TRANSFER = "transfer"
    CARD = "card"
    CHECK = "check"


class PaymentStatus(str, Enum):
    COMPLETED = "completed"
    PENDING = "pending"
    OVERDUE = "overdue"


class Payment(BaseModel, table=True):
    """
    Payment - Money received from a customer

    Domain Rules:
    - amount > 0
    - invoice_id, when set, references an invoice of the same customer
    - Only completed payments reduce the outstanding balance
    - Over-payment is allowed (advance payments)
    """

    __tablename__ = "payments"
    __table_args__ = (
        Index('ix_payments_customer_id', 'customer_id'),
        Index('ix_payments_status_due_date', 'status', 'due_date'),
        CheckConstraint('amount > 0', name='payment_amount_positive'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntegerKey, primary_key=True, autoincrement=True),
    )

    customer_id: int = Field(
        sa_column=Column(BigInteger, ForeignKey("customers.id"), nullable=False),
    )

    invoice_id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigInteger, ForeignKey("invoices.id"), nullable=True),
    )

    amount: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False))

    payment_method: PaymentMethod = Field(description="cash, transfer, card or check")

    payment_date: datetime = Field(default_factory=datetime.utcnow)

    due_date: Optional[date] = Field(default=None, sa_column=Column(Date, nullable=True))

    status: PaymentStatus = Field(default=PaymentStatus.COMPLETED)

    description: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    created_at: datetime = Field(default_factory=datetime.utcnow)

    updated_at: datetime = Field(default_factory=datetime.utcnow)
