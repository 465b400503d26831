"""Account Transaction Domain Entity

Immutable append-only movement on a customer's current account.
Invoices produce debits, payments produce credits.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, ForeignKey, Numeric, Text
from src.domain.base import BaseModel, BigIntegerKey


class AccountTransactionType(str, Enum):
    DEBIT = "debit"      # Customer owes more (invoice)
    CREDIT = "credit"    # Customer owes less (payment, invoice cancellation)


class AccountTransaction(BaseModel, table=True):
    __tablename__ = "account_transactions"
    __table_args__ = (
        Index('ix_account_transactions_customer_date', 'customer_id', 'transaction_date'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntegerKey, primary_key=True, autoincrement=True),
    )

    customer_id: int = Field(
        sa_column=Column(BigInteger, ForeignKey("customers.id"), nullable=False),
    )

    transaction_type: AccountTransactionType = Field(description="debit or credit")

    amount: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False))

    invoice_id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigInteger, ForeignKey("invoices.id"), nullable=True),
    )

    payment_id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigInteger, ForeignKey("payments.id"), nullable=True),
    )

    description: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    transaction_date: datetime = Field(default_factory=datetime.utcnow)

    created_at: datetime = Field(default_factory=datetime.utcnow)
