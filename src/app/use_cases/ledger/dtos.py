"""Data Transfer Objects for Payment Ledger Use Cases"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field

from src.domain.account_transaction import AccountTransaction
from src.domain.payment import Payment, PaymentMethod, PaymentStatus


class RecordPaymentCommandDTO(BaseModel):
    """
    Command DTO for recording a payment

    amount is validated by the use case (INVALID_AMOUNT) rather than by
    the schema so callers get the ledger's error code.
    """

    customer_id: int

    amount: Decimal = Field(..., description="Amount received (must be > 0)")

    payment_method: PaymentMethod = Field(..., description="cash, transfer, card or check")

    payment_date: Optional[datetime] = Field(default=None, description="None = now")

    due_date: Optional[date] = Field(default=None)

    invoice_id: Optional[int] = Field(default=None, description="Invoice being paid, if any")

    status: PaymentStatus = Field(default=PaymentStatus.COMPLETED)

    description: Optional[str] = Field(default=None)

    class Config:
        json_schema_extra = {
            "example": {
                "customer_id": 3,
                "amount": "4200.00",
                "payment_method": "transfer",
                "invoice_id": 17
            }
        }


class PaymentResponseDTO(BaseModel):
    payment_id: int
    customer_id: int
    invoice_id: Optional[int] = None
    amount: Decimal
    payment_method: str
    payment_date: datetime
    due_date: Optional[date] = None
    status: str
    description: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_entity(cls, payment: Payment) -> "PaymentResponseDTO":
        return cls(
            payment_id=payment.id,
            customer_id=payment.customer_id,
            invoice_id=payment.invoice_id,
            amount=payment.amount,
            payment_method=payment.payment_method.value,
            payment_date=payment.payment_date,
            due_date=payment.due_date,
            status=payment.status.value,
            description=payment.description,
            created_at=payment.created_at,
        )


class BalanceResponseDTO(BaseModel):
    """
    Outstanding balance of a customer

    outstanding_balance is floored at zero; any surplus of completed
    payments over invoice totals is reported separately as credit_balance.
    """

    customer_id: int
    invoiced_total: Decimal
    paid_total: Decimal
    outstanding_balance: Decimal
    credit_balance: Decimal
    computed_at: datetime


class OverdueInvoiceDTO(BaseModel):
    invoice_id: int
    invoice_number: str
    status: str
    total_amount: Decimal
    created_at: datetime
    due_date: date
    days_overdue: int


class OverdueInvoicesResponseDTO(BaseModel):
    customer_id: int
    due_days: int
    invoices: List[OverdueInvoiceDTO]
    total_overdue: Decimal


class AccountTransactionDTO(BaseModel):
    transaction_id: int
    transaction_type: str
    amount: Decimal
    invoice_id: Optional[int] = None
    payment_id: Optional[int] = None
    description: Optional[str] = None
    transaction_date: datetime

    @classmethod
    def from_entity(cls, transaction: AccountTransaction) -> "AccountTransactionDTO":
        return cls(
            transaction_id=transaction.id,
            transaction_type=transaction.transaction_type.value,
            amount=transaction.amount,
            invoice_id=transaction.invoice_id,
            payment_id=transaction.payment_id,
            description=transaction.description,
            transaction_date=transaction.transaction_date,
        )


class AccountSummaryDTO(BaseModel):
    """
    Current account view of a customer

    balance is signed (debit - credit, positive = customer owes);
    outstanding_balance is the floored invoice/payment figure.
    """

    customer_id: int
    company_name: str
    total_debit: Decimal
    total_credit: Decimal
    balance: Decimal
    outstanding_balance: Decimal
    overdue_payments: List[PaymentResponseDTO]
    transactions: List[AccountTransactionDTO]


class MarkOverdueResponseDTO(BaseModel):
    as_of: date
    updated_count: int
