"""Request schemas for Payment API"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field

from src.domain.payment import PaymentMethod, PaymentStatus


class RecordPaymentRequestSchema(BaseModel):
    """
    Request schema for recording a payment

    Used for POST /payments endpoint. Non-positive amounts pass schema
    validation and are rejected by the ledger with INVALID_AMOUNT.
    """

    customer_id: int

    amount: Decimal = Field(..., description="Amount received")

    payment_method: PaymentMethod

    payment_date: Optional[datetime] = Field(default=None)

    due_date: Optional[date] = Field(default=None)

    invoice_id: Optional[int] = Field(default=None)

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
