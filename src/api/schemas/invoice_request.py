"""Request schemas for Invoice API"""

from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field


class CreateBulkInvoiceRequestSchema(BaseModel):
    """
    Request schema for bulk invoicing

    Used for POST /invoices/bulk endpoint. An empty order_ids list is
    accepted here and rejected by the use case with EMPTY_ORDER_SELECTION.
    """

    customer_id: int

    order_ids: List[int]

    shipping_address: Optional[str] = Field(default=None)

    invoice_number: Optional[str] = Field(default=None, min_length=1, max_length=40)

    tax_rate: Optional[Decimal] = Field(default=None, ge=0, le=100)

    description: Optional[str] = Field(default=None)

    class Config:
        json_schema_extra = {
            "example": {
                "customer_id": 3,
                "order_ids": [10, 11, 14],
                "shipping_address": "Organize Sanayi Bolgesi 4. Cadde No:12"
            }
        }


class ChangeInvoiceStatusRequestSchema(BaseModel):
    status: str = Field(..., min_length=1, description="generated, paid or cancelled")
