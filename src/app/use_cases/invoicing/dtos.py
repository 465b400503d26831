"""Data Transfer Objects for Invoicing Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field

from src.domain.invoice import Invoice
from src.domain.invoice_item import InvoiceItem


class ProductRollupDTO(BaseModel):
    product_id: int
    product_name: str
    unit: str
    total_quantity: int
    total_amount: Decimal
    unit_price: Decimal = Field(..., description="Unit price on the most recent order")


class CustomerOrderGroupDTO(BaseModel):
    """Delivered, uninvoiced orders of one customer"""

    customer_id: int
    company_name: str
    order_count: int
    total_amount: Decimal
    order_ids: List[int]
    order_numbers: List[str]
    products: List[ProductRollupDTO]


class PendingInvoiceGroupsResponseDTO(BaseModel):
    groups: List[CustomerOrderGroupDTO]


class CreateBulkInvoiceCommandDTO(BaseModel):
    """
    Command DTO for invoicing delivered orders of one customer

    Used as input to CreateBulkInvoice use case.
    """

    customer_id: int = Field(..., description="Customer being billed")

    order_ids: List[int] = Field(..., description="Delivered, uninvoiced orders of the customer")

    shipping_address: Optional[str] = Field(
        default=None,
        description="None = customer address"
    )

    invoice_number: Optional[str] = Field(
        default=None,
        max_length=40,
        description="Requested invoice number; suffixed -1, -2, ... when already taken"
    )

    tax_rate: Optional[Decimal] = Field(
        default=None,
        ge=0,
        le=100,
        description="Tax rate in percent (None = configured default)"
    )

    description: Optional[str] = Field(default=None)

    class Config:
        json_schema_extra = {
            "example": {
                "customer_id": 3,
                "order_ids": [10, 11, 14],
                "shipping_address": "Organize Sanayi Bolgesi 4. Cadde No:12",
                "tax_rate": "20"
            }
        }


class ChangeInvoiceStatusCommandDTO(BaseModel):
    invoice_id: int

    target_status: str = Field(..., description="generated, paid or cancelled")


class InvoiceItemDTO(BaseModel):
    product_id: Optional[int] = None
    product_name: str
    unit: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal


class InvoiceSummaryDTO(BaseModel):
    invoice_id: int
    invoice_number: str
    customer_id: int
    status: str
    subtotal_amount: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    order_count: int
    description: Optional[str] = None
    shipping_address: Optional[str] = None
    paid_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    created_at: datetime

    @classmethod
    def from_entity(cls, invoice: Invoice) -> "InvoiceSummaryDTO":
        return cls(
            invoice_id=invoice.id,
            invoice_number=invoice.invoice_number,
            customer_id=invoice.customer_id,
            status=invoice.status.value,
            subtotal_amount=invoice.subtotal_amount,
            tax_rate=invoice.tax_rate,
            tax_amount=invoice.tax_amount,
            total_amount=invoice.total_amount,
            order_count=invoice.order_count,
            description=invoice.description,
            shipping_address=invoice.shipping_address,
            paid_at=invoice.paid_at,
            cancelled_at=invoice.cancelled_at,
            created_at=invoice.created_at,
        )


class InvoiceResponseDTO(InvoiceSummaryDTO):
    """
    Response DTO for invoice operations

    order_ids lists the orders currently billed by the invoice; it is
    empty once the invoice is cancelled and its orders are released.
    """

    items: List[InvoiceItemDTO] = Field(default_factory=list)
    order_ids: List[int] = Field(default_factory=list)

    @classmethod
    def from_entities(
        cls, invoice: Invoice, items: List[InvoiceItem], order_ids: List[int]
    ) -> "InvoiceResponseDTO":
        summary = InvoiceSummaryDTO.from_entity(invoice)
        return cls(
            **summary.model_dump(),
            items=[
                InvoiceItemDTO(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    unit=item.unit,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    total_price=item.total_price,
                )
                for item in items
            ],
            order_ids=order_ids,
        )


class ListInvoicesResponseDTO(BaseModel):
    invoices: List[InvoiceSummaryDTO]
    limit: int
    offset: int
