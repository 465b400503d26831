"""Invoice Item Domain Entity

Snapshot of a product line at invoice time. Name and unit are copied
from the catalog so later catalog edits never change an issued invoice.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, ForeignKey, Integer, Numeric, String
from src.domain.base import BaseModel, BigIntegerKey


class InvoiceItem(BaseModel, table=True):
    __tablename__ = "invoice_items"
    __table_args__ = (
        Index('ix_invoice_items_invoice_id', 'invoice_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntegerKey, primary_key=True, autoincrement=True),
    )

    invoice_id: int = Field(
        sa_column=Column(BigInteger, ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False),
    )

    product_id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigInteger, nullable=True),
        description="Catalog product at invoice time (informational, not a live reference)"
    )

    product_name: str = Field(sa_column=Column(String(255), nullable=False))

    unit: str = Field(default="adet", sa_column=Column(String(20), nullable=False, default="adet"))

    quantity: int = Field(sa_column=Column(Integer, nullable=False))

    unit_price: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Unit price of the most recent billed order"
    )

    total_price: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Sum of the billed line totals for this product"
    )

    created_at: datetime = Field(default_factory=datetime.utcnow)
