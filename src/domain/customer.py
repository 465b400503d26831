"""Customer Domain Entity

Owner of orders, invoices and payments. Only the fields the billing
ledger reads (contact, address, assigned sales person) are kept here.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import String, Text
from src.domain.base import BaseModel, BigIntegerKey


class Customer(BaseModel, table=True):
    __tablename__ = "customers"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntegerKey, primary_key=True, autoincrement=True),
    )

    company_name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Registered company name"
    )

    contact_person: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))

    email: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))

    phone: Optional[str] = Field(default=None, sa_column=Column(String(50), nullable=True))

    address: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Default delivery and invoice address"
    )

    sales_person_id: Optional[str] = Field(
        default=None,
        index=True,
        description="User ID of the assigned sales person"
    )

    created_at: datetime = Field(default_factory=datetime.utcnow)

    updated_at: datetime = Field(default_factory=datetime.utcnow)
