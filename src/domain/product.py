"""Product Domain Entity

Catalog entry referenced live by order items. Invoice and delivery slip
items copy name and unit at issue time instead of referencing it.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import Numeric, String, Text
from src.domain.base import BaseModel, BigIntegerKey


class Product(BaseModel, table=True):
    __tablename__ = "products"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntegerKey, primary_key=True, autoincrement=True),
    )

    name: str = Field(sa_column=Column(String(255), nullable=False))

    description: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    unit: str = Field(
        default="adet",
        sa_column=Column(String(20), nullable=False, default="adet"),
        description="Unit of measure (adet, metre, kg)"
    )

    price: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Current list price"
    )

    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=datetime.utcnow)

    updated_at: datetime = Field(default_factory=datetime.utcnow)
