"""Order Item Domain Entity"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, CheckConstraint, ForeignKey, Integer, Numeric
from src.domain.base import BaseModel, BigIntegerKey


class OrderItem(BaseModel, table=True):
    """
    Order Item - One product line on an order

    Domain Rules:
    - Owned by exactly one order, replaced as a set when edited
    - quantity > 0
    - total_price = quantity * unit_price
    """

    __tablename__ = "order_items"
    __table_args__ = (
        Index('ix_order_items_order_id', 'order_id'),
        CheckConstraint('quantity > 0', name='order_item_quantity_positive'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntegerKey, primary_key=True, autoincrement=True),
    )

    order_id: int = Field(
        sa_column=Column(BigInteger, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Order"
    )

    product_id: int = Field(
        sa_column=Column(BigInteger, ForeignKey("products.id"), nullable=False),
        description="Foreign key to Product"
    )

    quantity: int = Field(sa_column=Column(Integer, nullable=False))

    unit_price: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False))

    total_price: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="quantity * unit_price"
    )

    created_at: datetime = Field(default_factory=datetime.utcnow)
