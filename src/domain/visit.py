"""Visit Domain Entity

Field visit by a sales person; read by the dashboard only.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, ForeignKey, String, Text
from src.domain.base import BaseModel, BigIntegerKey


class Visit(BaseModel, table=True):
    __tablename__ = "visits"
    __table_args__ = (
        Index('ix_visits_sales_person_date', 'sales_person_id', 'visit_date'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntegerKey, primary_key=True, autoincrement=True),
    )

    sales_person_id: str = Field(description="User ID of the visiting sales person")

    customer_id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigInteger, ForeignKey("customers.id"), nullable=True),
    )

    visit_type: str = Field(
        sa_column=Column(String(50), nullable=False),
        description="new_customer, existing_customer or follow_up"
    )

    outcome: Optional[str] = Field(default=None, sa_column=Column(String(50), nullable=True))

    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    visit_date: datetime = Field(default_factory=datetime.utcnow)

    created_at: datetime = Field(default_factory=datetime.utcnow)
