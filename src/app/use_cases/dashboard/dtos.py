"""Data Transfer Objects for Dashboard Use Cases

Plain numbers and strings only; the dashboard never receives entities.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field


class DashboardStatsDTO(BaseModel):
    """
    Dashboard figures computed at call time

    production_orders counts both production and production_ready.
    """

    user_id: Optional[str] = Field(default=None, description="Sales person scope (None = everyone)")
    daily_visits: int
    active_orders: int
    monthly_sales: Decimal
    delivery_rate: Decimal = Field(..., description="Percentage, one decimal")
    pending_orders: int
    production_orders: int
    shipping_orders: int
    delivered_orders: int
    computed_at: datetime


class RecentOrderDTO(BaseModel):
    order_id: int
    order_number: str
    customer_id: int
    company_name: str
    sales_person_id: str
    status: str
    total_amount: Decimal
    created_at: datetime


class RecentOrdersResponseDTO(BaseModel):
    orders: List[RecentOrderDTO]
