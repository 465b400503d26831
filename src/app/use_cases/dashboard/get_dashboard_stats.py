"""Dashboard aggregator

Each figure is a separate parameterized read so it can be tested and
reused on its own; execute() bundles them for the dashboard endpoint.
"""

from datetime import date, datetime, time, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
from libs.result import Result, Return
from src.app.repositories.order_repository import OrderRepository
from src.app.repositories.visit_repository import VisitRepository
from src.domain.money import to_money
from src.domain.order import OrderStatus
from src.domain.order_lifecycle import ACTIVE_STATES
from .dtos import DashboardStatsDTO


def month_start(now: datetime) -> datetime:
    return datetime(now.year, now.month, 1)


def percentage(part: int, whole: int) -> Decimal:
    """part / whole as a percentage rounded half-up to one decimal; 0 when whole is 0"""
    if whole <= 0:
        return Decimal("0.0")
    return (Decimal(part) * 100 / Decimal(whole)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)


class GetDashboardStats:
    def __init__(self, order_repo: OrderRepository, visit_repo: VisitRepository):
        self.order_repo = order_repo
        self.visit_repo = visit_repo

    async def daily_visits(self, user_id: Optional[str] = None, day: Optional[date] = None) -> int:
        day = day or datetime.utcnow().date()
        start = datetime.combine(day, time.min)
        return await self.visit_repo.count_between(start, start + timedelta(days=1), sales_person_id=user_id)

    async def active_orders(self, user_id: Optional[str] = None) -> int:
        return await self.order_repo.count_by_status(ACTIVE_STATES, sales_person_id=user_id)

    async def monthly_sales(self, user_id: Optional[str] = None, now: Optional[datetime] = None) -> Decimal:
        """Sum of totals of orders delivered since the first of the current month"""
        now = now or datetime.utcnow()
        total = await self.order_repo.sum_delivered_since(month_start(now), sales_person_id=user_id)
        return to_money(total)

    async def delivery_rate(self, user_id: Optional[str] = None, now: Optional[datetime] = None) -> Decimal:
        """Delivered share of the orders created this month"""
        since = month_start(now or datetime.utcnow())
        total = await self.order_repo.count_created_since(since, sales_person_id=user_id)
        delivered = await self.order_repo.count_created_since(
            since, sales_person_id=user_id, status=OrderStatus.DELIVERED
        )
        return percentage(delivered, total)

    async def execute(
        self, user_id: Optional[str] = None, now: Optional[datetime] = None
    ) -> Result[DashboardStatsDTO]:
        now = now or datetime.utcnow()

        async def count(*statuses):
            return await self.order_repo.count_by_status(statuses, sales_person_id=user_id)

        return Return.ok(
            DashboardStatsDTO(
                user_id=user_id,
                daily_visits=await self.daily_visits(user_id, now.date()),
                active_orders=await self.active_orders(user_id),
                monthly_sales=await self.monthly_sales(user_id, now),
                delivery_rate=await self.delivery_rate(user_id, now),
                pending_orders=await count(OrderStatus.PENDING),
                production_orders=await count(OrderStatus.PRODUCTION, OrderStatus.PRODUCTION_READY),
                shipping_orders=await count(OrderStatus.SHIPPING),
                delivered_orders=await count(OrderStatus.DELIVERED),
                computed_at=now,
            )
        )
