"""Dashboard API Routes

Read-only figures; sales users are always scoped to themselves.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.customer_repository import SqlAlchemyCustomerRepository
from src.adapter.repositories.order_repository import SqlAlchemyOrderRepository
from src.adapter.repositories.visit_repository import SqlAlchemyVisitRepository
from src.app.use_cases.dashboard.dtos import DashboardStatsDTO, RecentOrdersResponseDTO
from src.app.use_cases.dashboard.get_dashboard_stats import GetDashboardStats
from src.app.use_cases.dashboard.get_recent_orders import GetRecentOrders
from src.depends import CurrentUser, get_current_user, get_session

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


def _scope(user: CurrentUser, requested: Optional[str]) -> Optional[str]:
    return user.user_id if user.is_sales else requested


@router.get("/stats", response_model=DashboardStatsDTO)
async def get_stats(
    user_id: Optional[str] = Query(default=None, description="Sales person scope (non-sales roles)"),
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(get_current_user),
):
    use_case = GetDashboardStats(SqlAlchemyOrderRepository(session), SqlAlchemyVisitRepository(session))
    result = await use_case.execute(user_id=_scope(user, user_id))
    return result.value


@router.get("/recent-orders", response_model=RecentOrdersResponseDTO)
async def get_recent_orders(
    limit: int = Query(default=10, ge=1, le=50),
    user_id: Optional[str] = Query(default=None),
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(get_current_user),
):
    use_case = GetRecentOrders(SqlAlchemyOrderRepository(session), SqlAlchemyCustomerRepository(session))
    result = await use_case.execute(limit=limit, user_id=_scope(user, user_id))
    return result.value
