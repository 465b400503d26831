"""Unit tests for dashboard figures"""

import pytest
from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.dashboard.get_dashboard_stats import GetDashboardStats, month_start, percentage
from src.app.use_cases.dashboard.get_recent_orders import GetRecentOrders
from src.domain.order import OrderStatus


class TestPercentage:

    @pytest.mark.parametrize(
        "part,whole,expected",
        [
            (0, 0, "0.0"),
            (1, 3, "33.3"),
            (2, 3, "66.7"),
            (1, 8, "12.5"),
            (5, 5, "100.0"),
        ],
    )
    def test_rounds_half_up_to_one_decimal(self, part, whole, expected):
        assert percentage(part, whole) == Decimal(expected)

    def test_month_start(self):
        assert month_start(datetime(2024, 5, 17, 13, 45)) == datetime(2024, 5, 1)


@pytest.fixture
def mock_order_repo():
    counts = {
        OrderStatus.PENDING: 2,
        OrderStatus.PRODUCTION: 1,
        OrderStatus.PRODUCTION_READY: 1,
        OrderStatus.SHIPPING: 3,
        OrderStatus.DELIVERED: 4,
    }
    repo = MagicMock()
    repo.count_by_status = AsyncMock(
        side_effect=lambda statuses, sales_person_id=None: sum(counts.get(s, 0) for s in statuses)
    )
    repo.sum_delivered_since = AsyncMock(return_value=Decimal("4200.00"))
    repo.count_created_since = AsyncMock(
        side_effect=lambda since, sales_person_id=None, status=None: 3 if status else 8
    )
    return repo


@pytest.fixture
def mock_visit_repo():
    repo = MagicMock()
    repo.count_between = AsyncMock(return_value=5)
    return repo


@pytest.mark.asyncio
class TestGetDashboardStats:

    async def test_bundles_all_figures(self, mock_order_repo, mock_visit_repo):
        # Arrange
        now = datetime(2024, 5, 17, 13, 45)

        # Act
        result = await GetDashboardStats(mock_order_repo, mock_visit_repo).execute("user_42", now)

        # Assert
        assert result.is_ok()
        stats = result.value
        assert stats.user_id == "user_42"
        assert stats.daily_visits == 5
        assert stats.active_orders == 7
        assert stats.monthly_sales == Decimal("4200.00")
        assert stats.delivery_rate == Decimal("37.5")
        assert stats.pending_orders == 2
        assert stats.production_orders == 2
        assert stats.shipping_orders == 3
        assert stats.delivered_orders == 4

        mock_order_repo.sum_delivered_since.assert_called_once_with(
            datetime(2024, 5, 1), sales_person_id="user_42"
        )
        start, end = mock_visit_repo.count_between.call_args.args
        assert start == datetime(2024, 5, 17)
        assert end == datetime(2024, 5, 18)

    async def test_no_orders_this_month_means_zero_rate(self, mock_visit_repo):
        order_repo = MagicMock()
        order_repo.count_created_since = AsyncMock(return_value=0)

        rate = await GetDashboardStats(order_repo, mock_visit_repo).delivery_rate(None, datetime(2024, 5, 2))

        assert rate == Decimal("0.0")


@pytest.mark.asyncio
class TestGetRecentOrders:

    async def test_includes_company_names(self, make_order, sample_customer):
        order_repo = MagicMock()
        order_repo.list_orders = AsyncMock(return_value=[make_order(2), make_order(1)])
        customer_repo = MagicMock()
        customer_repo.get_by_id = AsyncMock(return_value=sample_customer)

        result = await GetRecentOrders(order_repo, customer_repo).execute(limit=5, user_id="user_42")

        assert [o.order_id for o in result.value.orders] == [2, 1]
        assert result.value.orders[0].company_name == "Yildiz Ambalaj"
        order_repo.list_orders.assert_called_once_with(sales_person_id="user_42", limit=5)
        customer_repo.get_by_id.assert_called_once_with(3)
