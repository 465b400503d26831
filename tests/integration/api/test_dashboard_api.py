"""Integration tests for the Dashboard API"""

import pytest
from datetime import datetime, timedelta
from decimal import Decimal

from src.adapter.repositories.visit_repository import SqlAlchemyVisitRepository
from src.domain.order import Order, OrderStatus
from src.domain.visit import Visit

ADMIN = {"X-User-Id": "admin_1", "X-User-Role": "admin"}
SALES_7 = {"X-User-Id": "user_7", "X-User-Role": "sales"}


@pytest.fixture
def add_order(db_session):
    async def _add(customer_id: int, number: str, status: OrderStatus, sales_person_id: str, total: str):
        db_session.add(
            Order(
                order_number=number,
                customer_id=customer_id,
                sales_person_id=sales_person_id,
                status=status,
                total_amount=Decimal(total),
                delivered_at=datetime.utcnow() if status == OrderStatus.DELIVERED else None,
            )
        )
        await db_session.commit()

    return _add


@pytest.mark.asyncio
class TestDashboardStats:

    async def test_stats_for_everyone(self, client, catalog, add_order):
        # Arrange
        customer_id = catalog["customer"].id
        await add_order(customer_id, "SIP-2024-100001", OrderStatus.DELIVERED, "user_42", "300.00")
        await add_order(customer_id, "SIP-2024-100002", OrderStatus.PRODUCTION, "user_42", "100.00")
        await add_order(customer_id, "SIP-2024-100003", OrderStatus.PRODUCTION_READY, "user_7", "100.00")
        await add_order(customer_id, "SIP-2024-100004", OrderStatus.PENDING, "user_7", "50.00")

        # Act
        response = await client.get("/api/dashboard/stats", headers=ADMIN)

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["user_id"] is None
        assert body["active_orders"] == 3
        assert body["pending_orders"] == 1
        assert body["production_orders"] == 2
        assert body["shipping_orders"] == 0
        assert body["delivered_orders"] == 1
        assert Decimal(body["monthly_sales"]) == Decimal("300")
        assert Decimal(body["delivery_rate"]) == Decimal("25.0")
        assert body["daily_visits"] == 0

    async def test_sales_user_is_scoped_to_themselves(self, client, catalog, add_order):
        customer_id = catalog["customer"].id
        await add_order(customer_id, "SIP-2024-100001", OrderStatus.DELIVERED, "user_42", "300.00")
        await add_order(customer_id, "SIP-2024-100004", OrderStatus.PENDING, "user_7", "50.00")

        response = await client.get("/api/dashboard/stats", params={"user_id": "user_42"}, headers=SALES_7)

        body = response.json()
        assert body["user_id"] == "user_7"
        assert body["delivered_orders"] == 0
        assert body["pending_orders"] == 1
        assert Decimal(body["delivery_rate"]) == Decimal("0")

    async def test_admin_may_pick_a_sales_person(self, client, catalog, add_order):
        customer_id = catalog["customer"].id
        await add_order(customer_id, "SIP-2024-100001", OrderStatus.DELIVERED, "user_42", "300.00")
        await add_order(customer_id, "SIP-2024-100004", OrderStatus.PENDING, "user_7", "50.00")

        response = await client.get("/api/dashboard/stats", params={"user_id": "user_42"}, headers=ADMIN)

        assert response.json()["delivered_orders"] == 1
        assert response.json()["pending_orders"] == 0

    async def test_daily_visits_count_externally_recorded_visits(self, client, db_session, catalog):
        """
        Given: visits recorded straight into the database (no API creates them)
        When: GET /dashboard/stats as admin and as one sales person
        Then: today's visits are counted, yesterday's are not, sales scope applies
        """
        # Arrange
        repo = SqlAlchemyVisitRepository(db_session)
        customer_id = catalog["customer"].id
        now = datetime.utcnow()
        for sales_person_id, visit_date in (
            ("user_7", now),
            ("user_42", now),
            ("user_7", now - timedelta(days=1)),
        ):
            await repo.create(
                Visit(
                    sales_person_id=sales_person_id,
                    customer_id=customer_id,
                    visit_type="existing_customer",
                    visit_date=visit_date,
                )
            )
        await db_session.commit()

        # Act
        everyone = await client.get("/api/dashboard/stats", headers=ADMIN)
        own = await client.get("/api/dashboard/stats", headers=SALES_7)

        # Assert
        assert everyone.json()["daily_visits"] == 2
        assert own.json()["daily_visits"] == 1

    async def test_stats_require_identity(self, client):
        response = await client.get("/api/dashboard/stats")

        assert response.status_code == 401


@pytest.mark.asyncio
class TestRecentOrders:

    async def test_recent_orders_newest_first(self, client, catalog, add_order):
        # Arrange
        customer_id = catalog["customer"].id
        for n in range(1, 4):
            await add_order(customer_id, f"SIP-2024-20000{n}", OrderStatus.PENDING, "user_42", "10.00")

        # Act
        response = await client.get("/api/dashboard/recent-orders", params={"limit": 2}, headers=ADMIN)

        # Assert
        assert response.status_code == 200
        orders = response.json()["orders"]
        assert len(orders) == 2
        assert orders[0]["company_name"] == "Yildiz Ambalaj"
        assert orders[0]["created_at"] >= orders[1]["created_at"]

    async def test_limit_is_bounded(self, client):
        response = await client.get("/api/dashboard/recent-orders", params={"limit": 500}, headers=ADMIN)

        assert response.status_code == 422


@pytest.mark.asyncio
class TestHealth:

    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
