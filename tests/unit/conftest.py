import pytest
from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.domain.customer import Customer
from src.domain.order import Order, OrderStatus
from src.domain.order_item import OrderItem
from src.domain.product import Product


@pytest.fixture
def mock_uow():
    """Mock unit of work"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    uow.set_lock_timeout = AsyncMock()
    return uow


@pytest.fixture
def sample_customer():
    return Customer(
        id=3,
        company_name="Yildiz Ambalaj",
        email="info@yildiz.example",
        address="Organize Sanayi Bolgesi 4. Cadde No:12",
        created_at=datetime.utcnow(),
        updated_at=datetime.utcnow(),
    )


@pytest.fixture
def sample_products():
    return {
        7: Product(id=7, name="Karton Koli", unit="adet", price=Decimal("100.00")),
        9: Product(id=9, name="Strec Film", unit="rulo", price=Decimal("50.00")),
    }


@pytest.fixture
def make_order():
    """Factory for Order entities with sensible defaults"""

    def _make(
        order_id: int,
        status: OrderStatus = OrderStatus.PENDING,
        customer_id: int = 3,
        total: str = "0.00",
        invoice_id: int = None,
        delivered_at: datetime = None,
        created_at: datetime = None,
    ) -> Order:
        created = created_at or datetime(2024, 5, 1, 9, 0)
        return Order(
            id=order_id,
            order_number=f"SIP-2024-{order_id:06d}",
            customer_id=customer_id,
            sales_person_id="user_42",
            status=status,
            total_amount=Decimal(total),
            tax_amount=Decimal("0.00"),
            invoice_id=invoice_id,
            delivered_at=delivered_at,
            created_at=created,
            updated_at=created,
        )

    return _make


@pytest.fixture
def make_item():
    """Factory for OrderItem entities; total_price is quantity * unit_price"""

    def _make(item_id: int, order_id: int, product_id: int, quantity: int, unit_price: str) -> OrderItem:
        price = Decimal(unit_price)
        return OrderItem(
            id=item_id,
            order_id=order_id,
            product_id=product_id,
            quantity=quantity,
            unit_price=price,
            total_price=price * quantity,
        )

    return _make
