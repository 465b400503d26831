import pytest
import pytest_asyncio
from datetime import datetime
from decimal import Decimal
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain  # noqa: F401  registers every table on SQLModel.metadata
from src.depends import get_session
from src.domain.customer import Customer
from src.domain.order import Order, OrderStatus
from src.domain.order_item import OrderItem
from src.domain.product import Product


@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path):
    """Create test database engine on a throwaway SQLite file"""
    test_db_url = f"sqlite+aiosqlite:///{tmp_path / 'orders_test.db'}"

    engine = create_async_engine(test_db_url, echo=False, future=True)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Create a new database session for each test"""
    async with session_factory() as session:
        yield session


@pytest.fixture
def app(db_session):
    """FastAPI app bound to the test session"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    # Override the session dependency to use test session
    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session
    return app


@pytest_asyncio.fixture
async def client(app):
    """Create test client with database session override"""
    # Use ASGITransport for httpx AsyncClient
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def catalog(db_session):
    """One customer and two products, committed"""
    customer = Customer(
        company_name="Yildiz Ambalaj",
        email="info@yildiz.example",
        address="Organize Sanayi Bolgesi 4. Cadde No:12",
        sales_person_id="user_42",
    )
    other = Customer(company_name="Deniz Gida", address="Liman Yolu 8")
    box = Product(name="Karton Koli", unit="adet", price=Decimal("100.00"))
    film = Product(name="Strec Film", unit="rulo", price=Decimal("50.00"))
    db_session.add_all([customer, other, box, film])
    await db_session.commit()
    for entity in (customer, other, box, film):
        await db_session.refresh(entity)
    return {"customer": customer, "other_customer": other, "box": box, "film": film}


@pytest.fixture
def add_delivered_order(db_session):
    """Insert a delivered, uninvoiced order with the given (product, quantity, price) lines"""
    counter = {"n": 0}

    async def _add(customer_id: int, lines, delivered_at: datetime = None) -> Order:
        counter["n"] += 1
        total = sum((Decimal(price) * qty for _, qty, price in lines), Decimal("0.00"))
        delivered = delivered_at or datetime.utcnow()
        order = Order(
            order_number=f"SIP-2024-9{counter['n']:05d}",
            customer_id=customer_id,
            sales_person_id="user_42",
            status=OrderStatus.DELIVERED,
            total_amount=total,
            delivery_recipient="Ayse K.",
            delivered_at=delivered,
        )
        db_session.add(order)
        await db_session.flush()
        db_session.add_all(
            [
                OrderItem(
                    order_id=order.id,
                    product_id=product.id,
                    quantity=qty,
                    unit_price=Decimal(price),
                    total_price=Decimal(price) * qty,
                )
                for product, qty, price in lines
            ]
        )
        await db_session.commit()
        await db_session.refresh(order)
        return order

    return _add
