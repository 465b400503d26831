"""Unit tests for CreateOrder use case

Tests cover:
- Order created pending with computed total
- Missing customer / product
- Order number collision retry
"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.repositories.exceptions import DuplicateOrderNumberError
from src.app.use_cases.orders.create_order import CreateOrder
from src.app.use_cases.orders.dtos import CreateOrderCommandDTO, OrderItemInputDTO
from src.domain.errors import ErrorCode
from src.domain.order import OrderStatus


@pytest.fixture
def mock_customer_repo(sample_customer):
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=sample_customer)
    return repo


@pytest.fixture
def mock_product_repo(sample_products):
    repo = MagicMock()
    repo.get_by_ids = AsyncMock(
        side_effect=lambda ids: [sample_products[i] for i in ids if i in sample_products]
    )
    return repo


@pytest.fixture
def mock_order_repo():
    repo = MagicMock()
    repo.generate_order_number = AsyncMock(side_effect=["SIP-2024-000101", "SIP-2024-000102"])

    async def create(order, items):
        order.id = 55
        for index, item in enumerate(items, start=1):
            item.id = index
            item.order_id = order.id
        return order

    repo.create = AsyncMock(side_effect=create)
    return repo


@pytest.fixture
def create_use_case(mock_uow, mock_customer_repo, mock_order_repo, mock_product_repo):
    return CreateOrder(
        uow=mock_uow,
        customer_repo=mock_customer_repo,
        order_repo=mock_order_repo,
        product_repo=mock_product_repo,
    )


@pytest.fixture
def sample_command():
    return CreateOrderCommandDTO(
        customer_id=3,
        sales_person_id="user_42",
        items=[
            OrderItemInputDTO(product_id=7, quantity=3, unit_price=Decimal("100")),
            OrderItemInputDTO(product_id=9, quantity=1, unit_price=Decimal("50")),
        ],
    )


@pytest.mark.asyncio
class TestCreateOrder:

    async def test_creates_pending_order_with_total(
        self, create_use_case, sample_command, mock_order_repo, mock_uow
    ):
        # Act
        result = await create_use_case.execute(sample_command)

        # Assert
        assert result.is_ok()
        response = result.value
        assert response.order_id == 55
        assert response.order_number == "SIP-2024-000101"
        assert response.status == OrderStatus.PENDING.value
        assert response.total_amount == Decimal("350.00")
        assert [i.total_price for i in response.items] == [Decimal("300.00"), Decimal("50.00")]
        assert response.production_started_at is None
        assert response.delivered_at is None
        mock_uow.commit.assert_called_once()

    async def test_catalog_price_used_when_no_unit_price(self, create_use_case, mock_uow):
        command = CreateOrderCommandDTO(
            customer_id=3,
            sales_person_id="user_42",
            items=[OrderItemInputDTO(product_id=9, quantity=4)],
        )

        result = await create_use_case.execute(command)

        assert result.is_ok()
        assert result.value.items[0].unit_price == Decimal("50.00")
        assert result.value.total_amount == Decimal("200.00")

    async def test_delivery_address_defaults_to_customer_address(
        self, create_use_case, sample_command, mock_order_repo, sample_customer
    ):
        await create_use_case.execute(sample_command)

        created_order = mock_order_repo.create.call_args.args[0]
        assert created_order.delivery_address == sample_customer.address

    async def test_unknown_customer(self, create_use_case, sample_command, mock_customer_repo, mock_uow):
        mock_customer_repo.get_by_id = AsyncMock(return_value=None)

        result = await create_use_case.execute(sample_command)

        assert result.is_err()
        assert result.error.code == ErrorCode.CUSTOMER_NOT_FOUND
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()

    async def test_unknown_product(self, create_use_case, mock_order_repo, mock_uow):
        command = CreateOrderCommandDTO(
            customer_id=3,
            sales_person_id="user_42",
            items=[OrderItemInputDTO(product_id=404, quantity=1)],
        )

        result = await create_use_case.execute(command)

        assert result.is_err()
        assert result.error.code == ErrorCode.PRODUCT_NOT_FOUND
        mock_order_repo.create.assert_not_called()

    async def test_order_number_collision_is_retried(
        self, create_use_case, sample_command, mock_order_repo, mock_uow
    ):
        # Arrange - first insert collides
        async def create(order, items):
            if order.order_number == "SIP-2024-000101":
                raise DuplicateOrderNumberError("taken")
            order.id = 56
            return order

        mock_order_repo.create = AsyncMock(side_effect=create)

        # Act
        result = await create_use_case.execute(sample_command)

        # Assert
        assert result.is_ok()
        assert result.value.order_number == "SIP-2024-000102"
        assert mock_order_repo.create.call_count == 2
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_called_once()

    async def test_unexpected_failure_is_wrapped(
        self, create_use_case, sample_command, mock_order_repo, mock_uow
    ):
        mock_order_repo.create = AsyncMock(side_effect=RuntimeError("connection reset"))

        result = await create_use_case.execute(sample_command)

        assert result.is_err()
        assert result.error.code == "CREATE_ORDER_FAILED"
        assert result.error.reason == "connection reset"
        mock_uow.rollback.assert_called_once()
