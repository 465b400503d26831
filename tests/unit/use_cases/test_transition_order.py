"""Unit tests for TransitionOrder and UpdateOrderItems use cases"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.orders.dtos import (
    OrderItemInputDTO,
    TransitionOrderCommandDTO,
    UpdateOrderItemsCommandDTO,
)
from src.app.use_cases.orders.transition_order import TransitionOrder
from src.app.use_cases.orders.update_order_items import UpdateOrderItems
from src.domain.errors import ErrorCode
from src.domain.order import OrderStatus
from src.domain.order_lifecycle import OrderLifecycle


@pytest.fixture
def mock_order_repo():
    repo = MagicMock()
    repo.update = AsyncMock(side_effect=lambda order: order)
    repo.get_items = AsyncMock(return_value=[])
    repo.replace_items = AsyncMock(side_effect=lambda order_id, items: items)
    return repo


@pytest.fixture
def mock_product_repo(sample_products):
    repo = MagicMock()
    repo.get_by_ids = AsyncMock(
        side_effect=lambda ids: [sample_products[i] for i in ids if i in sample_products]
    )
    return repo


@pytest.mark.asyncio
class TestTransitionOrder:

    async def test_moves_order_and_stamps_milestone(self, mock_uow, mock_order_repo, make_order):
        # Arrange
        order = make_order(10, status=OrderStatus.PENDING)
        mock_order_repo.get_by_id = AsyncMock(return_value=order)
        use_case = TransitionOrder(mock_uow, mock_order_repo, OrderLifecycle(strict=True))

        # Act
        result = await use_case.execute(
            TransitionOrderCommandDTO(order_id=10, target_status="production", production_notes="Line 2")
        )

        # Assert
        assert result.is_ok()
        assert result.value.status == "production"
        assert result.value.production_started_at is not None
        assert result.value.production_notes == "Line 2"
        mock_order_repo.get_by_id.assert_called_once_with(10, for_update=True)
        mock_uow.set_lock_timeout.assert_called_once()
        mock_uow.commit.assert_called_once()

    async def test_order_not_found(self, mock_uow, mock_order_repo):
        mock_order_repo.get_by_id = AsyncMock(return_value=None)
        use_case = TransitionOrder(mock_uow, mock_order_repo, OrderLifecycle())

        result = await use_case.execute(TransitionOrderCommandDTO(order_id=99, target_status="production"))

        assert result.is_err()
        assert result.error.code == ErrorCode.ORDER_NOT_FOUND
        mock_uow.rollback.assert_called_once()

    async def test_delivered_order_is_locked(self, mock_uow, mock_order_repo, make_order):
        order = make_order(10, status=OrderStatus.DELIVERED)
        mock_order_repo.get_by_id = AsyncMock(return_value=order)
        use_case = TransitionOrder(mock_uow, mock_order_repo, OrderLifecycle(strict=False))

        result = await use_case.execute(TransitionOrderCommandDTO(order_id=10, target_status="cancelled"))

        assert result.is_err()
        assert result.error.code == ErrorCode.ORDER_LOCKED
        mock_order_repo.update.assert_not_called()
        mock_uow.commit.assert_not_called()

    async def test_delivery_requires_recipient(self, mock_uow, mock_order_repo, make_order):
        order = make_order(10, status=OrderStatus.SHIPPING)
        mock_order_repo.get_by_id = AsyncMock(return_value=order)
        use_case = TransitionOrder(mock_uow, mock_order_repo, OrderLifecycle())

        result = await use_case.execute(TransitionOrderCommandDTO(order_id=10, target_status="delivered"))

        assert result.is_err()
        assert result.error.code == ErrorCode.MISSING_RECIPIENT
        assert order.status == OrderStatus.SHIPPING

    async def test_unknown_status(self, mock_uow, mock_order_repo, make_order):
        mock_order_repo.get_by_id = AsyncMock(return_value=make_order(10))
        use_case = TransitionOrder(mock_uow, mock_order_repo, OrderLifecycle())

        result = await use_case.execute(TransitionOrderCommandDTO(order_id=10, target_status="lost"))

        assert result.is_err()
        assert result.error.code == ErrorCode.INVALID_STATUS


@pytest.mark.asyncio
class TestUpdateOrderItems:

    async def test_replaces_items_and_recomputes_total(
        self, mock_uow, mock_order_repo, mock_product_repo, make_order
    ):
        # Arrange
        order = make_order(10, status=OrderStatus.PRODUCTION, total="350.00")
        mock_order_repo.get_by_id = AsyncMock(return_value=order)
        use_case = UpdateOrderItems(mock_uow, mock_order_repo, mock_product_repo)

        # Act
        result = await use_case.execute(
            UpdateOrderItemsCommandDTO(
                order_id=10,
                items=[OrderItemInputDTO(product_id=7, quantity=5, unit_price=Decimal("90"))],
            )
        )

        # Assert
        assert result.is_ok()
        assert result.value.total_amount == Decimal("450.00")
        assert len(result.value.items) == 1
        mock_order_repo.replace_items.assert_called_once()
        mock_uow.commit.assert_called_once()

    async def test_shipping_order_is_locked(self, mock_uow, mock_order_repo, mock_product_repo, make_order):
        """Orders past production keep their items and total"""
        # Arrange
        order = make_order(10, status=OrderStatus.SHIPPING, total="350.00")
        mock_order_repo.get_by_id = AsyncMock(return_value=order)
        use_case = UpdateOrderItems(mock_uow, mock_order_repo, mock_product_repo)

        # Act
        result = await use_case.execute(
            UpdateOrderItemsCommandDTO(
                order_id=10,
                items=[OrderItemInputDTO(product_id=7, quantity=1)],
            )
        )

        # Assert
        assert result.is_err()
        assert result.error.code == ErrorCode.ORDER_LOCKED
        assert order.total_amount == Decimal("350.00")
        mock_order_repo.replace_items.assert_not_called()
        mock_uow.rollback.assert_called_once()
