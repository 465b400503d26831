"""Unit tests for delivery slip use cases"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.delivery.change_delivery_slip_status import ChangeDeliverySlipStatus
from src.app.use_cases.delivery.create_delivery_slip import CreateDeliverySlip
from src.app.use_cases.delivery.dtos import (
    ChangeDeliverySlipStatusCommandDTO,
    CreateDeliverySlipCommandDTO,
    DeliverySlipItemInputDTO,
)
from src.domain.delivery_slip import DeliverySlip, DeliverySlipItem, DeliverySlipStatus
from src.domain.errors import ErrorCode
from src.domain.order import OrderStatus


def make_slip(slip_id: int, status: DeliverySlipStatus = DeliverySlipStatus.PREPARED) -> DeliverySlip:
    return DeliverySlip(
        id=slip_id,
        delivery_slip_number=f"IRS-20240501-0900000{slip_id}",
        order_id=10,
        customer_id=3,
        status=status,
    )


def make_slip_item(slip_id: int, product_id: int, delivered: int) -> DeliverySlipItem:
    return DeliverySlipItem(
        delivery_slip_id=slip_id,
        product_id=product_id,
        product_name="Karton Koli",
        unit="adet",
        quantity=10,
        delivered_quantity=delivered,
        unit_price=Decimal("100.00"),
        total_price=Decimal("100.00") * delivered,
    )


@pytest.fixture
def order(make_order):
    order = make_order(10, status=OrderStatus.SHIPPING, total="1050.00")
    order.delivery_address = "Depo 2"
    return order


@pytest.fixture
def repos(order, make_item, sample_customer, sample_products):
    customer_repo = MagicMock()
    customer_repo.get_by_id = AsyncMock(return_value=sample_customer)

    order_repo = MagicMock()
    order_repo.get_by_id = AsyncMock(return_value=order)
    order_repo.get_items = AsyncMock(
        return_value=[make_item(1, 10, 7, 10, "100.00"), make_item(2, 10, 9, 1, "50.00")]
    )

    product_repo = MagicMock()
    product_repo.get_by_ids = AsyncMock(
        side_effect=lambda ids: [sample_products[i] for i in ids if i in sample_products]
    )

    slip_repo = MagicMock()
    slip_repo.list_by_order = AsyncMock(return_value=[])
    slip_repo.get_items = AsyncMock(return_value=[])
    slip_repo.generate_slip_number = AsyncMock(return_value="IRS-20240501-090000123")

    async def create(slip, items):
        slip.id = 5
        return slip

    slip_repo.create = AsyncMock(side_effect=create)
    return customer_repo, order_repo, product_repo, slip_repo


@pytest.fixture
def create_slip_use_case(mock_uow, repos):
    return CreateDeliverySlip(mock_uow, *repos)


@pytest.mark.asyncio
class TestCreateDeliverySlip:

    async def test_ships_everything_remaining_by_default(self, create_slip_use_case, mock_uow):
        result = await create_slip_use_case.execute(CreateDeliverySlipCommandDTO(order_id=10))

        assert result.is_ok()
        slip = result.value
        assert slip.status == "prepared"
        assert slip.delivery_address == "Depo 2"
        quantities = {item.product_id: item.delivered_quantity for item in slip.items}
        assert quantities == {7: 10, 9: 1}
        mock_uow.commit.assert_called_once()

    async def test_partial_delivery_respects_earlier_slips(self, create_slip_use_case, repos):
        # Arrange - 4 of product 7 already on the way
        slip_repo = repos[3]
        slip_repo.list_by_order = AsyncMock(return_value=[make_slip(1)])
        slip_repo.get_items = AsyncMock(return_value=[make_slip_item(1, 7, 4)])

        # Act
        result = await create_slip_use_case.execute(
            CreateDeliverySlipCommandDTO(
                order_id=10, items=[DeliverySlipItemInputDTO(product_id=7, delivered_quantity=7)]
            )
        )

        # Assert
        assert result.is_err()
        assert result.error.code == ErrorCode.INVALID_DELIVERED_QUANTITY

    async def test_returned_slips_free_their_quantities(self, create_slip_use_case, repos):
        slip_repo = repos[3]
        slip_repo.list_by_order = AsyncMock(return_value=[make_slip(1, DeliverySlipStatus.RETURNED)])
        slip_repo.get_items = AsyncMock(return_value=[make_slip_item(1, 7, 10)])

        result = await create_slip_use_case.execute(
            CreateDeliverySlipCommandDTO(
                order_id=10, items=[DeliverySlipItemInputDTO(product_id=7, delivered_quantity=10)]
            )
        )

        assert result.is_ok()
        assert result.value.items[0].total_price == Decimal("1000.00")

    async def test_product_not_on_order(self, create_slip_use_case):
        result = await create_slip_use_case.execute(
            CreateDeliverySlipCommandDTO(
                order_id=10, items=[DeliverySlipItemInputDTO(product_id=404, delivered_quantity=1)]
            )
        )

        assert result.is_err()
        assert result.error.code == ErrorCode.INVALID_ITEMS

    async def test_order_in_production_cannot_ship(self, create_slip_use_case, order, mock_uow):
        order.status = OrderStatus.PRODUCTION

        result = await create_slip_use_case.execute(CreateDeliverySlipCommandDTO(order_id=10))

        assert result.is_err()
        assert result.error.code == ErrorCode.ORDER_NOT_SHIPPABLE
        mock_uow.rollback.assert_called_once()


@pytest.mark.asyncio
class TestMergedProductLines:

    @pytest.fixture(autouse=True)
    def two_prices_for_one_product(self, repos, make_item):
        # Product 7 ordered twice: 2 @ 100 and 1 @ 110
        order_repo = repos[1]
        order_repo.get_items = AsyncMock(
            return_value=[make_item(1, 10, 7, 2, "100.00"), make_item(2, 10, 7, 1, "110.00")]
        )

    async def test_full_delivery_keeps_the_order_amount(self, create_slip_use_case):
        """
        Given: one product on two order lines at different prices
        When: everything is delivered on one slip
        Then: a single line at the weighted price whose total matches the order lines
        """
        # Act
        result = await create_slip_use_case.execute(CreateDeliverySlipCommandDTO(order_id=10))

        # Assert
        assert result.is_ok()
        [item] = result.value.items
        assert item.quantity == 3
        assert item.delivered_quantity == 3
        assert item.unit_price == Decimal("103.33")
        assert item.total_price == Decimal("310.00")

    async def test_partial_delivery_uses_the_weighted_price(self, create_slip_use_case):
        result = await create_slip_use_case.execute(
            CreateDeliverySlipCommandDTO(
                order_id=10, items=[DeliverySlipItemInputDTO(product_id=7, delivered_quantity=2)]
            )
        )

        [item] = result.value.items
        assert item.unit_price == Decimal("103.33")
        assert item.total_price == Decimal("206.66")


@pytest.mark.asyncio
class TestChangeDeliverySlipStatus:

    async def test_deliver_records_recipient(self, mock_uow):
        slip = make_slip(5)
        slip_repo = MagicMock()
        slip_repo.get_by_id = AsyncMock(return_value=slip)
        slip_repo.update = AsyncMock(side_effect=lambda s: s)
        slip_repo.get_items = AsyncMock(return_value=[])

        result = await ChangeDeliverySlipStatus(mock_uow, slip_repo).execute(
            ChangeDeliverySlipStatusCommandDTO(slip_id=5, target_status="delivered", recipient_name="Ayse")
        )

        assert result.is_ok()
        assert result.value.status == "delivered"
        assert result.value.recipient_name == "Ayse"
        assert result.value.delivered_at is not None
        mock_uow.commit.assert_called_once()

    async def test_deliver_without_recipient(self, mock_uow):
        slip_repo = MagicMock()
        slip_repo.get_by_id = AsyncMock(return_value=make_slip(5))

        result = await ChangeDeliverySlipStatus(mock_uow, slip_repo).execute(
            ChangeDeliverySlipStatusCommandDTO(slip_id=5, target_status="delivered")
        )

        assert result.is_err()
        assert result.error.code == ErrorCode.MISSING_RECIPIENT

    async def test_prepared_slip_cannot_be_returned(self, mock_uow):
        slip_repo = MagicMock()
        slip_repo.get_by_id = AsyncMock(return_value=make_slip(5))

        result = await ChangeDeliverySlipStatus(mock_uow, slip_repo).execute(
            ChangeDeliverySlipStatusCommandDTO(slip_id=5, target_status="returned")
        )

        assert result.is_err()
        assert result.error.code == ErrorCode.INVALID_DELIVERY_SLIP_STATUS
