"""Integration tests for delivery slips with real repositories"""

import pytest
from decimal import Decimal

from sqlmodel.ext.asyncio.session import AsyncSession
from src.adapter.repositories import (
    SqlAlchemyAccountTransactionRepository,
    SqlAlchemyCustomerRepository,
    SqlAlchemyDeliverySlipRepository,
    SqlAlchemyInvoiceRepository,
    SqlAlchemyOrderRepository,
    SqlAlchemyProductRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.delivery.change_delivery_slip_status import ChangeDeliverySlipStatus
from src.app.use_cases.delivery.create_delivery_slip import CreateDeliverySlip
from src.app.use_cases.delivery.dtos import (
    ChangeDeliverySlipStatusCommandDTO,
    CreateDeliverySlipCommandDTO,
    DeliverySlipItemInputDTO,
)
from src.app.use_cases.invoicing.create_bulk_invoice import CreateBulkInvoice
from src.app.use_cases.invoicing.dtos import CreateBulkInvoiceCommandDTO
from src.domain.errors import ErrorCode


def create_slip_use_case(session: AsyncSession) -> CreateDeliverySlip:
    return CreateDeliverySlip(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyOrderRepository(session),
        SqlAlchemyProductRepository(session),
        SqlAlchemyDeliverySlipRepository(session),
    )


@pytest.mark.asyncio
class TestDeliverySlipFlow:

    async def test_partial_slips_until_nothing_is_left(
        self, db_session: AsyncSession, catalog, add_delivered_order
    ):
        # Arrange
        order = await add_delivered_order(catalog["customer"].id, [(catalog["box"], 10, "100.00")])
        box_id = catalog["box"].id
        customer_address = catalog["customer"].address
        use_case = create_slip_use_case(db_session)

        # Act
        first = await use_case.execute(
            CreateDeliverySlipCommandDTO(
                order_id=order.id,
                items=[DeliverySlipItemInputDTO(product_id=box_id, delivered_quantity=4)],
                driver_name="Kemal",
            )
        )
        second = await use_case.execute(CreateDeliverySlipCommandDTO(order_id=order.id))
        third = await use_case.execute(CreateDeliverySlipCommandDTO(order_id=order.id))

        # Assert
        assert first.is_ok(), first.error
        assert first.value.items[0].delivered_quantity == 4
        assert first.value.items[0].total_price == Decimal("400.00")
        assert first.value.delivery_address == customer_address
        assert first.value.delivery_slip_number.startswith("IRS-")
        assert second.is_ok(), second.error
        assert second.value.items[0].delivered_quantity == 6
        assert third.is_err()
        assert third.error.code == ErrorCode.INVALID_ITEMS

    async def test_slip_lifecycle(self, db_session: AsyncSession, catalog, add_delivered_order):
        order = await add_delivered_order(catalog["customer"].id, [(catalog["film"], 2, "50.00")])
        created = await create_slip_use_case(db_session).execute(CreateDeliverySlipCommandDTO(order_id=order.id))
        change = ChangeDeliverySlipStatus(
            SqlAlchemyUnitOfWork(db_session), SqlAlchemyDeliverySlipRepository(db_session)
        )

        delivered = await change.execute(
            ChangeDeliverySlipStatusCommandDTO(
                slip_id=created.value.slip_id, target_status="delivered", recipient_name="Ayse"
            )
        )
        returned = await change.execute(
            ChangeDeliverySlipStatusCommandDTO(slip_id=created.value.slip_id, target_status="returned")
        )

        assert delivered.is_ok(), delivered.error
        assert returned.is_ok(), returned.error
        assert returned.value.returned_at is not None
        assert returned.value.delivered_at is not None

    async def test_invoicing_links_existing_slips(self, db_session: AsyncSession, catalog, add_delivered_order):
        # Arrange
        customer = catalog["customer"]
        order = await add_delivered_order(customer.id, [(catalog["box"], 1, "100.00")])
        slip = await create_slip_use_case(db_session).execute(CreateDeliverySlipCommandDTO(order_id=order.id))
        assert slip.is_ok()

        # Act
        invoice = await CreateBulkInvoice(
            SqlAlchemyUnitOfWork(db_session),
            SqlAlchemyCustomerRepository(db_session),
            SqlAlchemyOrderRepository(db_session),
            SqlAlchemyProductRepository(db_session),
            SqlAlchemyInvoiceRepository(db_session),
            SqlAlchemyDeliverySlipRepository(db_session),
            SqlAlchemyAccountTransactionRepository(db_session),
        ).execute(CreateBulkInvoiceCommandDTO(customer_id=customer.id, order_ids=[order.id]))

        # Assert
        assert invoice.is_ok(), invoice.error
        linked = await SqlAlchemyDeliverySlipRepository(db_session).get_by_id(slip.value.slip_id)
        assert linked.invoice_id == invoice.value.invoice_id
