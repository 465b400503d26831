"""CreateDeliverySlip Use Case

Prepares a proof-of-delivery document for all or part of an order.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.delivery_slip_repository import DeliverySlipRepository
from src.app.repositories.order_repository import OrderRepository
from src.app.repositories.product_repository import ProductRepository
from src.domain.delivery_slip import DeliverySlip, DeliverySlipItem, DeliverySlipStatus
from src.domain.errors import (
    DomainError,
    InvalidDeliveredQuantityError,
    InvalidItemsError,
    OrderNotFoundError,
    OrderNotShippableError,
)
from src.domain.money import line_total, to_money
from src.domain.order_lifecycle import SHIPPABLE_STATES
from .dtos import CreateDeliverySlipCommandDTO, DeliverySlipResponseDTO

logger = logging.getLogger(__name__)


@dataclass
class _ProductLine:
    product_id: int
    quantity: int
    amount: Decimal

    @property
    def unit_price(self) -> Decimal:
        """Quantity-weighted price across every order line of the product"""
        return to_money(self.amount / self.quantity) if self.quantity else to_money(0)


class CreateDeliverySlip:
    """
    Use Case: Prepare delivery slip

    Business Rules:
    1. Order must be production_ready, shipping or delivered (ORDER_NOT_SHIPPABLE)
    2. Lines of the same product are merged into one slip line priced at
       their quantity-weighted average
    3. delivered_quantity is between 0 and what is still undelivered,
       counting every earlier slip of the order that was not returned
    4. Product name and unit are copied onto the slip
    5. Slip starts in status=prepared and inherits the order's invoice link

    Flow:
    1. Lock order row (SELECT FOR UPDATE)
    2. Compute remaining quantity per product
    3. Validate requested quantities and build slip lines
    4. Insert slip with items and commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        customer_repo: CustomerRepository,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        slip_repo: DeliverySlipRepository,
    ):
        self.uow = uow
        self.customer_repo = customer_repo
        self.order_repo = order_repo
        self.product_repo = product_repo
        self.slip_repo = slip_repo

    async def execute(self, command: CreateDeliverySlipCommandDTO) -> Result[DeliverySlipResponseDTO]:
        try:
            await self.uow.set_lock_timeout()

            order = await self.order_repo.get_by_id(command.order_id, for_update=True)
            if not order:
                raise OrderNotFoundError(f"Order {command.order_id} not found")

            if order.status not in SHIPPABLE_STATES:
                raise OrderNotShippableError(
                    f"Order {order.order_number} is {order.status.value}; "
                    f"delivery slips need production_ready, shipping or delivered"
                )

            lines = self._merge_lines(await self.order_repo.get_items(order.id))
            remaining = await self._remaining_quantities(order.id, lines)

            if command.items is None:
                requested = {pid: qty for pid, qty in remaining.items() if qty > 0}
            else:
                requested = {}
                for entry in command.items:
                    if entry.product_id not in lines:
                        raise InvalidItemsError(
                            f"Product {entry.product_id} is not part of order {order.order_number}"
                        )
                    requested[entry.product_id] = requested.get(entry.product_id, 0) + entry.delivered_quantity

            for product_id, quantity in requested.items():
                if quantity > remaining[product_id]:
                    raise InvalidDeliveredQuantityError(
                        f"Product {product_id}: {quantity} requested, "
                        f"only {remaining[product_id]} left to deliver"
                    )

            requested = {pid: qty for pid, qty in requested.items() if qty > 0}
            if not requested:
                raise InvalidItemsError(f"Nothing left to deliver on order {order.order_number}")

            products = {p.id: p for p in await self.product_repo.get_by_ids(list(requested))}

            items: List[DeliverySlipItem] = []
            for product_id, quantity in requested.items():
                line = lines[product_id]
                product = products.get(product_id)
                items.append(
                    DeliverySlipItem(
                        product_id=product_id,
                        product_name=product.name if product else f"#{product_id}",
                        unit=product.unit if product else "adet",
                        quantity=line.quantity,
                        delivered_quantity=quantity,
                        unit_price=line.unit_price,
                        total_price=(
                            line.amount if quantity == line.quantity
                            else line_total(quantity, line.unit_price)
                        ),
                    )
                )

            delivery_address = command.delivery_address or order.delivery_address
            if not delivery_address:
                customer = await self.customer_repo.get_by_id(order.customer_id)
                delivery_address = customer.address if customer else None

            slip = DeliverySlip(
                delivery_slip_number=await self.slip_repo.generate_slip_number(),
                order_id=order.id,
                customer_id=order.customer_id,
                invoice_id=order.invoice_id,
                status=DeliverySlipStatus.PREPARED,
                driver_name=command.driver_name,
                vehicle_plate=command.vehicle_plate,
                delivery_address=delivery_address,
                notes=command.notes,
            )
            created = await self.slip_repo.create(slip, items)

            await self.uow.commit()

            logger.info(
                f"Delivery slip {created.delivery_slip_number} prepared for order "
                f"{order.order_number} ({len(items)} lines)"
            )
            return Return.ok(DeliverySlipResponseDTO.from_entity(created, items))

        except DomainError as e:
            await self.uow.rollback()
            return Return.err(Error(code=e.code, message=e.message))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Delivery slip creation for order {command.order_id} failed: {e}")
            return Return.err(
                Error(
                    code="CREATE_DELIVERY_SLIP_FAILED",
                    message="Failed to create delivery slip",
                    reason=str(e),
                )
            )

    @staticmethod
    def _merge_lines(order_items) -> Dict[int, _ProductLine]:
        lines: Dict[int, _ProductLine] = OrderedDict()
        for item in order_items:
            amount = line_total(item.quantity, item.unit_price)
            if item.product_id in lines:
                lines[item.product_id].quantity += item.quantity
                lines[item.product_id].amount += amount
            else:
                lines[item.product_id] = _ProductLine(item.product_id, item.quantity, amount)
        return lines

    async def _remaining_quantities(self, order_id: int, lines: Dict[int, _ProductLine]) -> Dict[int, int]:
        remaining = {pid: line.quantity for pid, line in lines.items()}
        for slip in await self.slip_repo.list_by_order(order_id):
            if slip.status == DeliverySlipStatus.RETURNED:
                continue
            for item in await self.slip_repo.get_items(slip.id):
                if item.product_id in remaining:
                    remaining[item.product_id] -= item.delivered_quantity
        return {pid: max(0, qty) for pid, qty in remaining.items()}
