"""UpdateOrderItems Use Case

Replaces an order's item list while it is still being prepared.
"""

import logging
from datetime import datetime
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.order_repository import OrderRepository
from src.app.repositories.product_repository import ProductRepository
from src.domain.errors import DomainError, OrderNotFoundError
from src.domain.order_lifecycle import OrderLifecycle
from .dtos import UpdateOrderItemsCommandDTO, OrderResponseDTO
from .items import build_order_items

logger = logging.getLogger(__name__)


class UpdateOrderItems:
    """
    Use Case: Replace order items

    Business Rules:
    1. Only orders in pending or production may be edited (ORDER_LOCKED)
    2. Items are replaced as a whole set, never patched
    3. Line totals and the order total are recomputed

    Flow:
    1. Lock order row (SELECT FOR UPDATE)
    2. Check status allows editing
    3. Build new items, replace old set, update order total
    4. Commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ):
        self.uow = uow
        self.order_repo = order_repo
        self.product_repo = product_repo

    async def execute(self, command: UpdateOrderItemsCommandDTO) -> Result[OrderResponseDTO]:
        try:
            await self.uow.set_lock_timeout()

            order = await self.order_repo.get_by_id(command.order_id, for_update=True)
            if not order:
                raise OrderNotFoundError(f"Order {command.order_id} not found")

            OrderLifecycle.ensure_editable(order)

            items, total = await build_order_items(
                self.product_repo, command.items, order_id=order.id
            )
            saved_items = await self.order_repo.replace_items(order.id, items)

            order.total_amount = total
            if command.production_notes is not None:
                order.production_notes = command.production_notes
            order.updated_at = datetime.utcnow()
            updated = await self.order_repo.update(order)

            await self.uow.commit()

            logger.info(
                f"Order {updated.order_number} items replaced: "
                f"{len(saved_items)} lines, total={updated.total_amount}"
            )
            return Return.ok(OrderResponseDTO.from_entity(updated, saved_items))

        except DomainError as e:
            await self.uow.rollback()
            return Return.err(Error(code=e.code, message=e.message))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Item update of order {command.order_id} failed: {e}")
            return Return.err(
                Error(
                    code="UPDATE_ORDER_ITEMS_FAILED",
                    message="Failed to update order items",
                    reason=str(e),
                )
            )
