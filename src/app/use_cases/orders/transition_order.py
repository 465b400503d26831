"""TransitionOrder Use Case

Moves an order through its lifecycle under a row lock.
"""

import logging
from datetime import datetime
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.order_repository import OrderRepository
from src.domain.errors import DomainError, OrderNotFoundError
from src.domain.order_lifecycle import OrderLifecycle
from .dtos import TransitionOrderCommandDTO, OrderResponseDTO

logger = logging.getLogger(__name__)


class TransitionOrder:
    """
    Use Case: Change order status

    Business Rules:
    1. Target must be a known order status (INVALID_STATUS)
    2. Delivered and cancelled orders accept no transition (ORDER_LOCKED)
    3. Under the strict policy only adjacent steps are legal (INVALID_TRANSITION)
    4. Delivered requires a recipient name (MISSING_RECIPIENT)
    5. Exactly one milestone timestamp is stamped; earlier ones are kept
    6. No invoice or notification is produced here

    Flow:
    1. Lock order row (SELECT FOR UPDATE)
    2. Apply transition through OrderLifecycle
    3. Persist and commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        order_repo: OrderRepository,
        lifecycle: OrderLifecycle,
    ):
        self.uow = uow
        self.order_repo = order_repo
        self.lifecycle = lifecycle

    async def execute(self, command: TransitionOrderCommandDTO) -> Result[OrderResponseDTO]:
        try:
            await self.uow.set_lock_timeout()

            order = await self.order_repo.get_by_id(command.order_id, for_update=True)
            if not order:
                raise OrderNotFoundError(f"Order {command.order_id} not found")

            previous_status = order.status

            self.lifecycle.apply_transition(
                order,
                command.target_status,
                now=datetime.utcnow(),
                delivery_recipient=command.delivery_recipient,
                delivery_signature=command.delivery_signature,
            )
            if command.production_notes is not None:
                order.production_notes = command.production_notes

            updated = await self.order_repo.update(order)
            items = await self.order_repo.get_items(updated.id)

            await self.uow.commit()

            logger.info(
                f"Order {updated.order_number} moved "
                f"{previous_status.value} -> {updated.status.value}"
            )
            return Return.ok(OrderResponseDTO.from_entity(updated, items))

        except DomainError as e:
            await self.uow.rollback()
            return Return.err(Error(code=e.code, message=e.message))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Status change of order {command.order_id} failed: {e}")
            return Return.err(
                Error(
                    code="TRANSITION_ORDER_FAILED",
                    message="Failed to change order status",
                    reason=str(e),
                )
            )
