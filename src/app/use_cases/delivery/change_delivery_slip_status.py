"""ChangeDeliverySlipStatus Use Case"""

import logging
from datetime import datetime
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.delivery_slip_repository import DeliverySlipRepository
from src.domain.delivery_slip import DELIVERY_SLIP_TRANSITIONS, DeliverySlipStatus
from src.domain.errors import (
    DeliverySlipNotFoundError,
    DomainError,
    InvalidDeliverySlipStatusError,
    MissingRecipientError,
)
from .dtos import ChangeDeliverySlipStatusCommandDTO, DeliverySlipResponseDTO

logger = logging.getLogger(__name__)


class ChangeDeliverySlipStatus:
    """
    Use Case: Move a delivery slip to delivered or returned

    prepared -> delivered requires a recipient name and stamps delivered_at.
    delivered -> returned stamps returned_at. Returned slips are final.
    """

    def __init__(self, uow: UnitOfWork, slip_repo: DeliverySlipRepository):
        self.uow = uow
        self.slip_repo = slip_repo

    async def execute(self, command: ChangeDeliverySlipStatusCommandDTO) -> Result[DeliverySlipResponseDTO]:
        try:
            try:
                target = DeliverySlipStatus(command.target_status)
            except ValueError:
                raise InvalidDeliverySlipStatusError(
                    f"Unknown delivery slip status: {command.target_status!r}"
                )

            await self.uow.set_lock_timeout()

            slip = await self.slip_repo.get_by_id(command.slip_id, for_update=True)
            if not slip:
                raise DeliverySlipNotFoundError(f"Delivery slip {command.slip_id} not found")

            if target not in DELIVERY_SLIP_TRANSITIONS[slip.status]:
                raise InvalidDeliverySlipStatusError(
                    f"Cannot move delivery slip from {slip.status.value} to {target.value}"
                )

            now = datetime.utcnow()
            if target == DeliverySlipStatus.DELIVERED:
                recipient = (command.recipient_name or "").strip()
                if not recipient:
                    raise MissingRecipientError("A recipient name is required to deliver a slip")
                slip.recipient_name = recipient
                if command.customer_signature:
                    slip.customer_signature = command.customer_signature
                slip.delivered_at = now
            else:
                slip.returned_at = now

            previous_status = slip.status
            slip.status = target
            slip.updated_at = now

            updated = await self.slip_repo.update(slip)
            items = await self.slip_repo.get_items(updated.id)

            await self.uow.commit()

            logger.info(
                f"Delivery slip {updated.delivery_slip_number} moved "
                f"{previous_status.value} -> {updated.status.value}"
            )
            return Return.ok(DeliverySlipResponseDTO.from_entity(updated, items))

        except DomainError as e:
            await self.uow.rollback()
            return Return.err(Error(code=e.code, message=e.message))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Status change of delivery slip {command.slip_id} failed: {e}")
            return Return.err(
                Error(
                    code="CHANGE_DELIVERY_SLIP_STATUS_FAILED",
                    message="Failed to change delivery slip status",
                    reason=str(e),
                )
            )
