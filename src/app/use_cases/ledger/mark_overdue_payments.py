"""MarkOverduePayments Use Case"""

import logging
from datetime import date
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.payment_repository import PaymentRepository
from .dtos import MarkOverdueResponseDTO

logger = logging.getLogger(__name__)


class MarkOverduePayments:
    """Flip pending payments whose due date has passed to overdue"""

    def __init__(self, uow: UnitOfWork, payment_repo: PaymentRepository):
        self.uow = uow
        self.payment_repo = payment_repo

    async def execute(self, today: Optional[date] = None) -> Result[MarkOverdueResponseDTO]:
        today = today or date.today()
        try:
            updated = await self.payment_repo.mark_overdue(today)
            await self.uow.commit()

            if updated:
                logger.info(f"Marked {updated} payments overdue as of {today}")
            return Return.ok(MarkOverdueResponseDTO(as_of=today, updated_count=updated))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Marking overdue payments failed: {e}")
            return Return.err(
                Error(
                    code="MARK_OVERDUE_FAILED",
                    message="Failed to mark overdue payments",
                    reason=str(e),
                )
            )
