"""SQLAlchemy Payment Repository Implementation"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from sqlalchemy import update
from sqlmodel import select, func
from src.app.repositories.payment_repository import PaymentRepository
from src.domain.money import to_money
from src.domain.payment import Payment, PaymentStatus
from .base import SqlAlchemyRepository


class SqlAlchemyPaymentRepository(SqlAlchemyRepository, PaymentRepository):

    async def create(self, payment: Payment) -> Payment:
        self.session.add(payment)
        await self.session.flush()
        await self.session.refresh(payment)
        return payment

    async def list_by_customer(
        self, customer_id: int, status: Optional[PaymentStatus] = None
    ) -> List[Payment]:
        statement = select(Payment).where(Payment.customer_id == customer_id)
        if status:
            statement = statement.where(Payment.status == status)

        statement = statement.order_by(Payment.payment_date.desc(), Payment.id.desc())
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def sum_completed(self, customer_id: int) -> Decimal:
        statement = (
            select(func.coalesce(func.sum(Payment.amount), 0))
            .where(Payment.customer_id == customer_id)
            .where(Payment.status == PaymentStatus.COMPLETED)
        )
        result = await self.session.execute(statement)
        return to_money(result.scalar_one())

    async def mark_overdue(self, today: date) -> int:
        stmt = (
            update(Payment)
            .where(Payment.status == PaymentStatus.PENDING)
            .where(Payment.due_date.is_not(None))
            .where(Payment.due_date < today)
            .values(status=PaymentStatus.OVERDUE, updated_at=datetime.utcnow())
            .execution_options(synchronize_session="evaluate")
        )
        result = await self.session.execute(stmt)
        return result.rowcount
