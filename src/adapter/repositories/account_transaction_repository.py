"""SQLAlchemy Account Transaction Repository Implementation

Append-only: rows are inserted and read, never updated.
"""

from decimal import Decimal
from typing import List
from sqlmodel import select, func
from src.app.repositories.account_transaction_repository import AccountTransactionRepository
from src.domain.account_transaction import AccountTransaction, AccountTransactionType
from src.domain.money import to_money
from .base import SqlAlchemyRepository


class SqlAlchemyAccountTransactionRepository(SqlAlchemyRepository, AccountTransactionRepository):

    async def create(self, transaction: AccountTransaction) -> AccountTransaction:
        self.session.add(transaction)
        await self.session.flush()
        await self.session.refresh(transaction)
        return transaction

    async def list_by_customer(self, customer_id: int, limit: int = 100) -> List[AccountTransaction]:
        statement = (
            select(AccountTransaction)
            .where(AccountTransaction.customer_id == customer_id)
            .order_by(AccountTransaction.transaction_date.desc(), AccountTransaction.id.desc())
            .limit(limit)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def sum_by_type(self, customer_id: int, transaction_type: AccountTransactionType) -> Decimal:
        statement = (
            select(func.coalesce(func.sum(AccountTransaction.amount), 0))
            .where(AccountTransaction.customer_id == customer_id)
            .where(AccountTransaction.transaction_type == transaction_type)
        )
        result = await self.session.execute(statement)
        return to_money(result.scalar_one())
