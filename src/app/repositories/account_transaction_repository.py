"""Account Transaction Repository Interface

Append-only: there is no update or delete.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List
from src.domain.account_transaction import AccountTransaction, AccountTransactionType


class AccountTransactionRepository(ABC):

    @abstractmethod
    async def create(self, transaction: AccountTransaction) -> AccountTransaction:
        pass

    @abstractmethod
    async def list_by_customer(self, customer_id: int, limit: int = 100) -> List[AccountTransaction]:
        """Most recent transaction_date first"""
        pass

    @abstractmethod
    async def sum_by_type(self, customer_id: int, transaction_type: AccountTransactionType) -> Decimal:
        pass
