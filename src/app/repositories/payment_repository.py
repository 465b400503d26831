"""Payment Repository Interface"""

from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import List, Optional
from src.domain.payment import Payment, PaymentStatus


class PaymentRepository(ABC):

    @abstractmethod
    async def create(self, payment: Payment) -> Payment:
        pass

    @abstractmethod
    async def list_by_customer(
        self, customer_id: int, status: Optional[PaymentStatus] = None
    ) -> List[Payment]:
        """Payments of a customer, most recent payment_date first"""
        pass

    @abstractmethod
    async def sum_completed(self, customer_id: int) -> Decimal:
        pass

    @abstractmethod
    async def mark_overdue(self, today: date) -> int:
        """
        Flip pending payments with due_date before today to overdue

        Returns:
            Number of payments updated
        """
        pass
