"""Order Repository Interface

Defines the contract for order persistence, including the conditional
invoice claim used by bulk invoicing and the aggregate reads used by the
dashboard.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import Collection, List, Optional
from src.domain.order import Order, OrderStatus
from src.domain.order_item import OrderItem


class OrderRepository(ABC):
    """
    Repository interface for Order and OrderItem persistence

    Methods accepting for_update lock the selected order rows
    (SELECT FOR UPDATE) until the surrounding transaction ends.
    """

    @abstractmethod
    async def create(self, order: Order, items: List[OrderItem]) -> Order:
        """
        Persist a new order together with its items

        Raises:
            DuplicateOrderNumberError: order_number already taken
        """
        pass

    @abstractmethod
    async def get_by_id(self, order_id: int, for_update: bool = False) -> Optional[Order]:
        """
        Retrieve order by ID

        Raises:
            LockTimeoutError: for_update and the row lock was not granted in time
        """
        pass

    @abstractmethod
    async def get_by_ids(self, order_ids: Collection[int], for_update: bool = False) -> List[Order]:
        pass

    @abstractmethod
    async def list_orders(
        self,
        status: Optional[OrderStatus] = None,
        sales_person_id: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Order]:
        """List orders newest first with optional filters"""
        pass

    @abstractmethod
    async def update(self, order: Order) -> Order:
        pass

    @abstractmethod
    async def get_items(self, order_id: int) -> List[OrderItem]:
        pass

    @abstractmethod
    async def get_items_for_orders(self, order_ids: Collection[int]) -> List[OrderItem]:
        pass

    @abstractmethod
    async def replace_items(self, order_id: int, items: List[OrderItem]) -> List[OrderItem]:
        """Delete every item of the order and insert the given set"""
        pass

    @abstractmethod
    async def list_delivered_uninvoiced(self, customer_id: Optional[int] = None) -> List[Order]:
        """Orders with status=delivered and no invoice, oldest delivery first"""
        pass

    @abstractmethod
    async def get_by_invoice_id(self, invoice_id: int) -> List[Order]:
        pass

    @abstractmethod
    async def attach_to_invoice(
        self, order_ids: Collection[int], invoice_id: int, customer_id: int
    ) -> int:
        """
        Conditionally claim orders for an invoice

        Only rows that are still delivered, uninvoiced and owned by the
        customer are updated.

        Returns:
            Number of orders claimed
        """
        pass

    @abstractmethod
    async def release_from_invoice(self, invoice_id: int) -> int:
        """Detach every order from the invoice; returns number of orders released"""
        pass

    @abstractmethod
    async def generate_order_number(self) -> str:
        pass

    @abstractmethod
    async def count_by_status(
        self, statuses: Collection[OrderStatus], sales_person_id: Optional[str] = None
    ) -> int:
        pass

    @abstractmethod
    async def count_created_since(
        self,
        since: datetime,
        sales_person_id: Optional[str] = None,
        status: Optional[OrderStatus] = None,
    ) -> int:
        pass

    @abstractmethod
    async def sum_delivered_since(
        self, since: datetime, sales_person_id: Optional[str] = None
    ) -> Decimal:
        """Sum of total_amount for orders delivered at or after since"""
        pass
