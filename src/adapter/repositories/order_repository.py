"""SQLAlchemy Order Repository Implementation

Implements order persistence using SQLAlchemy async session, including
the conditional invoice claim and the dashboard aggregates.
"""

import time
from datetime import datetime
from decimal import Decimal
from typing import Collection, List, Optional
from sqlalchemy import delete, update
from sqlalchemy.exc import IntegrityError
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.exceptions import DuplicateOrderNumberError
from src.app.repositories.order_repository import OrderRepository
from src.domain.money import to_money
from src.domain.order import Order, OrderStatus
from src.domain.order_item import OrderItem
from .base import SqlAlchemyRepository
from .errors import is_unique_violation


class SqlAlchemyOrderRepository(SqlAlchemyRepository, OrderRepository):
    """
    SQLAlchemy implementation of OrderRepository

    Bulk UPDATEs use synchronize_session="evaluate" so that orders already
    loaded into the session see the new invoice link without a reload.
    """

    def __init__(self, session: AsyncSession, number_prefix: str = "SIP"):
        super().__init__(session)
        self.number_prefix = number_prefix

    async def create(self, order: Order, items: List[OrderItem]) -> Order:
        self.session.add(order)
        try:
            await self._flush()
        except IntegrityError as e:
            if is_unique_violation(e, "order_number"):
                raise DuplicateOrderNumberError(
                    f"Order number {order.order_number} already exists"
                ) from e
            raise

        for item in items:
            item.order_id = order.id
        self.session.add_all(items)
        await self._flush()
        await self.session.refresh(order)
        return order

    async def get_by_id(self, order_id: int, for_update: bool = False) -> Optional[Order]:
        stmt = select(Order).where(Order.id == order_id)

        if for_update:
            stmt = stmt.with_for_update()
            result = await self._execute_locking(stmt)
        else:
            result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_ids(self, order_ids: Collection[int], for_update: bool = False) -> List[Order]:
        if not order_ids:
            return []
        # Stable lock order keeps two overlapping selections from deadlocking
        stmt = select(Order).where(Order.id.in_(list(order_ids))).order_by(Order.id)

        if for_update:
            stmt = stmt.with_for_update()
            result = await self._execute_locking(stmt)
        else:
            result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_orders(
        self,
        status: Optional[OrderStatus] = None,
        sales_person_id: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Order]:
        statement = select(Order)

        if status:
            statement = statement.where(Order.status == status)
        if sales_person_id:
            statement = statement.where(Order.sales_person_id == sales_person_id)

        statement = statement.order_by(Order.created_at.desc(), Order.id.desc())
        statement = statement.limit(limit).offset(offset)

        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def update(self, order: Order) -> Order:
        self.session.add(order)
        await self.session.flush()
        await self.session.refresh(order)
        return order

    async def get_items(self, order_id: int) -> List[OrderItem]:
        statement = select(OrderItem).where(OrderItem.order_id == order_id).order_by(OrderItem.id)
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def get_items_for_orders(self, order_ids: Collection[int]) -> List[OrderItem]:
        if not order_ids:
            return []
        statement = (
            select(OrderItem)
            .where(OrderItem.order_id.in_(list(order_ids)))
            .order_by(OrderItem.order_id, OrderItem.id)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def replace_items(self, order_id: int, items: List[OrderItem]) -> List[OrderItem]:
        await self.session.execute(
            delete(OrderItem)
            .where(OrderItem.order_id == order_id)
            .execution_options(synchronize_session="evaluate")
        )
        for item in items:
            item.order_id = order_id
        self.session.add_all(items)
        await self.session.flush()
        return items

    async def list_delivered_uninvoiced(self, customer_id: Optional[int] = None) -> List[Order]:
        statement = (
            select(Order)
            .where(Order.status == OrderStatus.DELIVERED)
            .where(Order.invoice_id.is_(None))
        )
        if customer_id is not None:
            statement = statement.where(Order.customer_id == customer_id)

        statement = statement.order_by(Order.customer_id, Order.delivered_at, Order.id)
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def get_by_invoice_id(self, invoice_id: int) -> List[Order]:
        statement = select(Order).where(Order.invoice_id == invoice_id).order_by(Order.id)
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def attach_to_invoice(
        self, order_ids: Collection[int], invoice_id: int, customer_id: int
    ) -> int:
        if not order_ids:
            return 0
        stmt = (
            update(Order)
            .where(Order.id.in_(list(order_ids)))
            .where(Order.invoice_id.is_(None))
            .where(Order.status == OrderStatus.DELIVERED)
            .where(Order.customer_id == customer_id)
            .values(invoice_id=invoice_id, updated_at=datetime.utcnow())
            .execution_options(synchronize_session="evaluate")
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def release_from_invoice(self, invoice_id: int) -> int:
        stmt = (
            update(Order)
            .where(Order.invoice_id == invoice_id)
            .values(invoice_id=None, updated_at=datetime.utcnow())
            .execution_options(synchronize_session="evaluate")
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def generate_order_number(self) -> str:
        """
        Generate an order number

        Format: <PREFIX>-YYYY-NNNNNN where NNNNNN are the low six digits
        of the current epoch milliseconds (e.g., SIP-2024-482913)
        """
        year = datetime.utcnow().year
        suffix = int(time.time() * 1000) % 1_000_000
        return f"{self.number_prefix}-{year}-{suffix:06d}"

    async def count_by_status(
        self, statuses: Collection[OrderStatus], sales_person_id: Optional[str] = None
    ) -> int:
        statement = (
            select(func.count())
            .select_from(Order)
            .where(Order.status.in_(list(statuses)))
        )
        if sales_person_id:
            statement = statement.where(Order.sales_person_id == sales_person_id)

        result = await self.session.execute(statement)
        return result.scalar_one()

    async def count_created_since(
        self,
        since: datetime,
        sales_person_id: Optional[str] = None,
        status: Optional[OrderStatus] = None,
    ) -> int:
        statement = select(func.count()).select_from(Order).where(Order.created_at >= since)
        if sales_person_id:
            statement = statement.where(Order.sales_person_id == sales_person_id)
        if status:
            statement = statement.where(Order.status == status)

        result = await self.session.execute(statement)
        return result.scalar_one()

    async def sum_delivered_since(
        self, since: datetime, sales_person_id: Optional[str] = None
    ) -> Decimal:
        statement = (
            select(func.coalesce(func.sum(Order.total_amount), 0))
            .where(Order.status == OrderStatus.DELIVERED)
            .where(Order.delivered_at >= since)
        )
        if sales_person_id:
            statement = statement.where(Order.sales_person_id == sales_person_id)

        result = await self.session.execute(statement)
        return to_money(result.scalar_one())
