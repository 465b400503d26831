"""SQLAlchemy Delivery Slip Repository Implementation"""

from datetime import datetime
from typing import Collection, List, Optional
from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.delivery_slip_repository import DeliverySlipRepository
from src.domain.delivery_slip import DeliverySlip, DeliverySlipItem
from .base import SqlAlchemyRepository


class SqlAlchemyDeliverySlipRepository(SqlAlchemyRepository, DeliverySlipRepository):

    def __init__(self, session: AsyncSession, number_prefix: str = "IRS"):
        super().__init__(session)
        self.number_prefix = number_prefix

    async def create(self, slip: DeliverySlip, items: List[DeliverySlipItem]) -> DeliverySlip:
        self.session.add(slip)
        await self.session.flush()

        for item in items:
            item.delivery_slip_id = slip.id
        self.session.add_all(items)
        await self.session.flush()
        await self.session.refresh(slip)
        return slip

    async def get_by_id(self, slip_id: int, for_update: bool = False) -> Optional[DeliverySlip]:
        statement = select(DeliverySlip).where(DeliverySlip.id == slip_id)

        if for_update:
            statement = statement.with_for_update()
            result = await self._execute_locking(statement)
        else:
            result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_items(self, slip_id: int) -> List[DeliverySlipItem]:
        statement = (
            select(DeliverySlipItem)
            .where(DeliverySlipItem.delivery_slip_id == slip_id)
            .order_by(DeliverySlipItem.id)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def list_by_order(self, order_id: int) -> List[DeliverySlip]:
        statement = (
            select(DeliverySlip)
            .where(DeliverySlip.order_id == order_id)
            .order_by(DeliverySlip.created_at, DeliverySlip.id)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def update(self, slip: DeliverySlip) -> DeliverySlip:
        self.session.add(slip)
        await self.session.flush()
        await self.session.refresh(slip)
        return slip

    async def link_orders_to_invoice(self, order_ids: Collection[int], invoice_id: int) -> int:
        if not order_ids:
            return 0
        stmt = (
            update(DeliverySlip)
            .where(DeliverySlip.order_id.in_(list(order_ids)))
            .where(DeliverySlip.invoice_id.is_(None))
            .values(invoice_id=invoice_id, updated_at=datetime.utcnow())
            .execution_options(synchronize_session="evaluate")
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def unlink_invoice(self, invoice_id: int) -> int:
        stmt = (
            update(DeliverySlip)
            .where(DeliverySlip.invoice_id == invoice_id)
            .values(invoice_id=None, updated_at=datetime.utcnow())
            .execution_options(synchronize_session="evaluate")
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def generate_slip_number(self) -> str:
        """
        Generate a delivery slip number

        Format: <PREFIX>-YYYYMMDD-HHMMSSmmm (e.g., IRS-20240315-142530123).
        Slips issued within the same millisecond get a -1, -2, ... suffix.
        """
        now = datetime.utcnow()
        base = f"{self.number_prefix}-{now:%Y%m%d}-{now:%H%M%S}{now.microsecond // 1000:03d}"

        statement = select(DeliverySlip.delivery_slip_number).where(
            DeliverySlip.delivery_slip_number.like(f"{base}%")
        )
        taken = set((await self.session.execute(statement)).scalars().all())

        candidate, suffix = base, 0
        while candidate in taken:
            suffix += 1
            candidate = f"{base}-{suffix}"
        return candidate
