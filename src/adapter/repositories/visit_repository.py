"""SQLAlchemy Visit Repository Implementation"""

from datetime import datetime
from typing import Optional
from sqlmodel import select, func
from src.app.repositories.visit_repository import VisitRepository
from src.domain.visit import Visit
from .base import SqlAlchemyRepository


class SqlAlchemyVisitRepository(SqlAlchemyRepository, VisitRepository):

    async def create(self, visit: Visit) -> Visit:
        self.session.add(visit)
        await self.session.flush()
        await self.session.refresh(visit)
        return visit

    async def count_between(
        self, start: datetime, end: datetime, sales_person_id: Optional[str] = None
    ) -> int:
        statement = (
            select(func.count())
            .select_from(Visit)
            .where(Visit.visit_date >= start)
            .where(Visit.visit_date < end)
        )
        if sales_person_id:
            statement = statement.where(Visit.sales_person_id == sales_person_id)

        result = await self.session.execute(statement)
        return result.scalar_one()
