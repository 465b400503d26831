"""Visit Repository Interface"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from src.domain.visit import Visit


class VisitRepository(ABC):

    @abstractmethod
    async def create(self, visit: Visit) -> Visit:
        pass

    @abstractmethod
    async def count_between(
        self, start: datetime, end: datetime, sales_person_id: Optional[str] = None
    ) -> int:
        """Visits with start <= visit_date < end"""
        pass
