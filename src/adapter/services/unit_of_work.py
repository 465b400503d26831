from sqlalchemy import text
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    def __init__(self, session: AsyncSession, lock_timeout_seconds: float = 10):
        self.session = session
        self.lock_timeout_seconds = lock_timeout_seconds

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()

    async def set_lock_timeout(self):
        # SQLite has no row locks; writers wait on the connection busy timeout instead
        if not self.lock_timeout_seconds or self.session.bind.dialect.name != "postgresql":
            return
        milliseconds = int(self.lock_timeout_seconds * 1000)
        await self.session.execute(text(f"SET LOCAL lock_timeout = '{milliseconds}ms'"))
