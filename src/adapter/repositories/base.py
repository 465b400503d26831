"""Shared helpers for the SQLAlchemy repositories"""

from sqlalchemy.exc import DBAPIError
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.exceptions import LockTimeoutError
from .errors import is_lock_timeout


class SqlAlchemyRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _execute_locking(self, stmt):
        """Execute a SELECT ... FOR UPDATE, turning lock waits that ran out into LockTimeoutError"""
        try:
            return await self.session.execute(stmt)
        except DBAPIError as e:
            if is_lock_timeout(e):
                raise LockTimeoutError("Timed out waiting for a row lock; retry the request") from e
            raise

    async def _flush(self):
        """Flush pending writes; an INSERT stuck behind a lock surfaces as LockTimeoutError"""
        try:
            await self.session.flush()
        except DBAPIError as e:
            if is_lock_timeout(e):
                raise LockTimeoutError("Timed out waiting for a database lock; retry the request") from e
            raise
