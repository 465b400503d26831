"""Driver error classification

Both asyncpg (PostgreSQL) and aiosqlite surface their errors wrapped in
SQLAlchemy DBAPIError subclasses; these helpers look at the wrapped
driver error to tell lock contention and unique violations apart.
"""

from typing import Optional
from sqlalchemy.exc import DBAPIError

PG_LOCK_NOT_AVAILABLE = "55P03"
PG_UNIQUE_VIOLATION = "23505"


def _sqlstate(exc: DBAPIError) -> Optional[str]:
    orig = getattr(exc, "orig", None)
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def is_lock_timeout(exc: DBAPIError) -> bool:
    if _sqlstate(exc) == PG_LOCK_NOT_AVAILABLE:
        return True
    text = str(getattr(exc, "orig", exc)).lower()
    return "lock timeout" in text or "database is locked" in text


def is_unique_violation(exc: DBAPIError, column: str) -> bool:
    text = str(getattr(exc, "orig", exc)).lower()
    if _sqlstate(exc) == PG_UNIQUE_VIOLATION or "unique constraint failed" in text:
        return column in text
    return False
