"""Shared base for SQLModel table entities"""

from sqlalchemy import BigInteger, Integer
from sqlmodel import SQLModel

# SQLite only auto-increments INTEGER PRIMARY KEY columns
BigIntegerKey = BigInteger().with_variant(Integer(), "sqlite")


class BaseModel(SQLModel):
    pass
