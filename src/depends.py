from typing import Optional
from fastapi import Depends, Header
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from libs.result import Error
from src.adapter.services.notification_service import create_notification_service
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.app.services.notification_service import NotificationService
from src.domain.order_lifecycle import OrderLifecycle

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_unit_of_work(session: AsyncSession = Depends(get_session)):
    yield SqlAlchemyUnitOfWork(session, lock_timeout_seconds=ApplicationConfig.LOCK_TIMEOUT_SECONDS)


def get_order_lifecycle() -> OrderLifecycle:
    return OrderLifecycle(strict=ApplicationConfig.STRICT_STATUS_TRANSITIONS)


def get_notification_service() -> NotificationService:
    return create_notification_service(
        ApplicationConfig.DELIVERY_NOTIFICATION_WEBHOOK,
        timeout=ApplicationConfig.NOTIFICATION_TIMEOUT_SECONDS,
    )


class CurrentUser(BaseModel):
    """Caller identity as supplied by the authentication layer (trusted as given)"""

    user_id: Optional[str] = None
    role: str = "admin"

    @property
    def is_sales(self) -> bool:
        return self.role == "sales"


async def get_current_user(
    x_user_id: Optional[str] = Header(default=None),
    x_user_role: Optional[str] = Header(default=None),
) -> CurrentUser:
    if not x_user_id and not ApplicationConfig.AUTH_DISABLED:
        raise ClientError(
            Error(code="UNAUTHENTICATED", message="X-User-Id header is required"),
            status_code=401,
        )
    return CurrentUser(user_id=x_user_id, role=(x_user_role or "admin").lower())
