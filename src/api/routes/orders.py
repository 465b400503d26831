"""Order API Routes

FastAPI routes for order creation, lifecycle transitions and item edits.
"""

import logging
from typing import Optional
from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.customer_repository import SqlAlchemyCustomerRepository
from src.adapter.repositories.order_repository import SqlAlchemyOrderRepository
from src.adapter.repositories.product_repository import SqlAlchemyProductRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from libs.result import Error
from src.api.error import ClientError, raise_for_error
from src.api.schemas.order_request import (
    CreateOrderRequestSchema,
    TransitionOrderRequestSchema,
    UpdateOrderItemsRequestSchema,
)
from src.app.services.notification_service import NotificationService
from src.app.use_cases.orders.build_delivery_confirmation import BuildDeliveryConfirmation
from src.app.use_cases.orders.create_order import CreateOrder
from src.app.use_cases.orders.dtos import (
    CreateOrderCommandDTO,
    ListOrdersResponseDTO,
    OrderItemInputDTO,
    OrderResponseDTO,
    TransitionOrderCommandDTO,
    UpdateOrderItemsCommandDTO,
)
from src.app.use_cases.orders.get_order import GetOrder, ListOrders
from src.app.use_cases.orders.transition_order import TransitionOrder
from src.app.use_cases.orders.update_order_items import UpdateOrderItems
from src.depends import (
    CurrentUser,
    get_current_user,
    get_notification_service,
    get_order_lifecycle,
    get_session,
    get_unit_of_work,
)
from src.domain.order import OrderStatus
from src.domain.order_lifecycle import OrderLifecycle
from config import ApplicationConfig

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/orders", tags=["Orders"])


def _order_repo(session: AsyncSession) -> SqlAlchemyOrderRepository:
    return SqlAlchemyOrderRepository(session, number_prefix=ApplicationConfig.ORDER_NUMBER_PREFIX)


@router.post("", response_model=OrderResponseDTO, status_code=status.HTTP_201_CREATED)
async def create_order(
    request: CreateOrderRequestSchema,
    session: AsyncSession = Depends(get_session),
    uow: SqlAlchemyUnitOfWork = Depends(get_unit_of_work),
    user: CurrentUser = Depends(get_current_user),
):
    """
    Create an order in status pending.

    Line totals and the order total are computed from the items; lines
    without unit_price use the current catalog price.
    """
    sales_person_id = request.sales_person_id or user.user_id
    if user.is_sales:
        sales_person_id = user.user_id
    if not sales_person_id:
        raise ClientError(
            Error(code="MISSING_SALES_PERSON", message="sales_person_id is required")
        )

    command = CreateOrderCommandDTO(
        customer_id=request.customer_id,
        sales_person_id=sales_person_id,
        items=[OrderItemInputDTO(**item.model_dump()) for item in request.items],
        tax_amount=request.tax_amount,
        notes=request.notes,
        delivery_address=request.delivery_address,
    )

    use_case = CreateOrder(
        uow,
        SqlAlchemyCustomerRepository(session),
        _order_repo(session),
        SqlAlchemyProductRepository(session),
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("", response_model=ListOrdersResponseDTO)
async def list_orders(
    status_filter: Optional[str] = Query(default=None, alias="status"),
    sales_person_id: Optional[str] = Query(default=None),
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(get_current_user),
):
    """List orders newest first. Sales users only see their own orders."""
    if user.is_sales:
        sales_person_id = user.user_id

    result = await ListOrders(_order_repo(session)).execute(
        status=status_filter, sales_person_id=sales_person_id, limit=limit, offset=offset
    )
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/{order_id}", response_model=OrderResponseDTO)
async def get_order(order_id: int, session: AsyncSession = Depends(get_session)):
    result = await GetOrder(_order_repo(session)).execute(order_id)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.put(
    "/{order_id}/status",
    response_model=OrderResponseDTO,
    responses={
        409: {
            "description": "Order is delivered/cancelled or the step is not allowed",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "ORDER_LOCKED",
                            "message": "Order is delivered; no further status changes are allowed"
                        }
                    }
                }
            }
        },
        400: {
            "description": "Unknown status or missing recipient",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "MISSING_RECIPIENT",
                            "message": "A recipient name is required to mark an order delivered"
                        }
                    }
                }
            }
        },
        503: {"description": "Order row is locked by another request; retry"},
    }
)
async def change_order_status(
    order_id: int,
    request: TransitionOrderRequestSchema,
    background_tasks: BackgroundTasks,
    session: AsyncSession = Depends(get_session),
    uow: SqlAlchemyUnitOfWork = Depends(get_unit_of_work),
    lifecycle: OrderLifecycle = Depends(get_order_lifecycle),
    notification_service: NotificationService = Depends(get_notification_service),
):
    """
    Move an order to another lifecycle status.

    **Request body:**
    - `status` (required): pending, production, production_ready, shipping, delivered or cancelled
    - `delivery_recipient`: required when status is delivered
    - `delivery_signature`: optional base64 image, stored as-is
    - `production_notes`: optional

    A delivery confirmation is sent in the background after a successful
    delivered transition.

    **Returns:**
    - 200: Status changed
    - 400: Unknown status or missing recipient
    - 404: Order not found
    - 409: Order is final or the step is not allowed
    - 503: Lock timeout
    """
    order_repo = _order_repo(session)
    command = TransitionOrderCommandDTO(
        order_id=order_id,
        target_status=request.status,
        delivery_recipient=request.delivery_recipient,
        delivery_signature=request.delivery_signature,
        production_notes=request.production_notes,
    )

    result = await TransitionOrder(uow, order_repo, lifecycle).execute(command)
    if result.is_err():
        raise_for_error(result.error)

    order = result.value
    if order.status == OrderStatus.DELIVERED.value:
        confirmation = await BuildDeliveryConfirmation(
            SqlAlchemyCustomerRepository(session),
            order_repo,
            SqlAlchemyProductRepository(session),
        ).execute(order.order_id)
        if confirmation.is_ok():
            background_tasks.add_task(
                notification_service.send_delivery_confirmation, confirmation.value
            )
        else:
            logger.warning(
                f"No delivery confirmation for order {order.order_number}: "
                f"{confirmation.error.code}"
            )

    return order


@router.put("/{order_id}/items", response_model=OrderResponseDTO)
async def update_order_items(
    order_id: int,
    request: UpdateOrderItemsRequestSchema,
    session: AsyncSession = Depends(get_session),
    uow: SqlAlchemyUnitOfWork = Depends(get_unit_of_work),
):
    """Replace the item list of a pending or in-production order."""
    command = UpdateOrderItemsCommandDTO(
        order_id=order_id,
        items=[OrderItemInputDTO(**item.model_dump()) for item in request.items],
        production_notes=request.production_notes,
    )

    use_case = UpdateOrderItems(uow, _order_repo(session), SqlAlchemyProductRepository(session))
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
