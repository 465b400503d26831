"""Delivery Slip API Routes"""

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.customer_repository import SqlAlchemyCustomerRepository
from src.adapter.repositories.delivery_slip_repository import SqlAlchemyDeliverySlipRepository
from src.adapter.repositories.order_repository import SqlAlchemyOrderRepository
from src.adapter.repositories.product_repository import SqlAlchemyProductRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import raise_for_error
from src.api.schemas.delivery_request import (
    ChangeDeliverySlipStatusRequestSchema,
    CreateDeliverySlipRequestSchema,
)
from src.app.use_cases.delivery.change_delivery_slip_status import ChangeDeliverySlipStatus
from src.app.use_cases.delivery.create_delivery_slip import CreateDeliverySlip
from src.app.use_cases.delivery.dtos import (
    ChangeDeliverySlipStatusCommandDTO,
    CreateDeliverySlipCommandDTO,
    DeliverySlipItemInputDTO,
    DeliverySlipResponseDTO,
)
from src.depends import get_session, get_unit_of_work
from config import ApplicationConfig

router = APIRouter(tags=["Delivery Slips"])


def _slip_repo(session: AsyncSession) -> SqlAlchemyDeliverySlipRepository:
    return SqlAlchemyDeliverySlipRepository(
        session, number_prefix=ApplicationConfig.DELIVERY_SLIP_NUMBER_PREFIX
    )


@router.post(
    "/orders/{order_id}/delivery-slips",
    response_model=DeliverySlipResponseDTO,
    status_code=status.HTTP_201_CREATED,
)
async def create_delivery_slip(
    order_id: int,
    request: CreateDeliverySlipRequestSchema,
    session: AsyncSession = Depends(get_session),
    uow: SqlAlchemyUnitOfWork = Depends(get_unit_of_work),
):
    """
    Prepare a delivery slip for an order that is production_ready,
    shipping or delivered. Omitting items ships everything not yet
    delivered on an earlier (non-returned) slip.
    """
    command = CreateDeliverySlipCommandDTO(
        order_id=order_id,
        items=(
            [DeliverySlipItemInputDTO(**item.model_dump()) for item in request.items]
            if request.items is not None
            else None
        ),
        driver_name=request.driver_name,
        vehicle_plate=request.vehicle_plate,
        delivery_address=request.delivery_address,
        notes=request.notes,
    )

    use_case = CreateDeliverySlip(
        uow,
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyOrderRepository(session),
        SqlAlchemyProductRepository(session),
        _slip_repo(session),
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.put("/delivery-slips/{slip_id}/status", response_model=DeliverySlipResponseDTO)
async def change_delivery_slip_status(
    slip_id: int,
    request: ChangeDeliverySlipStatusRequestSchema,
    session: AsyncSession = Depends(get_session),
    uow: SqlAlchemyUnitOfWork = Depends(get_unit_of_work),
):
    command = ChangeDeliverySlipStatusCommandDTO(
        slip_id=slip_id,
        target_status=request.status,
        recipient_name=request.recipient_name,
        customer_signature=request.customer_signature,
    )

    result = await ChangeDeliverySlipStatus(uow, _slip_repo(session)).execute(command)
    if result.is_err():
        raise_for_error(result.error)

    return result.value
