"""Invoice API Routes

FastAPI routes for the pending-invoice projection, bulk invoicing and
invoice status changes.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.account_transaction_repository import SqlAlchemyAccountTransactionRepository
from src.adapter.repositories.customer_repository import SqlAlchemyCustomerRepository
from src.adapter.repositories.delivery_slip_repository import SqlAlchemyDeliverySlipRepository
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.order_repository import SqlAlchemyOrderRepository
from src.adapter.repositories.product_repository import SqlAlchemyProductRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import raise_for_error
from src.api.schemas.invoice_request import (
    ChangeInvoiceStatusRequestSchema,
    CreateBulkInvoiceRequestSchema,
)
from src.app.use_cases.invoicing.change_invoice_status import ChangeInvoiceStatus
from src.app.use_cases.invoicing.create_bulk_invoice import CreateBulkInvoice
from src.app.use_cases.invoicing.dtos import (
    ChangeInvoiceStatusCommandDTO,
    CreateBulkInvoiceCommandDTO,
    InvoiceResponseDTO,
    ListInvoicesResponseDTO,
    PendingInvoiceGroupsResponseDTO,
)
from src.app.use_cases.invoicing.get_invoice import GetInvoice, ListInvoices
from src.app.use_cases.invoicing.group_delivered_orders import GroupDeliveredOrders
from src.depends import get_session, get_unit_of_work
from config import ApplicationConfig

router = APIRouter(prefix="/invoices", tags=["Invoices"])


def _invoice_repo(session: AsyncSession) -> SqlAlchemyInvoiceRepository:
    return SqlAlchemyInvoiceRepository(session, number_prefix=ApplicationConfig.INVOICE_NUMBER_PREFIX)


@router.get("/pending-by-customer", response_model=PendingInvoiceGroupsResponseDTO)
async def pending_by_customer(
    customer_id: Optional[int] = Query(default=None),
    session: AsyncSession = Depends(get_session),
):
    """Delivered, uninvoiced orders grouped per customer with a per-product rollup."""
    use_case = GroupDeliveredOrders(
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyOrderRepository(session),
        SqlAlchemyProductRepository(session),
    )
    result = await use_case.execute(customer_id=customer_id)
    return result.value


@router.post(
    "/bulk",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {
            "description": "An order was invoiced already (possibly concurrently)",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "ORDER_ALREADY_INVOICED",
                            "message": "One or more selected orders were invoiced by another request"
                        }
                    }
                }
            }
        },
        400: {
            "description": "Selection is empty, foreign or not delivered",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "ORDER_NOT_DELIVERED",
                            "message": "Order SIP-2024-123456 is shipping, not delivered"
                        }
                    }
                }
            }
        },
    }
)
async def create_bulk_invoice(
    request: CreateBulkInvoiceRequestSchema,
    session: AsyncSession = Depends(get_session),
    uow: SqlAlchemyUnitOfWork = Depends(get_unit_of_work),
):
    """
    Bill several delivered orders of one customer with one invoice.

    **Request body:**
    - `customer_id` (required)
    - `order_ids` (required): delivered, uninvoiced orders of the customer
    - `shipping_address`: defaults to the customer address
    - `invoice_number`: requested number, suffixed -1, -2, ... when taken
    - `tax_rate`: percent, defaults to the configured rate

    All orders are claimed or none are.

    **Returns:**
    - 201: Invoice created
    - 400: Empty selection, order of another customer or not delivered
    - 404: Customer or order not found
    - 409: Order already invoiced
    - 503: Lock timeout
    """
    command = CreateBulkInvoiceCommandDTO(
        customer_id=request.customer_id,
        order_ids=request.order_ids,
        shipping_address=request.shipping_address,
        invoice_number=request.invoice_number,
        tax_rate=request.tax_rate,
        description=request.description,
    )

    use_case = CreateBulkInvoice(
        uow,
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyOrderRepository(session),
        SqlAlchemyProductRepository(session),
        _invoice_repo(session),
        SqlAlchemyDeliverySlipRepository(session),
        SqlAlchemyAccountTransactionRepository(session),
        default_tax_rate=ApplicationConfig.DEFAULT_TAX_RATE,
        max_number_retries=ApplicationConfig.INVOICE_NUMBER_MAX_RETRIES,
        record_transactions=ApplicationConfig.RECORD_ACCOUNT_TRANSACTIONS,
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("", response_model=ListInvoicesResponseDTO)
async def list_invoices(
    customer_id: Optional[int] = Query(default=None),
    status_filter: Optional[str] = Query(default=None, alias="status"),
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    session: AsyncSession = Depends(get_session),
):
    result = await ListInvoices(_invoice_repo(session)).execute(
        customer_id=customer_id, status=status_filter, limit=limit, offset=offset
    )
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/{invoice_id}", response_model=InvoiceResponseDTO)
async def get_invoice(invoice_id: int, session: AsyncSession = Depends(get_session)):
    result = await GetInvoice(_invoice_repo(session), SqlAlchemyOrderRepository(session)).execute(invoice_id)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.put("/{invoice_id}/status", response_model=InvoiceResponseDTO)
async def change_invoice_status(
    invoice_id: int,
    request: ChangeInvoiceStatusRequestSchema,
    session: AsyncSession = Depends(get_session),
    uow: SqlAlchemyUnitOfWork = Depends(get_unit_of_work),
):
    """
    Move an invoice to generated, paid or cancelled.

    Cancelling releases the billed orders and delivery slips and books a
    reversing credit on the customer account.
    """
    use_case = ChangeInvoiceStatus(
        uow,
        _invoice_repo(session),
        SqlAlchemyOrderRepository(session),
        SqlAlchemyDeliverySlipRepository(session),
        SqlAlchemyAccountTransactionRepository(session),
        record_transactions=ApplicationConfig.RECORD_ACCOUNT_TRANSACTIONS,
    )
    result = await use_case.execute(
        ChangeInvoiceStatusCommandDTO(invoice_id=invoice_id, target_status=request.status)
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value
