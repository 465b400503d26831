"""Payment Ledger API Routes

FastAPI routes for payments and customer balances.
"""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.account_transaction_repository import SqlAlchemyAccountTransactionRepository
from src.adapter.repositories.customer_repository import SqlAlchemyCustomerRepository
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.payment_repository import SqlAlchemyPaymentRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import raise_for_error
from src.api.schemas.payment_request import RecordPaymentRequestSchema
from src.app.use_cases.ledger.dtos import (
    AccountSummaryDTO,
    BalanceResponseDTO,
    MarkOverdueResponseDTO,
    OverdueInvoicesResponseDTO,
    PaymentResponseDTO,
    RecordPaymentCommandDTO,
)
from src.app.use_cases.ledger.get_account_summary import GetAccountSummary
from src.app.use_cases.ledger.get_balance import GetOutstandingBalance
from src.app.use_cases.ledger.get_overdue_invoices import GetOverdueInvoices
from src.app.use_cases.ledger.mark_overdue_payments import MarkOverduePayments
from src.app.use_cases.ledger.record_payment import RecordPayment
from src.depends import get_session, get_unit_of_work
from config import ApplicationConfig

router = APIRouter(tags=["Payments"])


@router.post(
    "/payments",
    response_model=PaymentResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {
            "description": "Invalid amount or invoice of another customer",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INVALID_AMOUNT",
                            "message": "Payment amount must be positive, got 0"
                        }
                    }
                }
            }
        }
    }
)
async def record_payment(
    request: RecordPaymentRequestSchema,
    session: AsyncSession = Depends(get_session),
    uow: SqlAlchemyUnitOfWork = Depends(get_unit_of_work),
):
    """
    Record money received from a customer.

    Over-payment is accepted; the outstanding balance never goes below zero.
    """
    command = RecordPaymentCommandDTO(**request.model_dump())

    use_case = RecordPayment(
        uow,
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyPaymentRepository(session),
        SqlAlchemyAccountTransactionRepository(session),
        record_transactions=ApplicationConfig.RECORD_ACCOUNT_TRANSACTIONS,
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post("/payments/mark-overdue", response_model=MarkOverdueResponseDTO)
async def mark_overdue_payments(
    as_of: Optional[date] = Query(default=None),
    session: AsyncSession = Depends(get_session),
    uow: SqlAlchemyUnitOfWork = Depends(get_unit_of_work),
):
    """Flip pending payments whose due date is before as_of (default today) to overdue."""
    result = await MarkOverduePayments(uow, SqlAlchemyPaymentRepository(session)).execute(as_of)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/customers/{customer_id}/balance", response_model=BalanceResponseDTO)
async def get_balance(customer_id: int, session: AsyncSession = Depends(get_session)):
    """Outstanding balance, computed fresh and floored at zero."""
    use_case = GetOutstandingBalance(
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyPaymentRepository(session),
    )
    result = await use_case.execute(customer_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/customers/{customer_id}/overdue-invoices", response_model=OverdueInvoicesResponseDTO)
async def get_overdue_invoices(
    customer_id: int,
    due_days: Optional[int] = Query(default=None, ge=0),
    session: AsyncSession = Depends(get_session),
):
    use_case = GetOverdueInvoices(
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyInvoiceRepository(session),
        default_due_days=ApplicationConfig.INVOICE_DUE_DAYS,
    )
    result = await use_case.execute(customer_id, due_days=due_days)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/customers/{customer_id}/account-summary", response_model=AccountSummaryDTO)
async def get_account_summary(customer_id: int, session: AsyncSession = Depends(get_session)):
    use_case = GetAccountSummary(
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyPaymentRepository(session),
        SqlAlchemyAccountTransactionRepository(session),
    )
    result = await use_case.execute(customer_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
