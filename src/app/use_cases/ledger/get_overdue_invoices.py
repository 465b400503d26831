"""Get Overdue Invoices Use Case"""

from datetime import datetime, timedelta
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.errors import ErrorCode
from src.domain.money import to_money
from .dtos import OverdueInvoiceDTO, OverdueInvoicesResponseDTO


class GetOverdueInvoices:
    """
    Invoices created more than due_days ago that are neither paid nor cancelled

    due_days defaults to the configured policy value (INVOICE_DUE_DAYS).
    """

    def __init__(
        self,
        customer_repo: CustomerRepository,
        invoice_repo: InvoiceRepository,
        default_due_days: int = 30,
    ):
        self.customer_repo = customer_repo
        self.invoice_repo = invoice_repo
        self.default_due_days = default_due_days

    async def execute(
        self, customer_id: int, due_days: Optional[int] = None, now: Optional[datetime] = None
    ) -> Result[OverdueInvoicesResponseDTO]:
        due_days = self.default_due_days if due_days is None else due_days
        if due_days < 0:
            return Return.err(
                Error(code=ErrorCode.INVALID_DUE_DAYS, message="due_days must not be negative")
            )

        customer = await self.customer_repo.get_by_id(customer_id)
        if not customer:
            return Return.err(
                Error(
                    code=ErrorCode.CUSTOMER_NOT_FOUND,
                    message=f"Customer {customer_id} not found",
                )
            )

        now = now or datetime.utcnow()
        invoices = await self.invoice_repo.list_unpaid_created_before(
            customer_id, now - timedelta(days=due_days)
        )

        overdue = []
        for invoice in invoices:
            due_at = invoice.created_at + timedelta(days=due_days)
            overdue.append(
                OverdueInvoiceDTO(
                    invoice_id=invoice.id,
                    invoice_number=invoice.invoice_number,
                    status=invoice.status.value,
                    total_amount=invoice.total_amount,
                    created_at=invoice.created_at,
                    due_date=due_at.date(),
                    days_overdue=(now - due_at).days,
                )
            )

        return Return.ok(
            OverdueInvoicesResponseDTO(
                customer_id=customer_id,
                due_days=due_days,
                invoices=overdue,
                total_overdue=to_money(sum(i.total_amount for i in overdue)),
            )
        )
