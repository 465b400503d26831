"""Get Outstanding Balance Use Case

Computes a customer's balance from invoices and payments on every call.
"""

from datetime import datetime
from libs.result import Result, Return, Error
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.domain.errors import ErrorCode
from src.domain.money import ZERO, to_money
from .dtos import BalanceResponseDTO


class GetOutstandingBalance:
    """
    Outstanding balance = max(0, non-cancelled invoice totals - completed payments)

    Read-only. There is no stored balance column to drift out of sync.
    """

    def __init__(
        self,
        customer_repo: CustomerRepository,
        invoice_repo: InvoiceRepository,
        payment_repo: PaymentRepository,
    ):
        self.customer_repo = customer_repo
        self.invoice_repo = invoice_repo
        self.payment_repo = payment_repo

    async def execute(self, customer_id: int) -> Result[BalanceResponseDTO]:
        customer = await self.customer_repo.get_by_id(customer_id)
        if not customer:
            return Return.err(
                Error(
                    code=ErrorCode.CUSTOMER_NOT_FOUND,
                    message=f"Customer {customer_id} not found",
                )
            )

        invoiced = to_money(await self.invoice_repo.sum_open_totals(customer_id))
        paid = to_money(await self.payment_repo.sum_completed(customer_id))
        difference = invoiced - paid

        return Return.ok(
            BalanceResponseDTO(
                customer_id=customer_id,
                invoiced_total=invoiced,
                paid_total=paid,
                outstanding_balance=max(ZERO, difference),
                credit_balance=max(ZERO, -difference),
                computed_at=datetime.utcnow(),
            )
        )
