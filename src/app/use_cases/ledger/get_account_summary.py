"""Get Account Summary Use Case

Current-account view: ledger totals, overdue payments and history.
"""

from libs.result import Result, Return, Error
from src.app.repositories.account_transaction_repository import AccountTransactionRepository
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.domain.account_transaction import AccountTransactionType
from src.domain.errors import ErrorCode
from src.domain.money import ZERO, to_money
from src.domain.payment import PaymentStatus
from .dtos import AccountSummaryDTO, AccountTransactionDTO, PaymentResponseDTO


class GetAccountSummary:
    def __init__(
        self,
        customer_repo: CustomerRepository,
        invoice_repo: InvoiceRepository,
        payment_repo: PaymentRepository,
        transaction_repo: AccountTransactionRepository,
        history_limit: int = 100,
    ):
        self.customer_repo = customer_repo
        self.invoice_repo = invoice_repo
        self.payment_repo = payment_repo
        self.transaction_repo = transaction_repo
        self.history_limit = history_limit

    async def execute(self, customer_id: int) -> Result[AccountSummaryDTO]:
        customer = await self.customer_repo.get_by_id(customer_id)
        if not customer:
            return Return.err(
                Error(
                    code=ErrorCode.CUSTOMER_NOT_FOUND,
                    message=f"Customer {customer_id} not found",
                )
            )

        total_debit = to_money(
            await self.transaction_repo.sum_by_type(customer_id, AccountTransactionType.DEBIT)
        )
        total_credit = to_money(
            await self.transaction_repo.sum_by_type(customer_id, AccountTransactionType.CREDIT)
        )

        invoiced = to_money(await self.invoice_repo.sum_open_totals(customer_id))
        paid = to_money(await self.payment_repo.sum_completed(customer_id))

        overdue = await self.payment_repo.list_by_customer(customer_id, status=PaymentStatus.OVERDUE)
        transactions = await self.transaction_repo.list_by_customer(customer_id, limit=self.history_limit)

        return Return.ok(
            AccountSummaryDTO(
                customer_id=customer_id,
                company_name=customer.company_name,
                total_debit=total_debit,
                total_credit=total_credit,
                balance=total_debit - total_credit,
                outstanding_balance=max(ZERO, invoiced - paid),
                overdue_payments=[PaymentResponseDTO.from_entity(p) for p in overdue],
                transactions=[AccountTransactionDTO.from_entity(t) for t in transactions],
            )
        )
