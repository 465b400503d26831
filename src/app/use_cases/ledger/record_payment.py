"""RecordPayment Use Case

Records money received from a customer.
"""

import logging
from datetime import datetime
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.account_transaction_repository import AccountTransactionRepository
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.domain.account_transaction import AccountTransaction, AccountTransactionType
from src.domain.errors import (
    CustomerNotFoundError,
    DomainError,
    InvalidAmountError,
    InvoiceCustomerMismatchError,
    InvoiceNotFoundError,
)
from src.domain.money import to_money
from src.domain.payment import Payment, PaymentStatus
from .dtos import RecordPaymentCommandDTO, PaymentResponseDTO

logger = logging.getLogger(__name__)


class RecordPayment:
    """
    Use Case: Record a payment

    Business Rules:
    1. amount > 0 (INVALID_AMOUNT)
    2. A referenced invoice must belong to the paying customer
       (INVOICE_CUSTOMER_MISMATCH)
    3. Over-payment is accepted; no balance check is made
    4. Completed payments append a credit account transaction
    5. No row lock: concurrent payments simply accumulate
    """

    def __init__(
        self,
        uow: UnitOfWork,
        customer_repo: CustomerRepository,
        invoice_repo: InvoiceRepository,
        payment_repo: PaymentRepository,
        transaction_repo: AccountTransactionRepository,
        record_transactions: bool = True,
    ):
        self.uow = uow
        self.customer_repo = customer_repo
        self.invoice_repo = invoice_repo
        self.payment_repo = payment_repo
        self.transaction_repo = transaction_repo
        self.record_transactions = record_transactions

    async def execute(self, command: RecordPaymentCommandDTO) -> Result[PaymentResponseDTO]:
        try:
            amount = to_money(command.amount)
            if amount <= 0:
                raise InvalidAmountError(f"Payment amount must be positive, got {command.amount}")

            customer = await self.customer_repo.get_by_id(command.customer_id)
            if not customer:
                raise CustomerNotFoundError(f"Customer {command.customer_id} not found")

            if command.invoice_id is not None:
                invoice = await self.invoice_repo.get_by_id(command.invoice_id)
                if not invoice:
                    raise InvoiceNotFoundError(f"Invoice {command.invoice_id} not found")
                if invoice.customer_id != command.customer_id:
                    raise InvoiceCustomerMismatchError(
                        f"Invoice {invoice.invoice_number} does not belong to "
                        f"customer {command.customer_id}"
                    )

            payment = Payment(
                customer_id=command.customer_id,
                invoice_id=command.invoice_id,
                amount=amount,
                payment_method=command.payment_method,
                payment_date=command.payment_date or datetime.utcnow(),
                due_date=command.due_date,
                status=command.status,
                description=command.description,
            )
            created = await self.payment_repo.create(payment)

            if self.record_transactions and created.status == PaymentStatus.COMPLETED:
                await self.transaction_repo.create(
                    AccountTransaction(
                        customer_id=created.customer_id,
                        transaction_type=AccountTransactionType.CREDIT,
                        amount=created.amount,
                        invoice_id=created.invoice_id,
                        payment_id=created.id,
                        description=command.description or f"Payment ({created.payment_method.value})",
                        transaction_date=created.payment_date,
                    )
                )

            await self.uow.commit()

            logger.info(
                f"Payment {created.id} of {created.amount} recorded for customer "
                f"{created.customer_id} ({created.payment_method.value})"
            )
            return Return.ok(PaymentResponseDTO.from_entity(created))

        except DomainError as e:
            await self.uow.rollback()
            return Return.err(Error(code=e.code, message=e.message))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Payment for customer {command.customer_id} failed: {e}")
            return Return.err(
                Error(
                    code="RECORD_PAYMENT_FAILED",
                    message="Failed to record payment",
                    reason=str(e),
                )
            )
