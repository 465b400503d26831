"""ChangeInvoiceStatus Use Case"""

import logging
from datetime import datetime
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.account_transaction_repository import AccountTransactionRepository
from src.app.repositories.delivery_slip_repository import DeliverySlipRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.order_repository import OrderRepository
from src.domain.account_transaction import AccountTransaction, AccountTransactionType
from src.domain.errors import DomainError, InvalidInvoiceStatusError, InvoiceNotFoundError
from src.domain.invoice import INVOICE_TRANSITIONS, InvoiceStatus
from .dtos import ChangeInvoiceStatusCommandDTO, InvoiceResponseDTO

logger = logging.getLogger(__name__)


class ChangeInvoiceStatus:
    """
    Use Case: Move an invoice through draft -> generated -> paid / cancelled

    Business Rules:
    1. Amount fields are never touched
    2. paid and cancelled are final
    3. Cancelling releases the invoice's orders and delivery slips so they
       can be billed again, and appends a credit reversing the debit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        order_repo: OrderRepository,
        slip_repo: DeliverySlipRepository,
        transaction_repo: AccountTransactionRepository,
        record_transactions: bool = True,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.order_repo = order_repo
        self.slip_repo = slip_repo
        self.transaction_repo = transaction_repo
        self.record_transactions = record_transactions

    async def execute(self, command: ChangeInvoiceStatusCommandDTO) -> Result[InvoiceResponseDTO]:
        try:
            try:
                target = InvoiceStatus(command.target_status)
            except ValueError:
                raise InvalidInvoiceStatusError(
                    f"Unknown invoice status: {command.target_status!r}"
                )

            await self.uow.set_lock_timeout()

            invoice = await self.invoice_repo.get_by_id(command.invoice_id, for_update=True)
            if not invoice:
                raise InvoiceNotFoundError(f"Invoice {command.invoice_id} not found")

            if target not in INVOICE_TRANSITIONS[invoice.status]:
                raise InvalidInvoiceStatusError(
                    f"Cannot move invoice from {invoice.status.value} to {target.value}"
                )

            now = datetime.utcnow()
            previous_status = invoice.status

            if target == InvoiceStatus.PAID:
                invoice.paid_at = now
            elif target == InvoiceStatus.CANCELLED:
                invoice.cancelled_at = now
                released = await self.order_repo.release_from_invoice(invoice.id)
                await self.slip_repo.unlink_invoice(invoice.id)
                if self.record_transactions:
                    await self.transaction_repo.create(
                        AccountTransaction(
                            customer_id=invoice.customer_id,
                            transaction_type=AccountTransactionType.CREDIT,
                            amount=invoice.total_amount,
                            invoice_id=invoice.id,
                            description=f"Cancellation of invoice {invoice.invoice_number}",
                        )
                    )
                logger.info(f"Invoice {invoice.invoice_number} cancelled, {released} orders released")

            invoice.status = target
            invoice.updated_at = now
            updated = await self.invoice_repo.update_status(invoice)

            items = await self.invoice_repo.get_items(updated.id)
            orders = await self.order_repo.get_by_invoice_id(updated.id)

            await self.uow.commit()

            logger.info(
                f"Invoice {updated.invoice_number} moved "
                f"{previous_status.value} -> {updated.status.value}"
            )
            return Return.ok(
                InvoiceResponseDTO.from_entities(updated, items, [o.id for o in orders])
            )

        except DomainError as e:
            await self.uow.rollback()
            return Return.err(Error(code=e.code, message=e.message))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Status change of invoice {command.invoice_id} failed: {e}")
            return Return.err(
                Error(
                    code="CHANGE_INVOICE_STATUS_FAILED",
                    message="Failed to change invoice status",
                    reason=str(e),
                )
            )
