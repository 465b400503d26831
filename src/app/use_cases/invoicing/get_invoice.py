"""Invoice read use cases"""

from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.order_repository import OrderRepository
from src.domain.errors import ErrorCode
from src.domain.invoice import InvoiceStatus
from .dtos import InvoiceResponseDTO, InvoiceSummaryDTO, ListInvoicesResponseDTO


class GetInvoice:
    """Read one invoice with its lines and billed orders"""

    def __init__(self, invoice_repo: InvoiceRepository, order_repo: OrderRepository):
        self.invoice_repo = invoice_repo
        self.order_repo = order_repo

    async def execute(self, invoice_id: int) -> Result[InvoiceResponseDTO]:
        invoice = await self.invoice_repo.get_by_id(invoice_id)
        if not invoice:
            return Return.err(
                Error(
                    code=ErrorCode.INVOICE_NOT_FOUND,
                    message=f"Invoice {invoice_id} not found",
                )
            )

        items = await self.invoice_repo.get_items(invoice.id)
        orders = await self.order_repo.get_by_invoice_id(invoice.id)
        return Return.ok(InvoiceResponseDTO.from_entities(invoice, items, [o.id for o in orders]))


class ListInvoices:
    def __init__(self, invoice_repo: InvoiceRepository):
        self.invoice_repo = invoice_repo

    async def execute(
        self,
        customer_id: Optional[int] = None,
        status: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Result[ListInvoicesResponseDTO]:
        status_filter = None
        if status:
            try:
                status_filter = InvoiceStatus(status)
            except ValueError:
                return Return.err(
                    Error(
                        code=ErrorCode.INVALID_INVOICE_STATUS,
                        message=f"Unknown invoice status: {status!r}",
                    )
                )

        invoices = await self.invoice_repo.list_invoices(
            customer_id=customer_id, status=status_filter, limit=limit, offset=offset
        )
        return Return.ok(
            ListInvoicesResponseDTO(
                invoices=[InvoiceSummaryDTO.from_entity(i) for i in invoices],
                limit=limit,
                offset=offset,
            )
        )
