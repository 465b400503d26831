"""SQLAlchemy Invoice Repository Implementation

Implements invoice persistence using SQLAlchemy async session.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.exceptions import DuplicateInvoiceNumberError
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_item import InvoiceItem
from src.domain.money import to_money
from .base import SqlAlchemyRepository
from .errors import is_unique_violation


class SqlAlchemyInvoiceRepository(SqlAlchemyRepository, InvoiceRepository):
    """
    SQLAlchemy implementation of InvoiceRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession, number_prefix: str = "INV"):
        super().__init__(session)
        self.number_prefix = number_prefix

    async def create(self, invoice: Invoice, items: List[InvoiceItem]) -> Invoice:
        """
        Create a new invoice with its items

        Args:
            invoice: Invoice entity to persist
            items: Invoice lines; invoice_id is filled in here

        Returns:
            Created Invoice with generated ID

        Raises:
            DuplicateInvoiceNumberError: invoice_number already taken
            LockTimeoutError: the insert waited too long on a lock
        """
        self.session.add(invoice)
        try:
            await self._flush()
        except IntegrityError as e:
            if is_unique_violation(e, "invoice_number"):
                raise DuplicateInvoiceNumberError(
                    f"Invoice number {invoice.invoice_number} already exists"
                ) from e
            raise

        for item in items:
            item.invoice_id = invoice.id
        self.session.add_all(items)
        await self._flush()
        await self.session.refresh(invoice)
        return invoice

    async def get_by_id(self, invoice_id: int, for_update: bool = False) -> Optional[Invoice]:
        """
        Retrieve invoice by ID

        Args:
            invoice_id: Invoice ID
            for_update: Lock the row until the transaction ends

        Returns:
            Invoice if found, None otherwise
        """
        statement = select(Invoice).where(Invoice.id == invoice_id)

        if for_update:
            statement = statement.with_for_update()
            result = await self._execute_locking(statement)
        else:
            result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_items(self, invoice_id: int) -> List[InvoiceItem]:
        statement = (
            select(InvoiceItem)
            .where(InvoiceItem.invoice_id == invoice_id)
            .order_by(InvoiceItem.id)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def get_by_invoice_number(self, invoice_number: str) -> Optional[Invoice]:
        """
        Retrieve invoice by invoice number

        Args:
            invoice_number: Unique invoice number

        Returns:
            Invoice if found, None otherwise
        """
        statement = select(Invoice).where(Invoice.invoice_number == invoice_number)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def list_invoices(
        self,
        customer_id: Optional[int] = None,
        status: Optional[InvoiceStatus] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Invoice]:
        """
        List invoices, newest first

        Args:
            customer_id: Optional filter by customer
            status: Optional filter by status
            limit: Maximum number of invoices to return
            offset: Offset for pagination

        Returns:
            List of invoices
        """
        statement = select(Invoice)

        if customer_id is not None:
            statement = statement.where(Invoice.customer_id == customer_id)
        if status:
            statement = statement.where(Invoice.status == status)

        statement = statement.order_by(Invoice.created_at.desc(), Invoice.id.desc())
        statement = statement.limit(limit).offset(offset)

        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def update_status(self, invoice: Invoice) -> Invoice:
        invoice.updated_at = datetime.utcnow()
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def sum_open_totals(self, customer_id: int) -> Decimal:
        statement = (
            select(func.coalesce(func.sum(Invoice.total_amount), 0))
            .where(Invoice.customer_id == customer_id)
            .where(Invoice.status != InvoiceStatus.CANCELLED)
        )
        result = await self.session.execute(statement)
        return to_money(result.scalar_one())

    async def list_unpaid_created_before(self, customer_id: int, cutoff: datetime) -> List[Invoice]:
        statement = (
            select(Invoice)
            .where(Invoice.customer_id == customer_id)
            .where(Invoice.status.not_in([InvoiceStatus.PAID, InvoiceStatus.CANCELLED]))
            .where(Invoice.created_at < cutoff)
            .order_by(Invoice.created_at)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def generate_invoice_number(self) -> str:
        """
        Generate the next invoice number

        Format: <PREFIX>-YYYY-NNNNNN (e.g., INV-2024-000001). Suffixed
        custom numbers sharing the prefix are ignored by the length filter.

        Returns:
            Invoice number string
        """
        year = datetime.utcnow().year
        prefix = f"{self.number_prefix}-{year}-"

        # Get the highest invoice number for this year
        statement = (
            select(func.max(Invoice.invoice_number))
            .where(Invoice.invoice_number.like(f"{prefix}%"))
            .where(func.length(Invoice.invoice_number) == len(prefix) + 6)
        )
        result = await self.session.execute(statement)
        max_number = result.scalar_one_or_none()

        if max_number and max_number[len(prefix):].isdigit():
            # Extract the sequence number and increment
            sequence = int(max_number[len(prefix):]) + 1
        else:
            sequence = 1

        return f"{prefix}{sequence:06d}"
