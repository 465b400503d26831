"""Invoice Repository Interface

Defines the contract for invoice persistence operations.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_item import InvoiceItem


class InvoiceRepository(ABC):
    """
    Repository interface for Invoice persistence

    Provides access to invoice data for billing operations.
    """

    @abstractmethod
    async def create(self, invoice: Invoice, items: List[InvoiceItem]) -> Invoice:
        """
        Create a new invoice with its items

        Raises:
            DuplicateInvoiceNumberError: invoice_number already taken
        """
        pass

    @abstractmethod
    async def get_by_id(self, invoice_id: int, for_update: bool = False) -> Optional[Invoice]:
        pass

    @abstractmethod
    async def get_items(self, invoice_id: int) -> List[InvoiceItem]:
        pass

    @abstractmethod
    async def get_by_invoice_number(self, invoice_number: str) -> Optional[Invoice]:
        pass

    @abstractmethod
    async def list_invoices(
        self,
        customer_id: Optional[int] = None,
        status: Optional[InvoiceStatus] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Invoice]:
        """List invoices newest first"""
        pass

    @abstractmethod
    async def update_status(self, invoice: Invoice) -> Invoice:
        """Persist status fields only; amounts are never updated"""
        pass

    @abstractmethod
    async def sum_open_totals(self, customer_id: int) -> Decimal:
        """Sum of total_amount over the customer's non-cancelled invoices"""
        pass

    @abstractmethod
    async def list_unpaid_created_before(self, customer_id: int, cutoff: datetime) -> List[Invoice]:
        """Invoices created before cutoff whose status is neither paid nor cancelled"""
        pass

    @abstractmethod
    async def generate_invoice_number(self) -> str:
        """
        Generate the next invoice number

        Format: <PREFIX>-YYYY-NNNNNN (e.g., INV-2024-000001)
        """
        pass
