"""Persistence failures that use cases handle explicitly

Adapters translate driver exceptions into these so that no raw database
error leaves the repository layer for the expected contention cases.
"""

from src.domain.errors import DomainError, ErrorCode


class LockTimeoutError(DomainError):
    """Row lock could not be acquired within the configured timeout (retryable)"""
    code = ErrorCode.LOCK_TIMEOUT


class DuplicateInvoiceNumberError(DomainError):
    """Unique constraint on invoices.invoice_number was violated"""
    code = ErrorCode.DUPLICATE_INVOICE_NUMBER


class DuplicateOrderNumberError(DomainError):
    code = "DUPLICATE_ORDER_NUMBER"
