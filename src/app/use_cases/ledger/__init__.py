"""Payment ledger use cases"""
from .record_payment import RecordPayment
from .get_balance import GetOutstandingBalance
from .get_overdue_invoices import GetOverdueInvoices
from .get_account_summary import GetAccountSummary
from .mark_overdue_payments import MarkOverduePayments

__all__ = [
    "RecordPayment",
    "GetOutstandingBalance",
    "GetOverdueInvoices",
    "GetAccountSummary",
    "MarkOverduePayments",
]
