"""Invoicing use cases"""
from .group_delivered_orders import GroupDeliveredOrders
from .create_bulk_invoice import CreateBulkInvoice
from .change_invoice_status import ChangeInvoiceStatus
from .get_invoice import GetInvoice, ListInvoices

__all__ = [
    "GroupDeliveredOrders",
    "CreateBulkInvoice",
    "ChangeInvoiceStatus",
    "GetInvoice",
    "ListInvoices",
]
