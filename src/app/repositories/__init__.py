from .customer_repository import CustomerRepository
from .product_repository import ProductRepository
from .order_repository import OrderRepository
from .invoice_repository import InvoiceRepository
from .delivery_slip_repository import DeliverySlipRepository
from .payment_repository import PaymentRepository
from .account_transaction_repository import AccountTransactionRepository
from .visit_repository import VisitRepository
from .exceptions import LockTimeoutError, DuplicateInvoiceNumberError, DuplicateOrderNumberError

__all__ = [
    "CustomerRepository",
    "ProductRepository",
    "OrderRepository",
    "InvoiceRepository",
    "DeliverySlipRepository",
    "PaymentRepository",
    "AccountTransactionRepository",
    "VisitRepository",
    "LockTimeoutError",
    "DuplicateInvoiceNumberError",
    "DuplicateOrderNumberError",
]
