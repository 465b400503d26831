from .customer_repository import SqlAlchemyCustomerRepository
from .product_repository import SqlAlchemyProductRepository
from .order_repository import SqlAlchemyOrderRepository
from .invoice_repository import SqlAlchemyInvoiceRepository
from .delivery_slip_repository import SqlAlchemyDeliverySlipRepository
from .payment_repository import SqlAlchemyPaymentRepository
from .account_transaction_repository import SqlAlchemyAccountTransactionRepository
from .visit_repository import SqlAlchemyVisitRepository

__all__ = [
    "SqlAlchemyCustomerRepository",
    "SqlAlchemyProductRepository",
    "SqlAlchemyOrderRepository",
    "SqlAlchemyInvoiceRepository",
    "SqlAlchemyDeliverySlipRepository",
    "SqlAlchemyPaymentRepository",
    "SqlAlchemyAccountTransactionRepository",
    "SqlAlchemyVisitRepository",
]
