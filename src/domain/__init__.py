from .base import BaseModel
from .customer import Customer
from .product import Product
from .order import Order, OrderStatus
from .order_item import OrderItem
from .invoice import Invoice, InvoiceStatus
from .invoice_item import InvoiceItem
from .delivery_slip import DeliverySlip, DeliverySlipItem, DeliverySlipStatus
from .payment import Payment, PaymentMethod, PaymentStatus
from .account_transaction import AccountTransaction, AccountTransactionType
from .visit import Visit

__all__ = [
    "BaseModel",
    "Customer",
    "Product",
    "Order",
    "OrderStatus",
    "OrderItem",
    "Invoice",
    "InvoiceStatus",
    "InvoiceItem",
    "DeliverySlip",
    "DeliverySlipItem",
    "DeliverySlipStatus",
    "Payment",
    "PaymentMethod",
    "PaymentStatus",
    "AccountTransaction",
    "AccountTransactionType",
    "Visit",
]
