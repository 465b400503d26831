"""Error taxonomy of the order lifecycle and billing ledger

Every failure surfaced to a caller carries one of the ErrorCode values.
Domain rules raise DomainError subclasses; use cases turn them into
``libs.result.Error`` values at their boundary.
"""


class ErrorCode:
    INVALID_STATUS = "INVALID_STATUS"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    MISSING_RECIPIENT = "MISSING_RECIPIENT"
    ORDER_LOCKED = "ORDER_LOCKED"
    ORDER_NOT_FOUND = "ORDER_NOT_FOUND"
    ORDER_NOT_DELIVERED = "ORDER_NOT_DELIVERED"
    ORDER_ALREADY_INVOICED = "ORDER_ALREADY_INVOICED"
    ORDER_CUSTOMER_MISMATCH = "ORDER_CUSTOMER_MISMATCH"
    EMPTY_ORDER_SELECTION = "EMPTY_ORDER_SELECTION"
    INVALID_ITEMS = "INVALID_ITEMS"
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    CUSTOMER_NOT_FOUND = "CUSTOMER_NOT_FOUND"
    DUPLICATE_INVOICE_NUMBER = "DUPLICATE_INVOICE_NUMBER"
    INVOICE_NUMBER_EXHAUSTED = "INVOICE_NUMBER_EXHAUSTED"
    INVOICE_NOT_FOUND = "INVOICE_NOT_FOUND"
    INVALID_INVOICE_STATUS = "INVALID_INVOICE_STATUS"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    INVOICE_CUSTOMER_MISMATCH = "INVOICE_CUSTOMER_MISMATCH"
    DELIVERY_SLIP_NOT_FOUND = "DELIVERY_SLIP_NOT_FOUND"
    INVALID_DELIVERY_SLIP_STATUS = "INVALID_DELIVERY_SLIP_STATUS"
    INVALID_DELIVERED_QUANTITY = "INVALID_DELIVERED_QUANTITY"
    ORDER_NOT_SHIPPABLE = "ORDER_NOT_SHIPPABLE"
    LOCK_TIMEOUT = "LOCK_TIMEOUT"
    ORDER_NUMBER_EXHAUSTED = "ORDER_NUMBER_EXHAUSTED"
    INVALID_DUE_DAYS = "INVALID_DUE_DAYS"


class DomainError(Exception):
    code = "DOMAIN_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidStatusError(DomainError):
    code = ErrorCode.INVALID_STATUS


class InvalidTransitionError(DomainError):
    code = ErrorCode.INVALID_TRANSITION


class MissingRecipientError(DomainError):
    code = ErrorCode.MISSING_RECIPIENT


class OrderLockedError(DomainError):
    code = ErrorCode.ORDER_LOCKED


class InvalidItemsError(DomainError):
    code = ErrorCode.INVALID_ITEMS


class InvalidInvoiceStatusError(DomainError):
    code = ErrorCode.INVALID_INVOICE_STATUS


class InvalidDeliverySlipStatusError(DomainError):
    code = ErrorCode.INVALID_DELIVERY_SLIP_STATUS


class OrderNotFoundError(DomainError):
    code = ErrorCode.ORDER_NOT_FOUND


class OrderNotDeliveredError(DomainError):
    code = ErrorCode.ORDER_NOT_DELIVERED


class OrderAlreadyInvoicedError(DomainError):
    code = ErrorCode.ORDER_ALREADY_INVOICED


class OrderCustomerMismatchError(DomainError):
    code = ErrorCode.ORDER_CUSTOMER_MISMATCH


class OrderNotShippableError(DomainError):
    code = ErrorCode.ORDER_NOT_SHIPPABLE


class ProductNotFoundError(DomainError):
    code = ErrorCode.PRODUCT_NOT_FOUND


class CustomerNotFoundError(DomainError):
    code = ErrorCode.CUSTOMER_NOT_FOUND


class InvoiceNotFoundError(DomainError):
    code = ErrorCode.INVOICE_NOT_FOUND


class InvoiceCustomerMismatchError(DomainError):
    code = ErrorCode.INVOICE_CUSTOMER_MISMATCH


class InvalidAmountError(DomainError):
    code = ErrorCode.INVALID_AMOUNT


class DeliverySlipNotFoundError(DomainError):
    code = ErrorCode.DELIVERY_SLIP_NOT_FOUND


class InvalidDeliveredQuantityError(DomainError):
    code = ErrorCode.INVALID_DELIVERED_QUANTITY
