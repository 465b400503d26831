"""API error type and HTTP status mapping

Use cases return ``libs.result.Error`` values; routes raise ClientError
with them and the handler below renders ``{"error": {"code", "message"}}``.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from libs.result import Error
from src.domain.errors import ErrorCode

NOT_FOUND_CODES = {
    ErrorCode.ORDER_NOT_FOUND,
    ErrorCode.INVOICE_NOT_FOUND,
    ErrorCode.CUSTOMER_NOT_FOUND,
    ErrorCode.PRODUCT_NOT_FOUND,
    ErrorCode.DELIVERY_SLIP_NOT_FOUND,
}

CONFLICT_CODES = {
    ErrorCode.ORDER_LOCKED,
    ErrorCode.ORDER_ALREADY_INVOICED,
    ErrorCode.INVALID_TRANSITION,
    ErrorCode.INVALID_INVOICE_STATUS,
}


class ClientError(Exception):
    def __init__(self, error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code


def status_for(code: str) -> int:
    if code in NOT_FOUND_CODES:
        return status.HTTP_404_NOT_FOUND
    if code in CONFLICT_CODES:
        return status.HTTP_409_CONFLICT
    if code == ErrorCode.LOCK_TIMEOUT:
        return status.HTTP_503_SERVICE_UNAVAILABLE
    if code in (ErrorCode.INVOICE_NUMBER_EXHAUSTED, ErrorCode.ORDER_NUMBER_EXHAUSTED) or code.endswith("_FAILED"):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_400_BAD_REQUEST


def raise_for_error(error: Error):
    raise ClientError(error, status_code=status_for(error.code))


async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    headers = {"Retry-After": "1"} if exc.error.code == ErrorCode.LOCK_TIMEOUT else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": {"code": exc.error.code, "message": exc.error.message}},
        headers=headers,
    )
