# =========================================================
# BOOKSHOP ERRORS
#
# Every failure that crosses the service boundary carries
# one ErrorKind. Routers never inspect messages; the
# exception handler in main.py maps the kind to a status.
# =========================================================

from enum import Enum

from fastapi import status


class ErrorKind(str, Enum):
    VALIDATION = "validation_error"
    NOT_FOUND = "not_found"
    INSUFFICIENT_STOCK = "insufficient_stock"
    UNAUTHORIZED = "unauthorized"
    CONFLICT = "conflict"
    STORAGE = "storage_error"


ERROR_STATUS_CODES = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INSUFFICIENT_STOCK: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.STORAGE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class BookshopError(Exception):
    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def status_code(self) -> int:
        return ERROR_STATUS_CODES[self.kind]


class ValidationError(BookshopError):
    kind = ErrorKind.VALIDATION


class NotFound(BookshopError):
    kind = ErrorKind.NOT_FOUND


class InsufficientStock(BookshopError):
    kind = ErrorKind.INSUFFICIENT_STOCK

    def __init__(self, book_id: int, title: str, requested: int, available: int):
        super().__init__(
            f"Insufficient stock for book {title}: "
            f"requested {requested}, available {available}"
        )
        self.book_id = book_id
        self.title = title
        self.requested = requested
        self.available = available

    @property
    def shortfall(self) -> int:
        return self.requested - self.available


class Unauthorized(BookshopError):
    kind = ErrorKind.UNAUTHORIZED


class Conflict(BookshopError):
    kind = ErrorKind.CONFLICT


class StorageError(BookshopError):
    """Persistence failure. The message is safe to show; the cause is logged."""

    kind = ErrorKind.STORAGE

    def __init__(self, message: str = "Unable to complete request. Please try again."):
        super().__init__(message)
