"""
Error types raised by the Books API.

Every failure that should reach the client is a ``BookAPIError``; the
application registers one handler for the family that renders the status
and message as an ``ErrorResponse``.
"""

from typing import List, Optional

from fastapi import status


class BookAPIError(Exception):
    """Base class for errors translated into HTTP responses."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[str]] = None):
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)


class BookValidationError(BookAPIError):
    """Request input failed schema or parameter checks."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Request validation failed"


class BookNotFoundError(BookAPIError):
    """No book exists for the requested isbn."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, isbn: str):
        self.isbn = isbn
        super().__init__(f"There is no book with an isbn '{isbn}'")


class StorageError(BookAPIError):
    """Unexpected failure from the persistence layer."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Database operation failed"
