"""Error taxonomy for the books API.

Every failure a handler wants to report carries its kind, the HTTP status
it maps to and a client-facing message. A single exception handler turns
these into JSON responses (see ``src.bookshelf.api.http.errors``).
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Standardized error kinds for API responses."""

    BAD_REQUEST = "BAD_REQUEST"
    NOT_FOUND = "NOT_FOUND"
    STORE_ERROR = "STORE_ERROR"


class BookError(Exception):
    """Base tagged error: ``{kind, status_code, message}``."""

    kind: ErrorKind = ErrorKind.STORE_ERROR
    status_code: int = 500

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict[str, str]:
        return {"message": self.message}


class ValidationError(BookError):
    """A required field was missing or empty."""

    kind = ErrorKind.BAD_REQUEST
    status_code = 400


class NotFoundError(BookError):
    """No record exists for the requested id."""

    kind = ErrorKind.NOT_FOUND
    status_code = 404

    @classmethod
    def for_book(cls, book_id: object) -> NotFoundError:
        return cls(f"Book with id {book_id} does not exist.")


class StoreError(BookError):
    """The persistence layer failed. The message is never sent to clients."""

    kind = ErrorKind.STORE_ERROR
    status_code = 500
