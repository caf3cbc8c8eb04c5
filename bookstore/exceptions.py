"""
Bookstore Exceptions

Domain errors shared by the API server and the client package.

Server side, the exception handlers registered in main.py turn these
into HTTP responses (BookNotFoundError → 404, BookIdMismatchError → 400).
Client side, BookstoreClient raises the same classes when the API
answers with those statuses, so callers handle one set of errors.
"""


class BookstoreError(Exception):
    """Base class for all bookstore errors."""


class BookNotFoundError(BookstoreError):
    """No book exists with the requested id."""

    def __init__(self, book_id: int) -> None:
        self.book_id = book_id
        super().__init__(f"Book with id {book_id} not found")


class BookIdMismatchError(BookstoreError):
    """The bookId in an update body does not match the id in the URL."""

    def __init__(self, book_id: int, body_book_id: int | None) -> None:
        self.book_id = book_id
        self.body_book_id = body_book_id
        super().__init__(
            f"Book id in body ({body_book_id}) does not match URL id ({book_id})"
        )


class ApiUnavailableError(BookstoreError):
    """The API could not be reached (connection refused, timeout, ...)."""


class SampleDataModeError(BookstoreError):
    """A write was attempted while the client is serving sample data."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"{operation} is not available while using sample data")


class CartDecodeError(BookstoreError):
    """The persisted cart could not be parsed."""
