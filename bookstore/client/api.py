"""
Bookstore API Client

Async HTTP client for the /api/Books endpoints, used by the catalog view,
the admin tools and the command line front end.

Fallback behaviour:
- Catalog reads go to the endpoint found by ApiResolver. If no endpoint
  is reachable, or a catalog request fails, the client answers from the
  built-in sample catalog using the same paging/sorting rules as the API.
- Writes (create, update, delete) need the real API and raise
  SampleDataModeError while the client is serving sample data.
"""

import logging
from typing import Any

import httpx

from bookstore.client.resolver import ApiResolver
from bookstore.client.sample_data import sample_books
from bookstore.config import get_settings
from bookstore.exceptions import (
    ApiUnavailableError,
    BookIdMismatchError,
    BookNotFoundError,
    SampleDataModeError,
)
from bookstore.schemas import BookCreate, BookResponse, BookUpdate, PagedBookResult
from bookstore.services.catalog import DEFAULT_PAGE_SIZE, DEFAULT_SORT_FIELD, paginate_books

logger = logging.getLogger(__name__)


class BookstoreClient:
    """
    Client for the bookstore REST API.

    Usage:
        async with BookstoreClient() as client:
            page = await client.get_books(page_number=1, page_size=5)
            if client.using_sample_data:
                print("Showing sample data")
    """

    def __init__(
        self,
        resolver: ApiResolver | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the client.

        Args:
            resolver: Endpoint resolver; a new one is created if omitted
            timeout: Request timeout in seconds (default API_REQUEST_TIMEOUT, 30s)
            transport: Optional httpx transport, shared with a new resolver
        """
        settings = get_settings()
        self.resolver = resolver or ApiResolver(transport=transport)
        self._http_client = httpx.AsyncClient(
            timeout=timeout or settings.api_request_timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    async def __aenter__(self) -> "BookstoreClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    @property
    def using_sample_data(self) -> bool:
        return self.resolver.using_sample_data

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------
    async def get_books(
        self,
        page_number: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        sort_field: str = DEFAULT_SORT_FIELD,
        sort_order: str = "asc",
        category: str = "",
    ) -> PagedBookResult:
        """
        Fetch one catalog page.

        Never fails because the API is down: on any transport or HTTP error
        the resolver switches to sample data and the page is computed
        locally from the sample catalog.
        """
        base_url = await self.resolver.resolve_base_url()

        if base_url is not None:
            params = {
                "pageNumber": page_number,
                "pageSize": page_size,
                "sortField": sort_field,
                "sortOrder": sort_order,
                "category": category,
            }
            logger.debug(f"Fetching books from {base_url}/Books with params: {params}")
            try:
                response = await self._http_client.get(f"{base_url}/Books", params=params)
                response.raise_for_status()
                return PagedBookResult.model_validate(response.json())
            except (httpx.HTTPError, ValueError) as e:
                # ValueError covers malformed JSON and pydantic validation errors
                logger.error(f"Error fetching books: {e!r}")
                self.resolver.switch_to_sample_data(str(e))

        logger.debug("Using sample data for books")
        return paginate_books(
            sample_books(),
            page_number=page_number,
            page_size=page_size,
            sort_field=sort_field,
            sort_order=sort_order,
            category=category,
        )

    async def get_book(self, book_id: int) -> BookResponse:
        """
        Fetch a single book.

        Raises:
            BookNotFoundError: If the API (or the sample catalog) has no such book
            ApiUnavailableError: If the API answers with another error or an invalid body
        """
        base_url = await self.resolver.resolve_base_url()

        if base_url is not None:
            try:
                response = await self._http_client.get(f"{base_url}/Books/{book_id}")
            except httpx.HTTPError as e:
                logger.error(f"Error fetching book with ID {book_id}: {e!r}")
            else:
                if response.status_code == 404:
                    raise BookNotFoundError(book_id)
                return self._parse_book(response, operation="Get book")

        for book in sample_books():
            if book.book_id == book_id:
                return book
        raise BookNotFoundError(book_id)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------
    async def create_book(self, book: BookCreate) -> BookResponse:
        """
        Create a book and return it with its new id.

        Raises:
            SampleDataModeError: While the client is serving sample data
            ApiUnavailableError: If the request fails or the answer is not a Book
        """
        response = await self._send(
            "POST",
            "/Books",
            operation="Create book",
            json=book.model_dump(mode="json", by_alias=True, exclude={"book_id"}),
        )
        created = self._parse_book(response, operation="Create book")
        logger.info(f"Created book {created.book_id} at {response.headers.get('Location')}")
        return created

    async def update_book(self, book_id: int, book: BookUpdate) -> None:
        """
        Replace a book.

        Raises:
            BookIdMismatchError: If book.book_id does not match book_id
            BookNotFoundError: If the book does not exist
        """
        response = await self._send(
            "PUT",
            f"/Books/{book_id}",
            operation="Update book",
            json=book.model_dump(mode="json", by_alias=True),
        )
        if response.status_code == 400:
            raise BookIdMismatchError(book_id, book.book_id)
        if response.status_code == 404:
            raise BookNotFoundError(book_id)
        self._raise_for_status(response, operation="Update book")

    async def delete_book(self, book_id: int) -> None:
        """
        Delete a book.

        Raises:
            BookNotFoundError: If the book does not exist
        """
        response = await self._send("DELETE", f"/Books/{book_id}", operation="Delete book")
        if response.status_code == 404:
            raise BookNotFoundError(book_id)
        self._raise_for_status(response, operation="Delete book")

    async def _send(
        self,
        method: str,
        path: str,
        operation: str,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Send a write request to the resolved API."""
        base_url = await self.resolver.resolve_base_url()
        if base_url is None:
            raise SampleDataModeError(operation)

        try:
            return await self._http_client.request(method, f"{base_url}{path}", json=json)
        except httpx.HTTPError as e:
            logger.error(f"{operation} failed: {e!r}")
            raise ApiUnavailableError(f"{operation} failed: {e}") from e

    def _raise_for_status(self, response: httpx.Response, operation: str) -> None:
        """Turn an unexpected HTTP error status into ApiUnavailableError."""
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"{operation} failed: {e!r}")
            raise ApiUnavailableError(
                f"{operation} failed: HTTP {response.status_code}"
            ) from e

    def _parse_book(self, response: httpx.Response, operation: str) -> BookResponse:
        """Check the status and decode a Book body."""
        self._raise_for_status(response, operation)
        try:
            return BookResponse.model_validate(response.json())
        except ValueError as e:
            # Malformed JSON or a body that is not a Book
            logger.error(f"{operation} returned an invalid book: {e!r}")
            raise ApiUnavailableError(f"{operation} returned an invalid response") from e
