"""
Books Router

CRUD endpoints for the catalog, mounted under /api:

    GET    /api/Books          paginated, sortable, filterable catalog
    GET    /api/Books/{id}     one book
    POST   /api/Books          create (201 + Location header)
    PUT    /api/Books/{id}     replace (204)
    DELETE /api/Books/{id}     delete (204)

Business rules live in bookstore.services; the handlers here only
translate between HTTP and the service functions. Not-found and
id-mismatch errors are mapped to 404/400 by handlers in main.py.
"""

from fastapi import APIRouter, Request, Response, status

from bookstore.config import get_settings
from bookstore.dependencies import CatalogParams, DbSession
from bookstore.schemas import BookCreate, BookResponse, BookUpdate, PagedBookResult
from bookstore.services import books as book_service
from bookstore.services.catalog import query_books
from bookstore.services.rate_limiter import limiter

settings = get_settings()

router = APIRouter(
    prefix="/Books",
    tags=["Books"],
    responses={
        404: {"description": "Book not found"},
    },
)


@router.get(
    "",
    response_model=PagedBookResult,
    summary="List books",
    description="Get one page of the catalog, optionally filtered by category and sorted by any book field.",
)
@limiter.limit(settings.rate_limit_default)
def list_books(
    request: Request,
    db: DbSession,
    params: CatalogParams,
) -> PagedBookResult:
    """
    List books with pagination, sorting and category filtering.

    Examples:
        GET /api/Books?pageNumber=1&pageSize=5
        GET /api/Books?sortField=price&sortOrder=desc
        GET /api/Books?category=Classic
    """
    return query_books(
        db,
        page_number=params.page_number,
        page_size=params.page_size,
        sort_field=params.sort_field,
        sort_order=params.sort_order,
        category=params.category,
    )


@router.get(
    "/{book_id}",
    response_model=BookResponse,
    summary="Get a book by ID",
)
@limiter.limit(settings.rate_limit_default)
def get_book(
    request: Request,
    book_id: int,
    db: DbSession,
) -> BookResponse:
    """Get a single book by its ID."""
    book = book_service.get_book(db, book_id)
    return BookResponse.model_validate(book)


@router.post(
    "",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new book",
    description="Create a book. The id is assigned by the server and returned in the Location header.",
)
@limiter.limit(settings.rate_limit_write)
def create_book(
    request: Request,
    response: Response,
    book_data: BookCreate,
    db: DbSession,
) -> BookResponse:
    """
    Create a new book.

    Returns 201 Created with a Location header pointing at
    GET /api/Books/{id} for the new record.
    """
    book = book_service.create_book(db, book_data)
    response.headers["Location"] = str(request.url_for("get_book", book_id=book.book_id))
    return BookResponse.model_validate(book)


@router.put(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Replace a book",
    description="Replace every field of a book. The body's bookId must match the URL.",
    responses={
        400: {"description": "bookId in the body does not match the URL"},
    },
)
@limiter.limit(settings.rate_limit_write)
def update_book(
    request: Request,
    book_id: int,
    book_data: BookUpdate,
    db: DbSession,
) -> None:
    """Replace an existing book; 204 No Content on success."""
    book_service.update_book(db, book_id, book_data)


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a book",
)
@limiter.limit(settings.rate_limit_write)
def delete_book(
    request: Request,
    book_id: int,
    db: DbSession,
) -> None:
    """Delete a book; 204 No Content on success."""
    book_service.delete_book(db, book_id)
