"""
Catalog Query Service

Turns the catalog query parameters (pageNumber, pageSize, sortField,
sortOrder, category) into one page of books.

Two implementations share the same rules:
- query_books(): runs against the database (used by GET /api/Books)
- paginate_books(): runs over an in-memory sequence (used by the client
  when it serves the built-in sample catalog)

Rules:
=====
1. pageNumber below 1 becomes 1
2. pageSize below 1 becomes 5, above 50 becomes 50
3. A blank category means no filter; otherwise exact, case-insensitive match
4. totalCount is counted after filtering, before pagination
5. sortField is matched case-insensitively against SORT_FIELDS,
   anything else sorts by title
6. Ties are broken on bookId in the sort direction, so a descending
   page is the exact reverse of the ascending one
7. A page past the end is empty, not an error
"""

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from bookstore.models import Book
from bookstore.schemas import BookResponse, PagedBookResult

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 5
MAX_PAGE_SIZE = 50
DEFAULT_SORT_FIELD = "title"

# Request field name (lowercase) -> Book attribute
SORT_FIELDS: dict[str, str] = {
    "title": "title",
    "author": "author",
    "publisher": "publisher",
    "isbn": "isbn",
    "classification": "classification",
    "category": "category",
    "pagecount": "page_count",
    "price": "price",
}


def normalize_page_number(page_number: int) -> int:
    return max(page_number, 1)


def normalize_page_size(page_size: int) -> int:
    """Apply the page size bounds: <1 falls back to the default, >50 is capped."""
    if page_size < 1:
        return DEFAULT_PAGE_SIZE
    return min(page_size, MAX_PAGE_SIZE)


def normalize_sort_order(sort_order: str | None) -> str:
    if sort_order and sort_order.strip().lower() == "desc":
        return "desc"
    return "asc"


def resolve_sort_attribute(sort_field: str | None) -> str:
    """Map a requested sort field to a Book attribute, defaulting to title."""
    key = (sort_field or "").strip().lower()
    return SORT_FIELDS.get(key, SORT_FIELDS[DEFAULT_SORT_FIELD])


def count_pages(total_count: int, page_size: int) -> int:
    return math.ceil(total_count / page_size)


@dataclass(frozen=True)
class CatalogQuery:
    """
    A normalized catalog query.

    Build instances with CatalogQuery.normalized(), which applies the
    clamping rules; the fields are then safe to use directly.
    """

    page_number: int
    page_size: int
    sort_field: str
    sort_order: str
    category: str

    @classmethod
    def normalized(
        cls,
        page_number: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        sort_field: str | None = DEFAULT_SORT_FIELD,
        sort_order: str | None = "asc",
        category: str | None = "",
    ) -> "CatalogQuery":
        return cls(
            page_number=normalize_page_number(page_number),
            page_size=normalize_page_size(page_size),
            sort_field=sort_field or DEFAULT_SORT_FIELD,
            sort_order=normalize_sort_order(sort_order),
            category=category or "",
        )

    @property
    def offset(self) -> int:
        return (self.page_number - 1) * self.page_size

    @property
    def descending(self) -> bool:
        return self.sort_order == "desc"

    @property
    def sort_attribute(self) -> str:
        return resolve_sort_attribute(self.sort_field)

    @property
    def category_filter(self) -> str | None:
        """The category to filter on, or None when the request has no filter."""
        if not self.category.strip():
            return None
        return self.category

    def envelope(self, books: list[BookResponse], total_count: int) -> PagedBookResult:
        """Wrap one page of books in the response envelope."""
        return PagedBookResult(
            books=books,
            page_number=self.page_number,
            page_size=self.page_size,
            total_count=total_count,
            total_pages=count_pages(total_count, self.page_size),
            sort_field=self.sort_field,
            sort_order=self.sort_order,
            category=self.category,
        )


# =============================================================================
# Database Implementation
# =============================================================================
def query_books(
    db: Session,
    page_number: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
    sort_field: str | None = DEFAULT_SORT_FIELD,
    sort_order: str | None = "asc",
    category: str | None = "",
) -> PagedBookResult:
    """
    Fetch one catalog page from the database.

    Args:
        db: Database session
        page_number: 1-based page number (clamped to >= 1)
        page_size: Books per page (clamped to 1..50)
        sort_field: Field to sort by (unknown fields sort by title)
        sort_order: "asc" or "desc"
        category: Category filter, blank for all books

    Returns:
        PagedBookResult for the requested page
    """
    query = CatalogQuery.normalized(page_number, page_size, sort_field, sort_order, category)

    stmt = select(Book)
    wanted = query.category_filter
    if wanted is not None:
        stmt = stmt.where(func.lower(Book.category) == wanted.lower())

    # Count before pagination so totalPages reflects the whole filtered set
    count_stmt = select(func.count()).select_from(stmt.subquery())
    total_count = db.execute(count_stmt).scalar() or 0

    # Past the last page; also keeps huge offsets away from the driver
    if query.offset >= total_count:
        return query.envelope([], total_count)

    column = getattr(Book, query.sort_attribute)
    if query.descending:
        ordering = (column.desc(), Book.book_id.desc())
    else:
        ordering = (column.asc(), Book.book_id.asc())

    stmt = (
        stmt
        .order_by(*ordering)
        .offset(query.offset)
        .limit(query.page_size)
    )
    books = db.execute(stmt).scalars().all()

    logger.debug(
        f"Catalog page {query.page_number} (size {query.page_size}, "
        f"sort {query.sort_attribute} {query.sort_order}, category '{query.category}'): "
        f"{len(books)} of {total_count} books"
    )

    return query.envelope(
        [BookResponse.model_validate(book) for book in books],
        total_count,
    )


# =============================================================================
# In-Memory Implementation
# =============================================================================
def paginate_books(
    books: Iterable[BookResponse],
    page_number: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
    sort_field: str | None = DEFAULT_SORT_FIELD,
    sort_order: str | None = "asc",
    category: str | None = "",
) -> PagedBookResult:
    """
    Apply the catalog query rules to an in-memory sequence of books.

    Produces the same page the API would return for the same data.
    """
    query = CatalogQuery.normalized(page_number, page_size, sort_field, sort_order, category)

    matching = list(books)
    wanted = query.category_filter
    if wanted is not None:
        matching = [book for book in matching if book.category.lower() == wanted.lower()]

    attribute = query.sort_attribute
    ordered = sorted(
        matching,
        key=lambda book: (getattr(book, attribute), book.book_id),
        reverse=query.descending,
    )

    page = ordered[query.offset:query.offset + query.page_size]
    return query.envelope(page, len(matching))
