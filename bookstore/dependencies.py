"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() function manages their lifecycle.

- DbSession: one SQLAlchemy session per request
- CatalogParams: the catalog query string (pageNumber, pageSize, ...)
"""

from typing import Annotated

from fastapi import Depends, Query
from sqlalchemy.orm import Session

from bookstore.database import get_db
from bookstore.services.catalog import DEFAULT_PAGE_SIZE, DEFAULT_SORT_FIELD

# Instead of writing:
#   def get_books(db: Session = Depends(get_db)):
#
# You can write:
#   def get_books(db: DbSession):

DbSession = Annotated[Session, Depends(get_db)]


# =============================================================================
# Catalog Query Parameters
# =============================================================================
class CatalogQueryParams:
    """
    Query string parameters of the catalog endpoint.

    The names are camelCase on the wire:
        GET /api/Books?pageNumber=2&pageSize=10&sortField=price&sortOrder=desc&category=Classic

    Out-of-range paging values are not rejected here; they are clamped
    by the catalog service (pageSize=500 gives a page of 50).
    """

    def __init__(
        self,
        page_number: int = Query(
            default=1,
            alias="pageNumber",
            description="Page number (1-indexed, values below 1 become 1)",
            examples=[1, 2],
        ),
        page_size: int = Query(
            default=DEFAULT_PAGE_SIZE,
            alias="pageSize",
            description="Books per page (1-50; below 1 becomes 5, above 50 becomes 50)",
            examples=[5, 10, 20, 50],
        ),
        sort_field: str = Query(
            default=DEFAULT_SORT_FIELD,
            alias="sortField",
            max_length=50,
            description=(
                "title, author, publisher, isbn, classification, category, "
                "pageCount or price (anything else sorts by title)"
            ),
            examples=["title", "price"],
        ),
        sort_order: str = Query(
            default="asc",
            alias="sortOrder",
            max_length=10,
            description="asc or desc",
            examples=["asc", "desc"],
        ),
        category: str = Query(
            default="",
            max_length=100,
            description="Exact category, case-insensitive (blank for all)",
            examples=["Classic", "Software"],
        ),
    ) -> None:
        self.page_number = page_number
        self.page_size = page_size
        self.sort_field = sort_field
        self.sort_order = sort_order
        self.category = category


CatalogParams = Annotated[CatalogQueryParams, Depends()]
