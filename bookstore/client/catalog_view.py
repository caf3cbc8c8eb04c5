"""
Catalog View

The state behind the public catalog page: which category, sort and page
the shopper is looking at, the page of books currently shown, and the
list of categories to choose from.

State transitions:
==================
- Changing the category, sort field, sort order or page size jumps back
  to page 1
- next_page / previous_page / go_to_page only move between pages
- Every transition reloads the catalog

Overlapping loads:
==================
Each load takes a generation number. When a load finishes, its result is
applied only if no newer load has started since; a slow response for an
old page can therefore never replace the page the shopper asked for last.
"""

import logging

import httpx

from bookstore.client.api import BookstoreClient
from bookstore.exceptions import BookstoreError
from bookstore.schemas import PagedBookResult
from bookstore.services.catalog import DEFAULT_PAGE_SIZE, DEFAULT_SORT_FIELD, MAX_PAGE_SIZE

logger = logging.getLogger(__name__)

# Pseudo-category offered by the category picker; means "no filter"
ALL_CATEGORIES = "All"


class CatalogView:
    """
    Catalog page state driven by BookstoreClient.

    Attributes:
        category: Active category filter ("" for all)
        sort_field / sort_order: Active sort
        page_number / page_size: Active page
        result: Last applied page, None before the first load
        categories: Distinct categories in the catalog, in catalog order
        loading: True while the latest load is in flight
        error: Banner text for the last failed load, None otherwise
    """

    def __init__(
        self,
        client: BookstoreClient,
        page_size: int = DEFAULT_PAGE_SIZE,
        sort_field: str = DEFAULT_SORT_FIELD,
        sort_order: str = "asc",
    ):
        self.client = client
        self.category = ""
        self.sort_field = sort_field
        self.sort_order = sort_order
        self.page_number = 1
        self.page_size = page_size

        self.result: PagedBookResult | None = None
        self.categories: list[str] = []
        self.loading = False
        self.error: str | None = None

        self._generation = 0

    @property
    def using_sample_data(self) -> bool:
        """Whether the sample-data banner should be shown."""
        return self.client.using_sample_data

    @property
    def total_pages(self) -> int:
        return self.result.total_pages if self.result else 0

    # -------------------------------------------------------------------------
    # Filter and sort changes (reset to page 1)
    # -------------------------------------------------------------------------
    async def set_category(self, category: str) -> None:
        self.category = "" if category == ALL_CATEGORIES else category
        self.page_number = 1
        await self.refresh()

    async def set_sort_field(self, sort_field: str) -> None:
        self.sort_field = sort_field
        self.page_number = 1
        await self.refresh()

    async def set_sort_order(self, sort_order: str) -> None:
        self.sort_order = sort_order
        self.page_number = 1
        await self.refresh()

    async def toggle_sort(self, sort_field: str) -> None:
        """Column-header sorting: same field flips the order, a new field sorts ascending."""
        if sort_field == self.sort_field:
            self.sort_order = "desc" if self.sort_order == "asc" else "asc"
        else:
            self.sort_field = sort_field
            self.sort_order = "asc"
        self.page_number = 1
        await self.refresh()

    async def set_page_size(self, page_size: int) -> None:
        self.page_size = page_size
        self.page_number = 1
        await self.refresh()

    # -------------------------------------------------------------------------
    # Navigation (page number only)
    # -------------------------------------------------------------------------
    async def go_to_page(self, page_number: int) -> None:
        self.page_number = max(page_number, 1)
        await self.refresh()

    async def next_page(self) -> None:
        if self.result is not None and self.page_number >= self.total_pages:
            return
        await self.go_to_page(self.page_number + 1)

    async def previous_page(self) -> None:
        if self.page_number <= 1:
            return
        await self.go_to_page(self.page_number - 1)

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------
    async def refresh(self) -> None:
        """
        Load the page for the current state.

        When no category filter is active the category list is rebuilt
        from the full catalog as well.
        """
        self._generation += 1
        generation = self._generation
        self.loading = True

        category = self.category
        categories = None
        try:
            page = await self.client.get_books(
                page_number=self.page_number,
                page_size=self.page_size,
                sort_field=self.sort_field,
                sort_order=self.sort_order,
                category=category,
            )
            if not category.strip() and page.total_count > 0:
                categories = await self._fetch_categories()
        except (BookstoreError, httpx.HTTPError) as e:
            if generation != self._generation:
                return
            logger.error(f"Error loading catalog: {e!r}")
            self.error = f"Failed to fetch books. Please try again later. Error: {e}"
            self.loading = False
            return

        if generation != self._generation:
            logger.debug(f"Discarding stale catalog response (generation {generation})")
            return

        self.result = page
        self.error = None
        if categories is not None:
            self.categories = categories
        self.loading = False

    async def _fetch_categories(self) -> list[str]:
        """
        Collect the distinct categories of the whole catalog.

        Reads the unfiltered catalog page by page at the largest page
        size, so every book is seen even when the catalog is bigger
        than one page.
        """
        seen: dict[str, None] = {}
        page_number = 1
        while True:
            page = await self.client.get_books(
                page_number=page_number,
                page_size=MAX_PAGE_SIZE,
                sort_field=self.sort_field,
                sort_order=self.sort_order,
                category="",
            )
            for book in page.books:
                seen.setdefault(book.category, None)
            if page_number >= page.total_pages:
                break
            page_number += 1
        return list(seen)
