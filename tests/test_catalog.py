"""
Tests for the Catalog Query Service

Every rule is checked against both implementations: query_books() over
the database and paginate_books() over the in-memory sample catalog.
Both hold the same ten books, so both must produce the same pages.
"""

import math

import pytest

from bookstore.services.catalog import (
    CatalogQuery,
    count_pages,
    normalize_page_size,
    paginate_books,
    query_books,
    resolve_sort_attribute,
)


@pytest.fixture(params=["database", "memory"])
def fetch_page(request):
    """Return a function that fetches a catalog page from one implementation."""
    if request.param == "database":
        db_session = request.getfixturevalue("db_session")
        request.getfixturevalue("sample_catalog")
        return lambda **params: query_books(db_session, **params)

    books = request.getfixturevalue("books")
    return lambda **params: paginate_books(books, **params)


def ids(page):
    return [book.book_id for book in page.books]


class TestNormalization:
    """Tests for the parameter clamping helpers."""

    @pytest.mark.parametrize(
        "requested, expected",
        [(0, 5), (-3, 5), (1, 1), (5, 5), (50, 50), (51, 50), (1000, 50)],
    )
    def test_normalize_page_size(self, requested, expected):
        assert normalize_page_size(requested) == expected

    def test_normalized_query_clamps_page_number(self):
        query = CatalogQuery.normalized(page_number=-2)

        assert query.page_number == 1
        assert query.offset == 0

    @pytest.mark.parametrize("sort_order", ["desc", "DESC", " Desc "])
    def test_sort_order_desc_variants(self, sort_order):
        assert CatalogQuery.normalized(sort_order=sort_order).sort_order == "desc"

    @pytest.mark.parametrize("sort_order", ["asc", "", None, "sideways"])
    def test_sort_order_defaults_to_asc(self, sort_order):
        assert CatalogQuery.normalized(sort_order=sort_order).sort_order == "asc"

    @pytest.mark.parametrize(
        "sort_field, attribute",
        [
            ("title", "title"),
            ("Price", "price"),
            ("pageCount", "page_count"),
            ("PAGECOUNT", "page_count"),
            ("isbn", "isbn"),
            ("shoeSize", "title"),
            ("", "title"),
            (None, "title"),
        ],
    )
    def test_resolve_sort_attribute(self, sort_field, attribute):
        assert resolve_sort_attribute(sort_field) == attribute

    @pytest.mark.parametrize("category", ["", "   ", None])
    def test_blank_category_means_no_filter(self, category):
        assert CatalogQuery.normalized(category=category).category_filter is None

    @pytest.mark.parametrize(
        "total_count, page_size, pages",
        [(0, 5, 0), (1, 5, 1), (10, 5, 2), (11, 5, 3), (10, 50, 1)],
    )
    def test_count_pages(self, total_count, page_size, pages):
        assert count_pages(total_count, page_size) == pages


class TestCatalogPages:
    """Tests for the page each implementation returns."""

    @pytest.mark.parametrize("page_size", [1, 3, 4, 5, 7, 10, 50])
    def test_page_lengths_cover_catalog(self, fetch_page, page_size):
        """Every page has the expected length and the pages cover each book once."""
        first = fetch_page(page_size=page_size)
        seen = []
        for page_number in range(1, first.total_pages + 2):
            page = fetch_page(page_number=page_number, page_size=page_size)
            offset = (page_number - 1) * page_size
            assert len(page.books) == min(page_size, max(0, page.total_count - offset))
            seen.extend(ids(page))

        assert first.total_pages == math.ceil(10 / page_size)
        assert sorted(seen) == list(range(1, 11))

    def test_defaults(self, fetch_page):
        page = fetch_page()

        assert page.page_number == 1
        assert page.page_size == 5
        assert page.total_count == 10
        assert page.total_pages == 2
        assert page.sort_field == "title"
        assert page.sort_order == "asc"
        assert ids(page) == [6, 5, 1, 2, 9]

    def test_page_past_end_is_empty(self, fetch_page):
        page = fetch_page(page_number=3, page_size=5)

        assert page.books == []
        assert page.total_count == 10
        assert page.total_pages == 2

    @pytest.mark.parametrize("page_number", [2**31, 2**63, 10**19])
    def test_huge_page_number_is_empty(self, fetch_page, page_number):
        page = fetch_page(page_number=page_number, page_size=5)

        assert page.books == []
        assert page.page_number == page_number
        assert page.total_count == 10

    def test_empty_filter_result_skips_paging(self, fetch_page):
        page = fetch_page(page_number=10**19, category="Poetry")

        assert page.books == []
        assert page.total_count == 0

    def test_page_size_above_max(self, fetch_page):
        page = fetch_page(page_size=100)

        assert page.page_size == 50
        assert len(page.books) == 10

    def test_page_size_below_one(self, fetch_page):
        page = fetch_page(page_size=0)

        assert page.page_size == 5
        assert len(page.books) == 5

    def test_page_number_below_one(self, fetch_page):
        page = fetch_page(page_number=0)

        assert page.page_number == 1
        assert ids(page) == ids(fetch_page(page_number=1))

    @pytest.mark.parametrize(
        "sort_field",
        ["title", "author", "publisher", "isbn", "classification", "category", "pageCount", "price"],
    )
    def test_desc_is_reverse_of_asc(self, fetch_page, sort_field):
        """With all books on one page, descending is exactly ascending reversed."""
        ascending = fetch_page(page_size=50, sort_field=sort_field, sort_order="asc")
        descending = fetch_page(page_size=50, sort_field=sort_field, sort_order="desc")

        assert ids(descending) == list(reversed(ids(ascending)))

    def test_sort_by_price(self, fetch_page):
        page = fetch_page(page_size=3, sort_field="price")

        assert ids(page) == [9, 8, 10]

    def test_sort_by_page_count_desc(self, fetch_page):
        page = fetch_page(page_size=2, sort_field="pageCount", sort_order="desc")

        assert ids(page) == [4, 9]

    def test_category_ties_broken_by_id(self, fetch_page):
        """Books in the same category are ordered by id."""
        page = fetch_page(page_size=50, sort_field="category")

        assert ids(page) == [4, 5, 8, 9, 10, 6, 7, 1, 2, 3]

    def test_unknown_sort_field_sorts_by_title(self, fetch_page):
        page = fetch_page(sort_field="shoeSize")

        assert ids(page) == ids(fetch_page(sort_field="title"))
        assert page.sort_field == "shoeSize"

    @pytest.mark.parametrize("sort_field", ["title", "price", "pageCount"])
    @pytest.mark.parametrize("sort_order", ["asc", "desc"])
    def test_category_filter(self, fetch_page, sort_field, sort_order):
        """The filter selects the same books whatever the sort."""
        page = fetch_page(
            page_size=10,
            sort_field=sort_field,
            sort_order=sort_order,
            category="Classic",
        )

        assert set(ids(page)) == {8, 9, 10}
        assert page.total_count == 3
        assert page.total_pages == 1
        assert all(book.category == "Classic" for book in page.books)

    def test_category_filter_is_case_insensitive(self, fetch_page):
        page = fetch_page(category="classic")

        assert set(ids(page)) == {8, 9, 10}
        assert page.category == "classic"

    def test_category_filter_paginates(self, fetch_page):
        page = fetch_page(page_number=2, page_size=2, category="Software")

        assert page.total_count == 3
        assert page.total_pages == 2
        assert len(page.books) == 1

    def test_whitespace_category_is_no_filter(self, fetch_page):
        page = fetch_page(category="   ")

        assert page.total_count == 10

    def test_unknown_category_is_empty(self, fetch_page):
        page = fetch_page(category="Poetry")

        assert page.books == []
        assert page.total_count == 0
        assert page.total_pages == 0


class TestSampleData:
    """Tests for the in-memory sample catalog."""

    def test_sample_books_are_fresh_copies(self, books):
        from bookstore.client.sample_data import sample_books

        books[0] = books[0].model_copy(update={"title": "Changed"})

        assert sample_books()[0].title == "Clean Code"

    def test_sample_catalog_categories(self, books):
        assert [book.category for book in books] == [
            "Software", "Software", "Software",
            "Biography", "Biography",
            "Self-Help", "Self-Help",
            "Classic", "Classic", "Classic",
        ]
