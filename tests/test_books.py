"""
Tests for Books API Endpoints

This module tests the /api/Books endpoints: the catalog listing and the
admin CRUD operations.

TEST NAMING CONVENTION:
- test_<action>_<scenario>
- Examples: test_create_book_success, test_get_book_not_found

Field names on the wire are camelCase (bookId, pageCount, ...).
"""

import pytest
from fastapi import status


class TestListBooks:
    """Tests for GET /api/Books endpoint."""

    def test_list_books_empty(self, client):
        """An empty catalog is one empty page, not an error."""
        response = client.get("/api/Books")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["books"] == []
        assert data["totalCount"] == 0
        assert data["totalPages"] == 0
        assert data["pageNumber"] == 1
        assert data["pageSize"] == 5

    def test_list_books_defaults(self, client, sample_catalog):
        """Without parameters: page 1, 5 books, sorted by title ascending."""
        response = client.get("/api/Books")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["totalCount"] == 10
        assert data["totalPages"] == 2
        assert data["sortField"] == "title"
        assert data["sortOrder"] == "asc"
        assert data["category"] == ""
        titles = [book["title"] for book in data["books"]]
        assert titles == [
            "Atomic Habits",
            "Becoming",
            "Clean Code",
            "Design Patterns",
            "Pride and Prejudice",
        ]

    def test_list_books_camel_case_fields(self, client, sample_catalog):
        """Books are serialized with camelCase keys and a numeric price."""
        response = client.get("/api/Books?pageSize=1")

        book = response.json()["books"][0]
        assert set(book) == {
            "bookId",
            "title",
            "author",
            "publisher",
            "isbn",
            "classification",
            "category",
            "pageCount",
            "price",
        }
        assert isinstance(book["price"], float)

    def test_list_books_category_filter(self, client, sample_catalog):
        """Category filter returns exactly the books of that category."""
        response = client.get("/api/Books?category=Classic&pageSize=10")

        data = response.json()
        assert data["totalCount"] == 3
        assert data["category"] == "Classic"
        assert {book["bookId"] for book in data["books"]} == {8, 9, 10}

    def test_list_books_sort_desc(self, client, sample_catalog):
        """sortOrder=desc sorts by the requested field descending."""
        response = client.get("/api/Books?sortField=price&sortOrder=desc&pageSize=3")

        data = response.json()
        prices = [book["price"] for book in data["books"]]
        assert prices == [49.99, 39.99, 39.95]
        assert data["sortField"] == "price"
        assert data["sortOrder"] == "desc"

    def test_list_books_page_size_clamped(self, client, sample_catalog):
        """pageSize above 50 is capped instead of rejected."""
        response = client.get("/api/Books?pageSize=500")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["pageSize"] == 50
        assert len(data["books"]) == 10
        assert data["totalPages"] == 1

    def test_list_books_page_past_end(self, client, sample_catalog):
        """A page past the last one is empty but keeps the totals."""
        response = client.get("/api/Books?pageNumber=3&pageSize=5")

        data = response.json()
        assert data["books"] == []
        assert data["totalCount"] == 10
        assert data["totalPages"] == 2
        assert data["pageNumber"] == 3

    def test_list_books_huge_page_number(self, client, sample_catalog):
        """A page number far beyond any offset the database accepts is still just empty."""
        response = client.get("/api/Books", params={"pageNumber": 10**19, "pageSize": 5})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["books"] == []
        assert data["totalCount"] == 10
        assert data["totalPages"] == 2

    def test_list_books_invalid_page_number_type(self, client):
        """Non-integer pageNumber is a validation error."""
        response = client.get("/api/Books?pageNumber=first")

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestGetBook:
    """Tests for GET /api/Books/{book_id} endpoint."""

    def test_get_book_success(self, client, sample_book):
        """Test getting a book by ID."""
        response = client.get(f"/api/Books/{sample_book.book_id}")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["bookId"] == sample_book.book_id
        assert data["title"] == "Clean Code"
        assert data["isbn"] == "978-0132350884"
        assert data["pageCount"] == 464
        assert data["price"] == 39.99

    def test_get_book_not_found(self, client):
        """Test getting a non-existent book returns 404."""
        response = client.get("/api/Books/99999")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert "not found" in response.json()["detail"].lower()


class TestCreateBook:
    """Tests for POST /api/Books endpoint."""

    def test_create_book_success(self, client, book_payload):
        """Created book is returned with its id and a Location header."""
        response = client.post("/api/Books", json=book_payload)

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["bookId"] > 0
        assert data["title"] == "Refactoring"
        assert data["price"] == 47.99
        assert response.headers["location"].endswith(f"/api/Books/{data['bookId']}")

    def test_create_book_location_is_fetchable(self, client, book_payload):
        """The Location header points at the new book."""
        created = client.post("/api/Books", json=book_payload)

        response = client.get(created.headers["location"])

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == created.json()

    def test_create_book_ignores_body_id(self, client, sample_book, book_payload):
        """A bookId in the body never overwrites an existing book."""
        book_payload["bookId"] = sample_book.book_id

        response = client.post("/api/Books", json=book_payload)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["bookId"] != sample_book.book_id
        original = client.get(f"/api/Books/{sample_book.book_id}").json()
        assert original["title"] == "Clean Code"

    def test_create_book_accepts_snake_case(self, client, book_payload):
        """Requests may also use the Python field names."""
        book_payload["page_count"] = book_payload.pop("pageCount")

        response = client.post("/api/Books", json=book_payload)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["pageCount"] == 448

    def test_create_book_trims_text(self, client, book_payload):
        """Surrounding whitespace is stripped from text fields."""
        book_payload["title"] = "  Refactoring  "

        response = client.post("/api/Books", json=book_payload)

        assert response.json()["title"] == "Refactoring"

    @pytest.mark.parametrize(
        "field, value",
        [
            ("title", ""),
            ("author", "   "),
            ("isbn", "12345"),
            ("isbn", "978-01323508AB"),
            ("classification", "Poetry"),
            ("pageCount", 0),
            ("price", -1),
            ("price", 10.999),
        ],
    )
    def test_create_book_invalid_field(self, client, book_payload, field, value):
        """Invalid field values are rejected with 422."""
        book_payload[field] = value

        response = client.post("/api/Books", json=book_payload)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_create_book_missing_field(self, client, book_payload):
        """Every field except bookId is required."""
        del book_payload["publisher"]

        response = client.post("/api/Books", json=book_payload)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_create_book_isbn10_with_x(self, client, book_payload):
        """ISBN-10 may end in X and is stored as entered."""
        book_payload["isbn"] = "0-306-40615-X"

        response = client.post("/api/Books", json=book_payload)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["isbn"] == "0-306-40615-X"


class TestUpdateBook:
    """Tests for PUT /api/Books/{book_id} endpoint."""

    def test_update_book_success(self, client, sample_book, book_payload):
        """PUT replaces every field and answers 204 with no body."""
        book_payload["bookId"] = sample_book.book_id

        response = client.put(f"/api/Books/{sample_book.book_id}", json=book_payload)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert response.content == b""
        data = client.get(f"/api/Books/{sample_book.book_id}").json()
        assert data["title"] == "Refactoring"
        assert data["author"] == "Martin Fowler"
        assert data["pageCount"] == 448

    def test_update_book_id_mismatch(self, client, sample_book, book_payload):
        """A bookId that differs from the URL is rejected with 400."""
        book_payload["bookId"] = sample_book.book_id + 1

        response = client.put(f"/api/Books/{sample_book.book_id}", json=book_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        data = client.get(f"/api/Books/{sample_book.book_id}").json()
        assert data["title"] == "Clean Code"

    def test_update_book_missing_id(self, client, sample_book, book_payload):
        """Omitting bookId counts as a mismatch."""
        response = client.put(f"/api/Books/{sample_book.book_id}", json=book_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_update_book_not_found(self, client, book_payload):
        """Updating a non-existent book returns 404."""
        book_payload["bookId"] = 99999

        response = client.put("/api/Books/99999", json=book_payload)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_update_book_invalid_body(self, client, sample_book, book_payload):
        """Validation runs before the id checks."""
        book_payload["bookId"] = sample_book.book_id
        book_payload["pageCount"] = -5

        response = client.put(f"/api/Books/{sample_book.book_id}", json=book_payload)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestDeleteBook:
    """Tests for DELETE /api/Books/{book_id} endpoint."""

    def test_delete_book_success(self, client, sample_book):
        """Test deleting a book."""
        response = client.delete(f"/api/Books/{sample_book.book_id}")

        assert response.status_code == status.HTTP_204_NO_CONTENT

        # Verify it's deleted
        get_response = client.get(f"/api/Books/{sample_book.book_id}")
        assert get_response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_book_not_found(self, client):
        """Test deleting a non-existent book returns 404."""
        response = client.delete("/api/Books/99999")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_book_removes_from_catalog(self, client, sample_catalog):
        """A deleted book no longer counts towards totalCount."""
        client.delete("/api/Books/8")

        data = client.get("/api/Books?category=Classic").json()
        assert data["totalCount"] == 2
        assert 8 not in {book["bookId"] for book in data["books"]}


class TestHealth:
    """Tests for the service endpoints."""

    def test_health_check(self, client):
        response = client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "healthy"

    def test_root_points_at_books(self, client):
        response = client.get("/")

        assert response.json()["books"] == "/api/Books"
