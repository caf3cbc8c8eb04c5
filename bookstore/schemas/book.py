"""
Book Pydantic Schemas

Request and response shapes for the /api/Books endpoints.

Wire format:
- Field names are camelCase on the wire (bookId, pageCount, ...)
  and snake_case in Python. Requests may use either spelling.
- price is a JSON number; Python code works with Decimal.
"""

import re
from decimal import Decimal
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel


class BookClassification(str, Enum):
    """The two shelves every book belongs to."""

    FICTION = "Fiction"
    NON_FICTION = "Non-Fiction"


class CamelModel(BaseModel):
    """Base for schemas serialized with camelCase field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )


class BookBase(CamelModel):
    """
    Base schema with shared book fields.

    Contains validation for:
    - Required text fields (non-empty after trimming)
    - ISBN format (ISBN-10 or ISBN-13, hyphens allowed)
    - Price (non-negative, cents precision)
    - Page count (must be positive)
    """

    title: str = Field(
        ...,
        max_length=500,
        description="Book title",
        examples=["Clean Code", "Pride and Prejudice"],
    )

    author: str = Field(
        ...,
        max_length=500,
        description="Author name(s)",
        examples=["Robert C. Martin", "Andrew Hunt, David Thomas"],
    )

    publisher: str = Field(
        ...,
        max_length=255,
        description="Publishing house",
        examples=["Prentice Hall"],
    )

    isbn: str = Field(
        ...,
        max_length=20,
        description="ISBN-10 or ISBN-13, hyphens allowed",
        examples=["978-0132350884"],
    )

    classification: BookClassification = Field(
        ...,
        description="Fiction or Non-Fiction",
        examples=["Fiction"],
    )

    category: str = Field(
        ...,
        max_length=100,
        description="Shelf category",
        examples=["Software", "Classic"],
    )

    page_count: int = Field(
        ...,
        gt=0,
        le=50000,
        description="Number of pages",
        examples=[464],
    )

    price: Decimal = Field(
        ...,
        ge=0,
        le=Decimal("9999.99"),
        decimal_places=2,
        description="Book price in USD",
        examples=[39.99],
    )

    @field_validator("title", "author", "publisher", "category")
    @classmethod
    def text_must_not_be_empty(cls, v: str) -> str:
        """Trim text fields and reject blank values."""
        if not v.strip():
            raise ValueError("Value cannot be empty or whitespace")
        return v.strip()

    @field_validator("isbn")
    @classmethod
    def validate_isbn(cls, v: str) -> str:
        """
        Validate ISBN format.

        Accepts:
        - ISBN-10: 10 digits, last can be X
        - ISBN-13: 13 digits

        Hyphens and spaces are ignored for validation and the value is
        returned as entered, so "978-0132350884" round-trips unchanged.
        """
        v = v.strip()
        cleaned = re.sub(r"[-\s]", "", v)

        if len(cleaned) == 10:
            if not re.match(r"^\d{9}[\dX]$", cleaned):
                raise ValueError(
                    "Invalid ISBN-10 format. Must be 10 characters: "
                    "9 digits followed by a digit or 'X'"
                )
        elif len(cleaned) == 13:
            if not cleaned.isdigit():
                raise ValueError(
                    "Invalid ISBN-13 format. Must be exactly 13 digits"
                )
        else:
            raise ValueError(
                "ISBN must be either 10 or 13 characters "
                "(excluding hyphens)"
            )

        return v

    @field_serializer("price", when_used="json")
    def serialize_price(self, price: Decimal) -> float:
        return float(price)


class BookCreate(BookBase):
    """
    Schema for creating a new book.

    The identity is assigned by the database; a bookId sent by the
    client (admin forms usually send 0) is accepted and ignored.
    """

    book_id: int | None = Field(
        default=None,
        description="Ignored on create",
    )


class BookUpdate(BookBase):
    """
    Schema for replacing an existing book.

    PUT replaces the whole record, so every field is required.
    bookId must match the id in the URL.
    """

    book_id: int | None = Field(
        default=None,
        description="Must equal the id in the URL",
    )


class BookResponse(BookBase):
    """Schema for book responses, also the client's Book type."""

    book_id: int = Field(..., description="Unique identifier")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "bookId": 1,
                "title": "Clean Code",
                "author": "Robert C. Martin",
                "publisher": "Prentice Hall",
                "isbn": "978-0132350884",
                "classification": "Non-Fiction",
                "category": "Software",
                "pageCount": 464,
                "price": 39.99,
            }
        },
    )


class PagedBookResult(CamelModel):
    """
    Schema for one page of the catalog.

    Besides the books themselves, the envelope echoes the query
    (sortField, sortOrder, category) so a client can tell which
    request a page answers.

    Invariant:
        len(books) == min(pageSize, max(0, totalCount - (pageNumber - 1) * pageSize))
    """

    books: list[BookResponse] = Field(
        ...,
        description="Books on this page",
    )

    page_number: int = Field(
        ...,
        ge=1,
        description="Current page number",
    )

    page_size: int = Field(
        ...,
        ge=1,
        le=50,
        description="Number of books per page",
    )

    total_count: int = Field(
        ...,
        ge=0,
        description="Books matching the filter, before pagination",
    )

    total_pages: int = Field(
        ...,
        ge=0,
        description="ceil(totalCount / pageSize)",
    )

    sort_field: str = Field(
        default="title",
        description="Requested sort field",
    )

    sort_order: Literal["asc", "desc"] = Field(
        default="asc",
        description="Sort direction",
    )

    category: str = Field(
        default="",
        description="Requested category filter, empty for none",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "books": [],
                "pageNumber": 1,
                "pageSize": 5,
                "totalCount": 10,
                "totalPages": 2,
                "sortField": "title",
                "sortOrder": "asc",
                "category": "",
            }
        },
    )
