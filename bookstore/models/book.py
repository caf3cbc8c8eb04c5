"""
Book Model

The only model of the bookstore, representing books for sale.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from bookstore.database import Base


class Book(Base):
    """
    Book model representing books in the store catalog.

    Table: books

    Fields:
    - title, author, publisher: Descriptive text (required)
    - isbn: International Standard Book Number, as entered
    - classification: "Fiction" or "Non-Fiction"
    - category: Free text shelf category ("Classic", "Software", ...)
    - page_count: Number of pages
    - price: Book price with 2 decimal precision

    Indexes:
    - Primary key on book_id (automatic)
    - title: Default sort order for the catalog
    - category: Catalog filter

    Example:
        book = Book(
            title="The Great Gatsby",
            author="F. Scott Fitzgerald",
            publisher="Scribner",
            isbn="978-0743273565",
            classification="Fiction",
            category="Classic",
            page_count=180,
            price=Decimal("17.00"),
        )
    """

    __tablename__ = "books"

    # -------------------------------------------------------------------------
    # Primary Key
    # -------------------------------------------------------------------------
    # Assigned by the database on insert, never changed afterwards
    book_id: Mapped[int] = mapped_column(Integer, primary_key=True)

    # -------------------------------------------------------------------------
    # Basic Fields
    # -------------------------------------------------------------------------
    title: Mapped[str] = mapped_column(
        String(500),
        index=True,
        nullable=False,
        comment="Book title"
    )

    author: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        comment="Author name(s), comma separated"
    )

    publisher: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Publishing house"
    )

    # Not unique: the store may list several editions under one ISBN
    isbn: Mapped[str] = mapped_column(
        String(20),
        index=True,
        nullable=False,
        comment="International Standard Book Number"
    )

    classification: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        comment="Fiction or Non-Fiction"
    )

    category: Mapped[str] = mapped_column(
        String(100),
        index=True,
        nullable=False,
        comment="Shelf category used for catalog filtering"
    )

    page_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Number of pages in the book"
    )

    # Numeric(10, 2) = up to 10 digits, 2 after decimal point
    price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        comment="Book price in USD"
    )

    # -------------------------------------------------------------------------
    # Timestamps
    # -------------------------------------------------------------------------
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"Book(book_id={self.book_id}, title='{self.title}', isbn='{self.isbn}')"
