"""
SQLAlchemy Models Package

The bookstore has a single table, books.

Import models here to:
1. Make them available as: from bookstore.models import Book
2. Ensure Alembic discovers them for migrations
"""

from bookstore.models.book import Book

__all__ = [
    "Book",
]
