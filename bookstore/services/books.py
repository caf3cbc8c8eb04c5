"""
Admin Book Service

Create, read, update and delete for single books.

The router stays thin: it calls these functions and lets the exception
handlers in main.py turn BookNotFoundError / BookIdMismatchError into
404 / 400 responses.

Update semantics:
- PUT replaces the whole record (no partial updates)
- The body's bookId must equal the URL id; this is checked before the
  database is touched
- If the row disappears between the lookup and the commit, the caller
  gets BookNotFoundError instead of a concurrency error
"""

import logging

from sqlalchemy import exists, select
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from bookstore.exceptions import BookIdMismatchError, BookNotFoundError
from bookstore.models import Book
from bookstore.schemas import BookCreate, BookUpdate

logger = logging.getLogger(__name__)


def book_exists(db: Session, book_id: int) -> bool:
    """Check whether a book with this id is stored."""
    stmt = select(exists().where(Book.book_id == book_id))
    return bool(db.execute(stmt).scalar())


def get_book(db: Session, book_id: int) -> Book:
    """
    Get a book by ID.

    Raises:
        BookNotFoundError: If no book has this id
    """
    book = db.get(Book, book_id)
    if book is None:
        raise BookNotFoundError(book_id)
    return book


def create_book(db: Session, book_data: BookCreate) -> Book:
    """
    Create a new book.

    The database assigns the id; any bookId in the request is dropped.

    Returns:
        The stored book with book_id populated
    """
    book = Book(**book_data.model_dump(exclude={"book_id"}))

    db.add(book)
    db.commit()
    db.refresh(book)

    logger.info(f"Created book {book.book_id}: '{book.title}'")
    return book


def update_book(db: Session, book_id: int, book_data: BookUpdate) -> Book:
    """
    Replace an existing book.

    Args:
        db: Database session
        book_id: Id from the URL
        book_data: Complete replacement record

    Returns:
        The updated book

    Raises:
        BookIdMismatchError: If book_data.book_id differs from book_id
        BookNotFoundError: If the book does not exist (or vanished mid-update)
    """
    if book_data.book_id != book_id:
        raise BookIdMismatchError(book_id, book_data.book_id)

    book = get_book(db, book_id)

    for field, value in book_data.model_dump(exclude={"book_id"}).items():
        setattr(book, field, value)

    try:
        db.commit()
    except StaleDataError:
        db.rollback()
        if not book_exists(db, book_id):
            logger.warning(f"Book {book_id} was deleted during update")
            raise BookNotFoundError(book_id) from None
        raise

    db.refresh(book)
    logger.info(f"Updated book {book_id}")
    return book


def delete_book(db: Session, book_id: int) -> None:
    """
    Delete a book.

    Raises:
        BookNotFoundError: If no book has this id
    """
    book = get_book(db, book_id)
    db.delete(book)
    db.commit()

    logger.info(f"Deleted book {book_id}")
