"""
Built-in Sample Catalog

Ten books the client shows when no API endpoint can be reached, and the
seed script loads into an empty database. The records are kept as
immutable tuples; sample_books() builds fresh BookResponse objects on
every call so callers can never alter the dataset.
"""

from decimal import Decimal
from types import MappingProxyType

from bookstore.schemas import BookResponse

SAMPLE_BOOKS = (
    MappingProxyType({
        "book_id": 1,
        "title": "Clean Code",
        "author": "Robert C. Martin",
        "publisher": "Prentice Hall",
        "isbn": "978-0132350884",
        "classification": "Non-Fiction",
        "category": "Software",
        "page_count": 464,
        "price": Decimal("39.99"),
    }),
    MappingProxyType({
        "book_id": 2,
        "title": "Design Patterns",
        "author": "Erich Gamma, Richard Helm, Ralph Johnson, John Vlissides",
        "publisher": "Addison-Wesley",
        "isbn": "978-0201633610",
        "classification": "Non-Fiction",
        "category": "Software",
        "page_count": 395,
        "price": Decimal("49.99"),
    }),
    MappingProxyType({
        "book_id": 3,
        "title": "The Pragmatic Programmer",
        "author": "Andrew Hunt, David Thomas",
        "publisher": "Addison-Wesley",
        "isbn": "978-0201616224",
        "classification": "Non-Fiction",
        "category": "Software",
        "page_count": 352,
        "price": Decimal("39.95"),
    }),
    MappingProxyType({
        "book_id": 4,
        "title": "Steve Jobs",
        "author": "Walter Isaacson",
        "publisher": "Simon & Schuster",
        "isbn": "978-1451648539",
        "classification": "Non-Fiction",
        "category": "Biography",
        "page_count": 656,
        "price": Decimal("35.00"),
    }),
    MappingProxyType({
        "book_id": 5,
        "title": "Becoming",
        "author": "Michelle Obama",
        "publisher": "Crown",
        "isbn": "978-1524763138",
        "classification": "Non-Fiction",
        "category": "Biography",
        "page_count": 448,
        "price": Decimal("32.50"),
    }),
    MappingProxyType({
        "book_id": 6,
        "title": "Atomic Habits",
        "author": "James Clear",
        "publisher": "Penguin Random House",
        "isbn": "978-0735211292",
        "classification": "Non-Fiction",
        "category": "Self-Help",
        "page_count": 320,
        "price": Decimal("27.00"),
    }),
    MappingProxyType({
        "book_id": 7,
        "title": "The 7 Habits of Highly Effective People",
        "author": "Stephen R. Covey",
        "publisher": "Free Press",
        "isbn": "978-0743269513",
        "classification": "Non-Fiction",
        "category": "Self-Help",
        "page_count": 432,
        "price": Decimal("30.00"),
    }),
    MappingProxyType({
        "book_id": 8,
        "title": "To Kill a Mockingbird",
        "author": "Harper Lee",
        "publisher": "Harper Perennial",
        "isbn": "978-0060935467",
        "classification": "Fiction",
        "category": "Classic",
        "page_count": 336,
        "price": Decimal("15.99"),
    }),
    MappingProxyType({
        "book_id": 9,
        "title": "Pride and Prejudice",
        "author": "Jane Austen",
        "publisher": "Penguin Classics",
        "isbn": "978-0141439518",
        "classification": "Fiction",
        "category": "Classic",
        "page_count": 480,
        "price": Decimal("9.99"),
    }),
    MappingProxyType({
        "book_id": 10,
        "title": "The Great Gatsby",
        "author": "F. Scott Fitzgerald",
        "publisher": "Scribner",
        "isbn": "978-0743273565",
        "classification": "Fiction",
        "category": "Classic",
        "page_count": 180,
        "price": Decimal("17.00"),
    }),
)


def sample_books() -> list[BookResponse]:
    """Return a fresh copy of the sample catalog."""
    return [BookResponse(**record) for record in SAMPLE_BOOKS]
