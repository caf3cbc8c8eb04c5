#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with the sample catalog (the same ten books the
client shows when the API is unreachable).

USAGE:
    # Make sure you're in the project root with venv activated
    python scripts/seed_data.py

    # Keep existing books and only add the sample catalog
    python scripts/seed_data.py --keep

This script:
1. Connects to the database using app settings
2. Clears existing books (unless --keep)
3. Inserts the sample books
"""

import argparse
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete
from sqlalchemy.orm import Session

from bookstore.client.sample_data import SAMPLE_BOOKS
from bookstore.database import SessionLocal, create_tables
from bookstore.models import Book


def clear_data(db: Session) -> None:
    """Clear all existing books from the database."""
    print("Clearing existing books...")
    db.execute(delete(Book))
    db.commit()
    print("Books cleared.")


def create_books(db: Session) -> list[Book]:
    """
    Create the sample books.

    Ids are left to the database, so on an empty table they come out
    as 1..10 in the same order as the sample catalog.
    """
    print("Creating books...")
    books = []
    for record in SAMPLE_BOOKS:
        fields = {key: value for key, value in record.items() if key != "book_id"}
        book = Book(**fields)
        db.add(book)
        books.append(book)

    db.commit()
    for book in books:
        db.refresh(book)

    print(f"Created {len(books)} books.")
    return books


def main() -> None:
    """Main seeding function."""
    parser = argparse.ArgumentParser(description="Seed the bookstore database")
    parser.add_argument(
        "--keep",
        action="store_true",
        help="Keep existing books instead of clearing the table first",
    )
    args = parser.parse_args()

    print("=" * 50)
    print("Bookstore Database Seeder")
    print("=" * 50)

    print("\nEnsuring tables exist...")
    create_tables()

    db = SessionLocal()
    try:
        if not args.keep:
            clear_data(db)

        books = create_books(db)

        print("\n" + "=" * 50)
        print("Seeding complete!")
        print("=" * 50)
        for book in books:
            print(f"  [{book.book_id}] {book.title} ({book.category}, ${book.price})")

    except Exception as e:
        print(f"\nError seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
