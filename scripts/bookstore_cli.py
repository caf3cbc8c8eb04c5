#!/usr/bin/env python3
"""
Bookstore Command Line Client

Browse the catalog, manage the shopping cart and run admin operations
against the bookstore API. When no API endpoint answers, the catalog
commands show the built-in sample data.

Usage:
    # Catalog
    python scripts/bookstore_cli.py books
    python scripts/bookstore_cli.py books --category Classic --sort-field price --sort-order desc
    python scripts/bookstore_cli.py books --page 2 --page-size 10

    # Shopping cart (persisted in CART_STORAGE_PATH)
    python scripts/bookstore_cli.py cart show
    python scripts/bookstore_cli.py cart add 8
    python scripts/bookstore_cli.py cart set 8 3
    python scripts/bookstore_cli.py cart remove 8

    # Admin
    python scripts/bookstore_cli.py admin show 3
    python scripts/bookstore_cli.py admin create book.json
    python scripts/bookstore_cli.py admin update 3 book.json
    python scripts/bookstore_cli.py admin delete 3
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from pydantic import ValidationError

from bookstore.client import (
    ApiResolver,
    BookstoreClient,
    CartSession,
    CatalogView,
    LocalStorage,
    ShoppingCart,
)
from bookstore.config import get_settings
from bookstore.exceptions import BookstoreError
from bookstore.schemas import BookCreate, BookResponse, BookUpdate

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def format_price(price) -> str:
    return f"${price:,.2f}"


def print_book(book: BookResponse) -> None:
    print(f"[{book.book_id}] {book.title}")
    print(f"    Author:         {book.author}")
    print(f"    Publisher:      {book.publisher}")
    print(f"    ISBN:           {book.isbn}")
    print(f"    Classification: {book.classification}")
    print(f"    Category:       {book.category}")
    print(f"    Pages:          {book.page_count}")
    print(f"    Price:          {format_price(book.price)}")


def print_cart(cart: ShoppingCart) -> None:
    if not cart.items:
        print("Your cart is empty.")
        return

    for item in cart.items:
        print(
            f"[{item.book.book_id}] {item.book.title}: "
            f"{item.quantity} x {format_price(item.book.price)} = {format_price(item.subtotal)}"
        )
    print("-" * 50)
    print(f"{cart.item_count} item(s), total {format_price(cart.total_price)}")


# =============================================================================
# Commands
# =============================================================================
async def list_books(client: BookstoreClient, args: argparse.Namespace) -> None:
    view = CatalogView(
        client,
        page_size=args.page_size,
        sort_field=args.sort_field,
        sort_order=args.sort_order,
    )
    view.category = args.category
    view.page_number = args.page
    await view.refresh()

    if view.using_sample_data:
        print("Using sample data. The backend API could not be reached.\n")
    if view.error:
        print(view.error)
        return

    page = view.result
    if not page.books:
        print("No books found. Try changing your filter criteria.")
    for book in page.books:
        print(
            f"[{book.book_id}] {book.title} by {book.author} "
            f"({book.category}, {book.page_count} pages) {format_price(book.price)}"
        )

    print(
        f"\nPage {page.page_number} of {page.total_pages} "
        f"({page.total_count} books, sorted by {page.sort_field} {page.sort_order})"
    )
    if view.categories:
        print(f"Categories: {', '.join(view.categories)}")


async def run_cart(client: BookstoreClient, args: argparse.Namespace) -> None:
    session = CartSession(LocalStorage(settings.cart_storage_path))

    if args.cart_command == "add":
        book = await client.get_book(args.book_id)
        session.add_to_cart(book)
        print(f"Added '{book.title}' to your cart.\n")
    elif args.cart_command == "remove":
        session.remove_from_cart(args.book_id)
    elif args.cart_command == "set":
        if args.quantity < 1:
            print("Quantity must be at least 1; use 'cart remove' to drop a book.")
        session.update_quantity(args.book_id, args.quantity)

    print_cart(session.cart)


def read_book_file(path: str, model):
    return model.model_validate_json(Path(path).read_text(encoding="utf-8"))


async def run_admin(client: BookstoreClient, args: argparse.Namespace) -> None:
    if args.admin_command == "show":
        print_book(await client.get_book(args.book_id))
    elif args.admin_command == "create":
        book = await client.create_book(read_book_file(args.file, BookCreate))
        print("Created:")
        print_book(book)
    elif args.admin_command == "update":
        book = read_book_file(args.file, BookUpdate)
        if book.book_id is None:
            book = book.model_copy(update={"book_id": args.book_id})
        await client.update_book(args.book_id, book)
        print(f"Updated book {args.book_id}.")
    elif args.admin_command == "delete":
        await client.delete_book(args.book_id)
        print(f"Deleted book {args.book_id}.")


async def run(args: argparse.Namespace) -> int:
    resolver = ApiResolver(endpoints=args.endpoint or None)
    async with BookstoreClient(resolver=resolver) as client:
        try:
            if args.command == "books":
                await list_books(client, args)
            elif args.command == "cart":
                await run_cart(client, args)
            elif args.command == "admin":
                await run_admin(client, args)
        except (BookstoreError, ValidationError, OSError) as e:
            print(f"Error: {e}")
            return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Online Bookstore command line client")
    parser.add_argument(
        "--endpoint",
        action="append",
        help="API base URL to use (repeatable; default: API_ENDPOINTS setting)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    books = commands.add_parser("books", help="List a page of the catalog")
    books.add_argument("--page", type=int, default=1, help="Page number (default: 1)")
    books.add_argument("--page-size", type=int, default=5, help="Books per page (default: 5)")
    books.add_argument("--sort-field", default="title", help="Sort field (default: title)")
    books.add_argument("--sort-order", choices=["asc", "desc"], default="asc")
    books.add_argument("--category", default="", help="Only show this category")

    cart = commands.add_parser("cart", help="Manage the shopping cart")
    cart_commands = cart.add_subparsers(dest="cart_command", required=True)
    cart_commands.add_parser("show", help="Show the cart")
    cart_add = cart_commands.add_parser("add", help="Add one copy of a book")
    cart_add.add_argument("book_id", type=int)
    cart_remove = cart_commands.add_parser("remove", help="Remove a book")
    cart_remove.add_argument("book_id", type=int)
    cart_set = cart_commands.add_parser("set", help="Set the quantity of a book")
    cart_set.add_argument("book_id", type=int)
    cart_set.add_argument("quantity", type=int)

    admin = commands.add_parser("admin", help="Create, update and delete books")
    admin_commands = admin.add_subparsers(dest="admin_command", required=True)
    admin_show = admin_commands.add_parser("show", help="Show one book")
    admin_show.add_argument("book_id", type=int)
    admin_create = admin_commands.add_parser("create", help="Create a book from a JSON file")
    admin_create.add_argument("file")
    admin_update = admin_commands.add_parser("update", help="Replace a book from a JSON file")
    admin_update.add_argument("book_id", type=int)
    admin_update.add_argument("file")
    admin_delete = admin_commands.add_parser("delete", help="Delete a book")
    admin_delete.add_argument("book_id", type=int)

    return parser


def main() -> None:
    """Main entry point."""
    args = build_parser().parse_args()
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
