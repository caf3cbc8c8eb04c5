"""
Shopping Cart

The cart lives entirely on the client: it is never sent to the server,
and it survives restarts through LocalStorage under the key
"bookstoreCart".

ShoppingCart is immutable. Every operation returns a new cart whose
totals are recomputed from the item list, so totalPrice and itemCount
can never drift from the items:

    totalPrice == sum(item.subtotal for item in items)
    itemCount  == sum(item.quantity for item in items)

CartSession holds the current cart for a shopping session and writes it
to storage after every change.
"""

import logging
from collections.abc import Iterable
from decimal import Decimal

from pydantic import ConfigDict, Field, ValidationError, field_serializer

from bookstore.client.storage import LocalStorage
from bookstore.exceptions import CartDecodeError
from bookstore.schemas import BookResponse, CamelModel

logger = logging.getLogger(__name__)

CART_STORAGE_KEY = "bookstoreCart"


class CartItem(CamelModel):
    """A book snapshot and how many copies of it are in the cart."""

    book: BookResponse
    quantity: int = Field(..., ge=1)
    subtotal: Decimal

    model_config = ConfigDict(frozen=True)

    @classmethod
    def for_book(cls, book: BookResponse, quantity: int = 1) -> "CartItem":
        return cls(book=book, quantity=quantity, subtotal=book.price * quantity)

    @field_serializer("subtotal", when_used="json")
    def serialize_subtotal(self, subtotal: Decimal) -> float:
        return float(subtotal)


class ShoppingCart(CamelModel):
    """
    The shopper's cart.

    Items are unique by book id and keep the order in which books were
    first added. last_viewed_url records the catalog page the shopper
    was on when they last added a book, so "continue shopping" can go
    back there.
    """

    items: tuple[CartItem, ...] = ()
    total_price: Decimal = Decimal("0")
    item_count: int = 0
    last_viewed_url: str | None = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_items(
        cls,
        items: Iterable[CartItem],
        last_viewed_url: str | None = None,
    ) -> "ShoppingCart":
        """Build a cart whose totals are folded from the items."""
        items = tuple(items)
        return cls(
            items=items,
            total_price=sum((item.subtotal for item in items), Decimal("0")),
            item_count=sum(item.quantity for item in items),
            last_viewed_url=last_viewed_url,
        )

    @field_serializer("total_price", when_used="json")
    def serialize_total_price(self, total_price: Decimal) -> float:
        return float(total_price)

    def get_item(self, book_id: int) -> CartItem | None:
        for item in self.items:
            if item.book.book_id == book_id:
                return item
        return None

    def recalculated(self) -> "ShoppingCart":
        """Re-derive every subtotal and total from the book prices and quantities."""
        return ShoppingCart.from_items(
            (CartItem.for_book(item.book, item.quantity) for item in self.items),
            self.last_viewed_url,
        )

    def add_to_cart(
        self,
        book: BookResponse,
        last_viewed_url: str | None = None,
    ) -> "ShoppingCart":
        """Add one copy of a book; a book already in the cart gets quantity + 1."""
        if self.get_item(book.book_id) is None:
            items = [*self.items, CartItem.for_book(book)]
        else:
            items = [
                CartItem.for_book(item.book, item.quantity + 1)
                if item.book.book_id == book.book_id
                else item
                for item in self.items
            ]
        return ShoppingCart.from_items(items, last_viewed_url or self.last_viewed_url)

    def remove_from_cart(self, book_id: int) -> "ShoppingCart":
        items = [item for item in self.items if item.book.book_id != book_id]
        return ShoppingCart.from_items(items, self.last_viewed_url)

    def update_quantity(self, book_id: int, new_quantity: int) -> "ShoppingCart":
        """
        Set the quantity of a book already in the cart.

        Quantities below 1 are ignored and the same cart is returned;
        use remove_from_cart to drop a book.
        """
        if new_quantity < 1:
            return self

        items = [
            CartItem.for_book(item.book, new_quantity)
            if item.book.book_id == book_id
            else item
            for item in self.items
        ]
        return ShoppingCart.from_items(items, self.last_viewed_url)


# =============================================================================
# Persistence
# =============================================================================
def decode_cart(raw: str) -> ShoppingCart:
    """
    Parse a persisted cart.

    Stored totals are not trusted; they are recomputed from the items.
    A cart listing the same book twice is rejected.

    Raises:
        CartDecodeError: If the text is not a valid serialized cart
    """
    try:
        cart = ShoppingCart.model_validate_json(raw)
    except ValidationError as e:
        raise CartDecodeError(f"Invalid persisted cart: {e.error_count()} error(s)") from e

    book_ids = [item.book.book_id for item in cart.items]
    if len(set(book_ids)) != len(book_ids):
        raise CartDecodeError("Invalid persisted cart: duplicate book ids")
    return cart.recalculated()


def load_cart(storage: LocalStorage) -> ShoppingCart:
    """Load the persisted cart, or an empty one if nothing valid is stored."""
    raw = storage.get_item(CART_STORAGE_KEY)
    if raw is None:
        return ShoppingCart()

    try:
        return decode_cart(raw)
    except CartDecodeError as e:
        logger.debug(f"Starting with an empty cart: {e}")
        return ShoppingCart()


def save_cart(storage: LocalStorage, cart: ShoppingCart) -> None:
    storage.set_item(CART_STORAGE_KEY, cart.model_dump_json(by_alias=True))


class CartSession:
    """
    The cart for one shopping session, persisted after every change.

    Usage:
        session = CartSession(LocalStorage("~/.bookstore/storage.json"))
        session.add_to_cart(book)
        print(session.cart.total_price)
    """

    def __init__(self, storage: LocalStorage):
        self.storage = storage
        self.cart = load_cart(storage)

    def _commit(self, cart: ShoppingCart) -> ShoppingCart:
        if cart is not self.cart:
            self.cart = cart
            save_cart(self.storage, cart)
        return cart

    def add_to_cart(self, book: BookResponse, last_viewed_url: str | None = None) -> ShoppingCart:
        return self._commit(self.cart.add_to_cart(book, last_viewed_url))

    def remove_from_cart(self, book_id: int) -> ShoppingCart:
        return self._commit(self.cart.remove_from_cart(book_id))

    def update_quantity(self, book_id: int, new_quantity: int) -> ShoppingCart:
        return self._commit(self.cart.update_quantity(book_id, new_quantity))
