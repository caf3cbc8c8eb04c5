"""
Bookstore Client Package

Everything the shopper-facing and admin frontends need, without the
rendering:

- api.py: BookstoreClient, async HTTP client with sample-data fallback
- resolver.py: ApiResolver, finds a reachable API endpoint
- catalog_view.py: CatalogView, paging/sort/filter state of the catalog
- cart.py: ShoppingCart and CartSession, the persisted shopping cart
- storage.py: LocalStorage, JSON-file key/value store
- sample_data.py: the built-in 10-book catalog
"""

from bookstore.client.api import BookstoreClient
from bookstore.client.cart import CART_STORAGE_KEY, CartItem, CartSession, ShoppingCart
from bookstore.client.catalog_view import ALL_CATEGORIES, CatalogView
from bookstore.client.resolver import ApiResolver
from bookstore.client.sample_data import sample_books
from bookstore.client.storage import LocalStorage

__all__ = [
    "ALL_CATEGORIES",
    "ApiResolver",
    "BookstoreClient",
    "CART_STORAGE_KEY",
    "CartItem",
    "CartSession",
    "CatalogView",
    "LocalStorage",
    "ShoppingCart",
    "sample_books",
]
