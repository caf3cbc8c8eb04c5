"""
Pydantic Schemas Package

This package contains Pydantic models for request/response validation.

Schema Naming Convention:
- XxxBase: Shared fields between create/update
- XxxCreate: Fields accepted when creating a new record
- XxxUpdate: Fields accepted when replacing a record
- XxxResponse: Fields returned in API responses
"""

from bookstore.schemas.book import (
    BookBase,
    BookClassification,
    BookCreate,
    BookResponse,
    BookUpdate,
    CamelModel,
    PagedBookResult,
)

__all__ = [
    "BookBase",
    "BookClassification",
    "BookCreate",
    "BookResponse",
    "BookUpdate",
    "CamelModel",
    "PagedBookResult",
]
