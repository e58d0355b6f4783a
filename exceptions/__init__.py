"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    DatabaseError,

    # Catalog
    CatalogProductNotFoundError,

    # Catalog import
    NoProductsFoundError,
    CatalogFileDecodeError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "DatabaseError",

    # Catalog
    "CatalogProductNotFoundError",

    # Catalog import
    "NoProductsFoundError",
    "CatalogFileDecodeError",
]
