"""
Test data factories.

Uses factory pattern to generate consistent test data.
"""

from datetime import datetime
from typing import Optional
from uuid import uuid4

from parsers.catalog_extractors import ManagedContentRow, ProductMediaRow, ProductRow


class CatalogProductFactory:
    """
    Factory for product_catalog rows as returned by the database.

    Usage:
        # Create with defaults
        product = CatalogProductFactory.create()

        # Create with overrides
        product = CatalogProductFactory.create(sku="SKU-9", category="FLOORING")

        # Create multiple
        products = CatalogProductFactory.create_batch(5)
    """

    _counter = 0

    @classmethod
    def _next_counter(cls) -> int:
        cls._counter += 1
        return cls._counter

    @classmethod
    def create(
        cls,
        id: Optional[str] = None,
        product_id: Optional[str] = None,
        sku: Optional[str] = None,
        name: Optional[str] = None,
        product_code: Optional[str] = "FLOORING:OAK",
        category: Optional[str] = "FLOORING",
        image_url: Optional[str] = None,
        imported_by: Optional[str] = None,
    ) -> dict:
        """
        Create a single catalog row dict.

        Returns:
            Row dict matching the product_catalog schema
        """
        counter = cls._next_counter()
        now = datetime.utcnow().isoformat() + "Z"

        return {
            "id": id or str(uuid4()),
            "product_id": product_id or f"01t{counter:06d}",
            "sku": sku or f"SKU-{counter}",
            "name": name or f"Test Product {counter}",
            "product_code": product_code,
            "category": category,
            "image_url": image_url,
            "imported_by": imported_by,
            "created_at": now,
            "updated_at": now,
        }

    @classmethod
    def create_batch(cls, count: int, **overrides) -> list:
        """Create multiple catalog rows."""
        return [cls.create(**overrides) for _ in range(count)]

    @classmethod
    def reset_counter(cls):
        """Reset the counter (call in test setup if needed)."""
        cls._counter = 0


class ProductRowFactory:
    """Factory for extracted ProductRow objects."""

    @classmethod
    def create(
        cls,
        id: str = "P1",
        name: str = "Widget",
        sku: str = "SKU1",
        product_code: str = "",
    ) -> ProductRow:
        return ProductRow(id=id, name=name, sku=sku, product_code=product_code)


def media(product_id: str, electronic_media_id: str) -> ProductMediaRow:
    """Shorthand for a ProductMediaRow."""
    return ProductMediaRow(product_id=product_id, electronic_media_id=electronic_media_id)


def content(content_id: str, content_key: str) -> ManagedContentRow:
    """Shorthand for a ManagedContentRow."""
    return ManagedContentRow(id=content_id, content_key=content_key)


def build_csv(header: list[str], rows: list[list[str]]) -> str:
    """Join header and rows into CSV text (no quoting)."""
    lines = [",".join(header)] + [",".join(row) for row in rows]
    return "\n".join(lines) + "\n"
