"""
Pydantic models for validation and serialization.
"""

from models.base import (
    BaseSchema,
    TimestampMixin,
)
from models.catalog import (
    CatalogProductUpdate,
    CatalogProductResponse,
    CatalogListResponse,
    CatalogUpsertRecordResponse,
    ImportStatistics,
    CatalogImportResponse,
    CatalogImportPreviewResponse,
)

__all__ = [
    # Base
    "BaseSchema",
    "TimestampMixin",

    # Catalog
    "CatalogProductUpdate",
    "CatalogProductResponse",
    "CatalogListResponse",
    "CatalogUpsertRecordResponse",
    "ImportStatistics",
    "CatalogImportResponse",
    "CatalogImportPreviewResponse",
]
