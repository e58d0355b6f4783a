"""
Business logic services.

Each service handles one domain area.
"""

from services.catalog_service import CatalogService, get_catalog_service
from services.catalog_import_service import (
    CatalogImportService,
    CatalogImportResult,
    get_catalog_import_service,
)
from services.image_mapping_service import (
    ImageMapping,
    ImageMappingBuilder,
    build_image_url,
)
from services.reconciliation_service import (
    CatalogUpsertRecord,
    ExistingCatalogEntry,
    reconcile,
)
from services.upload_history_service import UploadHistoryService, get_upload_history_service

__all__ = [
    "CatalogService",
    "get_catalog_service",
    "CatalogImportService",
    "CatalogImportResult",
    "get_catalog_import_service",
    "ImageMapping",
    "ImageMappingBuilder",
    "build_image_url",
    "CatalogUpsertRecord",
    "ExistingCatalogEntry",
    "reconcile",
    "UploadHistoryService",
    "get_upload_history_service",
]
