"""
Catalog schemas for validation and serialization.

Covers the product_catalog table and the CSV import responses.
"""

from pydantic import Field
from typing import Optional

from models.base import BaseSchema, TimestampMixin


class CatalogProductUpdate(BaseSchema):
    """
    Update an existing catalog product.

    Only fields not owned by the import can be edited;
    sku, product_id and image_url come from the exports.
    """

    name: Optional[str] = Field(
        None,
        max_length=255,
        description="Display name"
    )
    product_code: Optional[str] = Field(
        None,
        max_length=255,
        description="Structured product code, category is the first ':' segment",
        examples=["FLOORING:OAK"]
    )
    category: Optional[str] = Field(
        None,
        min_length=1,
        max_length=255,
        description="Category name"
    )


class CatalogProductResponse(BaseSchema, TimestampMixin):
    """Catalog product with all fields."""

    id: str = Field(..., description="Catalog row UUID")
    product_id: Optional[str] = Field(None, description="Product Id from the export")
    sku: str = Field(..., description="Stock keeping unit (unique)")
    name: Optional[str] = Field(None, description="Display name")
    product_code: Optional[str] = Field(None, description="Structured product code")
    category: Optional[str] = Field(None, description="Category name")
    image_url: Optional[str] = Field(None, description="Resolved display image URL")
    imported_by: Optional[str] = Field(None, description="User that ran the import")


class CatalogListResponse(BaseSchema):
    """List of catalog products with pagination."""

    data: list[CatalogProductResponse]
    total: int
    page: int
    page_size: int
    total_pages: int


class CatalogUpsertRecordResponse(BaseSchema):
    """A reconciled record as it would be written to the catalog."""

    product_id: str
    sku: str
    name: str
    product_code: Optional[str] = None
    category: str
    image_url: Optional[str] = None
    imported_by: Optional[str] = None


class ImportStatistics(BaseSchema):
    """Counts reported after an import."""

    total_products: int = Field(..., description="Rows parsed from the products CSV")
    products_skipped: int = Field(..., description="Rows dropped for a missing id or sku")
    products_imported: int = Field(..., description="Records sent to the catalog")
    products_with_images: int = Field(..., description="Records with a resolved image URL")
    products_without_images: int = Field(..., description="Records without an image URL")
    image_mappings_found: int = Field(..., description="Products with a resolvable image chain")


class CatalogImportResponse(BaseSchema):
    """Response of POST /api/catalog/import."""

    success: bool = True
    statistics: ImportStatistics


class CatalogImportPreviewResponse(BaseSchema):
    """Response of POST /api/catalog/import/preview. Nothing is written."""

    statistics: ImportStatistics
    records: list[CatalogUpsertRecordResponse]
    warnings: list[str] = Field(default_factory=list)
