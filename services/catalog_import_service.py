"""
Catalog CSV import.

Runs the full pipeline for one upload:
1. Extract products, product media and managed content rows
2. Resolve one image URL per product
3. Fetch what the catalog already stores for the imported SKUs
4. Reconcile into one record per SKU
5. Upsert the batch (skipped for previews)
"""

from dataclasses import dataclass, field
from typing import Optional
import structlog

from models.catalog import CatalogUpsertRecordResponse, ImportStatistics
from parsers.catalog_extractors import ExtractedCatalog, extract_catalog
from services.catalog_service import CatalogService, get_catalog_service
from services.image_mapping_service import ImageMapping, ImageMappingBuilder
from services.reconciliation_service import CatalogUpsertRecord, reconcile
from exceptions import CatalogFileDecodeError, NoProductsFoundError

logger = structlog.get_logger(__name__)


@dataclass
class CatalogImportResult:
    """Outcome of one import run."""
    statistics: ImportStatistics
    records: list[CatalogUpsertRecord] = field(default_factory=list)
    image_mappings: dict[str, ImageMapping] = field(default_factory=dict)
    dry_run: bool = False

    def records_as_response(self) -> list[CatalogUpsertRecordResponse]:
        return [CatalogUpsertRecordResponse(**r.to_row()) for r in self.records]


def decode_upload(content: bytes, filename: str) -> str:
    """
    Decode an uploaded export as UTF-8, tolerating a byte order mark.

    Raises:
        CatalogFileDecodeError: If the bytes are not UTF-8
    """
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        logger.warning("catalog_file_decode_failed", filename=filename, error=str(e))
        raise CatalogFileDecodeError(filename, str(e))


def build_statistics(
    extracted: ExtractedCatalog,
    records: list[CatalogUpsertRecord],
    image_mappings: dict[str, ImageMapping],
) -> ImportStatistics:
    """
    Plain counts for the import summary.

    total_products counts every parsed row, so rows dropped for a missing
    id or sku show up as products_skipped. products_imported counts
    records after duplicate SKUs collapse.
    """
    with_images = sum(1 for record in records if record.image_url)
    return ImportStatistics(
        total_products=extracted.products_parsed,
        products_skipped=extracted.products_skipped,
        products_imported=len(records),
        products_with_images=with_images,
        products_without_images=len(records) - with_images,
        image_mappings_found=len(image_mappings),
    )


class CatalogImportService:
    """
    Catalog import orchestration.

    Pure steps run in process; the only store calls are the existing-entry
    lookup and the final upsert, both through CatalogService.
    """

    def __init__(
        self,
        catalog_service: Optional[CatalogService] = None,
        image_builder: Optional[ImageMappingBuilder] = None,
    ):
        self.catalog_service = catalog_service or get_catalog_service()
        self.image_builder = image_builder or ImageMappingBuilder()

    def import_catalog(
        self,
        products_text: str,
        product_media_text: str,
        managed_content_text: str,
        imported_by: Optional[str] = None,
        dry_run: bool = False,
    ) -> CatalogImportResult:
        """
        Import the three catalog exports.

        Args:
            products_text: Products CSV
            product_media_text: ProductMedia CSV
            managed_content_text: ManagedContent CSV
            imported_by: User id stored on every row
            dry_run: Reconcile without writing

        Returns:
            CatalogImportResult with records and statistics

        Raises:
            NoProductsFoundError: If the products CSV has no valid rows
            DatabaseError: If the lookup or the upsert fails
        """
        logger.info(
            "catalog_import_started",
            imported_by=imported_by,
            dry_run=dry_run
        )

        extracted = extract_catalog(
            products_text,
            product_media_text,
            managed_content_text,
        )

        if not extracted.products:
            logger.warning(
                "catalog_import_no_products",
                rows_parsed=extracted.products_parsed
            )
            raise NoProductsFoundError()

        image_mappings = self.image_builder.build(
            extracted.product_media,
            extracted.managed_content,
        )

        existing = self.catalog_service.get_existing_entries(
            product.sku for product in extracted.products
        )

        records = reconcile(
            extracted.products,
            image_mappings,
            existing,
            imported_by=imported_by,
        )

        if not dry_run:
            self.catalog_service.bulk_upsert(records)

        statistics = build_statistics(extracted, records, image_mappings)

        logger.info(
            "catalog_import_complete",
            dry_run=dry_run,
            **statistics.model_dump()
        )

        return CatalogImportResult(
            statistics=statistics,
            records=records,
            image_mappings=image_mappings,
            dry_run=dry_run,
        )


_catalog_import_service: Optional[CatalogImportService] = None

def get_catalog_import_service() -> CatalogImportService:
    """Get or create CatalogImportService instance."""
    global _catalog_import_service
    if _catalog_import_service is None:
        _catalog_import_service = CatalogImportService()
    return _catalog_import_service
