"""
Catalog service for product_catalog reads and writes.

Existing-entry lookup and bulk upsert are the two store calls made by
the CSV import; the remaining methods back the catalog API.
"""

from typing import Iterable, Optional
import structlog

from config import get_supabase_client, settings
from models.catalog import CatalogProductResponse, CatalogProductUpdate
from services.reconciliation_service import CatalogUpsertRecord, ExistingCatalogEntry
from exceptions import (
    CatalogProductNotFoundError,
    DatabaseError
)

logger = structlog.get_logger(__name__)


class CatalogService:
    """
    Catalog business logic.

    Handles the product_catalog table, unique on sku.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = settings.catalog_table
        self.batch_size = settings.existing_lookup_batch_size

    # ===================
    # IMPORT OPERATIONS
    # ===================

    def get_existing_entries(self, skus: Iterable[str]) -> dict[str, ExistingCatalogEntry]:
        """
        Get stored product_code and category for the given SKUs.

        Queried in batches to stay under the IN clause limit.

        Args:
            skus: SKUs from the import (duplicates allowed)

        Returns:
            dict sku → ExistingCatalogEntry. Unknown SKUs are absent.

        Raises:
            DatabaseError: If any batch fails
        """
        unique_skus = list(dict.fromkeys(sku for sku in skus if sku))
        existing: dict[str, ExistingCatalogEntry] = {}

        if not unique_skus:
            return existing

        logger.debug(
            "getting_existing_catalog_entries",
            count=len(unique_skus),
            batch_size=self.batch_size
        )

        try:
            for start in range(0, len(unique_skus), self.batch_size):
                batch = unique_skus[start:start + self.batch_size]
                result = (
                    self.db.table(self.table)
                    .select("sku, product_code, category")
                    .in_("sku", batch)
                    .execute()
                )

                for row in result.data or []:
                    existing[row["sku"]] = ExistingCatalogEntry(
                        sku=row["sku"],
                        product_code=row.get("product_code"),
                        category=row.get("category"),
                    )

        except Exception as e:
            logger.error(
                "get_existing_catalog_entries_failed",
                count=len(unique_skus),
                error=str(e)
            )
            raise DatabaseError("select", str(e))

        logger.info(
            "existing_catalog_entries_retrieved",
            requested=len(unique_skus),
            found=len(existing)
        )

        return existing

    def bulk_upsert(self, records: list[CatalogUpsertRecord]) -> int:
        """
        Insert or replace catalog rows keyed on sku.

        The whole batch goes out in one statement, so a failure leaves the
        catalog untouched. Rows not in the batch are never deleted.

        Args:
            records: Reconciled records, unique on sku

        Returns:
            Number of records sent

        Raises:
            DatabaseError: If the upsert fails
        """
        if not records:
            return 0

        logger.info("bulk_upsert_catalog", count=len(records))

        try:
            (
                self.db.table(self.table)
                .upsert(
                    [record.to_row() for record in records],
                    on_conflict="sku",
                    ignore_duplicates=False
                )
                .execute()
            )
        except Exception as e:
            logger.error(
                "bulk_upsert_catalog_failed",
                count=len(records),
                error=str(e)
            )
            raise DatabaseError("upsert", str(e))

        logger.info("bulk_upsert_catalog_complete", count=len(records))
        return len(records)

    # ===================
    # READ OPERATIONS
    # ===================

    def get_all(
        self,
        page: int = 1,
        page_size: int = 50,
        search: Optional[str] = None,
        category: Optional[str] = None
    ) -> tuple[list[CatalogProductResponse], int]:
        """
        Get catalog products with optional filters.

        Args:
            page: Page number (1-indexed)
            page_size: Items per page
            search: Case-insensitive match on sku, name or product_code
            category: Exact category filter

        Returns:
            Tuple of (products list, total count)
        """
        logger.info(
            "getting_catalog_products",
            page=page,
            page_size=page_size,
            search=search,
            category=category
        )

        try:
            query = self.db.table(self.table).select("*", count="exact")

            if search:
                pattern = f"%{search}%"
                query = query.or_(
                    f"sku.ilike.{pattern},name.ilike.{pattern},product_code.ilike.{pattern}"
                )
            if category:
                query = query.eq("category", category)

            offset = (page - 1) * page_size
            query = query.order("sku").range(offset, offset + page_size - 1)

            result = query.execute()

            products = [CatalogProductResponse(**row) for row in result.data]
            total = result.count or 0

            logger.info(
                "catalog_products_retrieved",
                count=len(products),
                total=total
            )

            return products, total

        except Exception as e:
            logger.error(
                "get_catalog_products_failed",
                error=str(e)
            )
            raise DatabaseError("select", str(e))

    def get_by_id(self, product_id: str) -> CatalogProductResponse:
        """
        Get a single catalog product by its row UUID.

        Raises:
            CatalogProductNotFoundError: If the product doesn't exist
        """
        logger.debug("getting_catalog_product", product_id=product_id)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("id", product_id)
                .execute()
            )
        except Exception as e:
            logger.error(
                "get_catalog_product_failed",
                product_id=product_id,
                error=str(e)
            )
            raise DatabaseError("select", str(e))

        if not result.data:
            raise CatalogProductNotFoundError(product_id)

        return CatalogProductResponse(**result.data[0])

    # ===================
    # WRITE OPERATIONS
    # ===================

    def update(self, product_id: str, data: CatalogProductUpdate) -> CatalogProductResponse:
        """
        Update editable fields of a catalog product.

        Args:
            product_id: Catalog row UUID
            data: Fields to update (name, product_code, category)

        Returns:
            Updated CatalogProductResponse

        Raises:
            CatalogProductNotFoundError: If the product doesn't exist
        """
        logger.info("updating_catalog_product", product_id=product_id)

        existing = self.get_by_id(product_id)

        update_data = data.model_dump(exclude_none=True)
        if not update_data:
            return existing

        try:
            result = (
                self.db.table(self.table)
                .update(update_data)
                .eq("id", product_id)
                .execute()
            )
        except Exception as e:
            logger.error(
                "update_catalog_product_failed",
                product_id=product_id,
                error=str(e)
            )
            raise DatabaseError("update", str(e))

        logger.info(
            "catalog_product_updated",
            product_id=product_id,
            fields=list(update_data.keys())
        )

        return CatalogProductResponse(**result.data[0])


# Singleton instance for convenience
_catalog_service: Optional[CatalogService] = None

def get_catalog_service() -> CatalogService:
    """Get or create CatalogService instance."""
    global _catalog_service
    if _catalog_service is None:
        _catalog_service = CatalogService()
    return _catalog_service
