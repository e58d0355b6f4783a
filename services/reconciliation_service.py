"""
Reconciliation of imported products with the existing catalog.

Combines freshly extracted product rows, resolved images and a snapshot of
what the catalog already holds into the batch that gets upserted.

Precedence, per product:
- product_code: new value if present, else stored value, else empty
- category: first ':' segment of the final product_code if there is one,
  else stored category, else "Other"
- image_url: resolved image, else None

Known-good stored values are never replaced by empty imported ones.
"""

from dataclasses import asdict, dataclass
from typing import Iterable, Optional
import structlog

from parsers.catalog_extractors import ProductRow
from services.image_mapping_service import ImageMapping, get_image_url

logger = structlog.get_logger(__name__)

OTHER_CATEGORY = "Other"
PRODUCT_CODE_SEPARATOR = ":"


@dataclass(frozen=True)
class ExistingCatalogEntry:
    """Snapshot of a catalog row before the import."""
    sku: str
    product_code: Optional[str] = None
    category: Optional[str] = None


@dataclass(frozen=True)
class CatalogUpsertRecord:
    """Row written to the catalog, unique on sku."""
    product_id: str
    sku: str
    name: str
    product_code: Optional[str]
    category: str
    image_url: Optional[str]
    imported_by: Optional[str]

    def to_row(self) -> dict:
        """Column → value dict for the upsert payload."""
        return asdict(self)


def _first_present(*candidates: tuple[str, Optional[str]]) -> tuple[str, str]:
    """
    Pick the first candidate with a non-empty value.

    Args:
        candidates: (source, value) pairs in precedence order

    Returns:
        (source, value) of the winner, ("default", "") if none has a value
    """
    for source, value in candidates:
        if value:
            return source, value
    return "default", ""


def category_from_product_code(product_code: Optional[str]) -> str:
    """
    Category encoded in a product code.

    "FLOORING:OAK" → "FLOORING", ":OAK" → "Other", "" → "Other"
    """
    if not product_code:
        return OTHER_CATEGORY
    return product_code.split(PRODUCT_CODE_SEPARATOR, 1)[0] or OTHER_CATEGORY


def resolve_product_code(
    product: ProductRow,
    existing: Optional[ExistingCatalogEntry],
) -> str:
    """New product code, else stored product code, else ""."""
    source, product_code = _first_present(
        ("import", product.product_code),
        ("existing", existing.product_code if existing else None),
    )
    if source == "existing":
        logger.debug("product_code_preserved", sku=product.sku, product_code=product_code)
    return product_code


def resolve_category(
    final_product_code: str,
    existing: Optional[ExistingCatalogEntry],
) -> str:
    """Category derived from the final product code, else stored, else Other."""
    if final_product_code:
        return category_from_product_code(final_product_code)

    _, category = _first_present(
        ("existing", existing.category if existing else None),
        ("default", OTHER_CATEGORY),
    )
    return category


def reconcile_product(
    product: ProductRow,
    image_mappings: dict[str, ImageMapping],
    existing: Optional[ExistingCatalogEntry],
    imported_by: Optional[str] = None,
) -> CatalogUpsertRecord:
    """Build the upsert record for a single product."""
    product_code = resolve_product_code(product, existing)

    return CatalogUpsertRecord(
        product_id=product.id,
        sku=product.sku,
        name=product.name,
        product_code=product_code or None,
        category=resolve_category(product_code, existing),
        image_url=get_image_url(product.id, image_mappings),
        imported_by=imported_by,
    )


def reconcile(
    products: Iterable[ProductRow],
    image_mappings: dict[str, ImageMapping],
    existing_entries: dict[str, ExistingCatalogEntry],
    imported_by: Optional[str] = None,
) -> list[CatalogUpsertRecord]:
    """
    Reconcile product rows into the upsert batch.

    Rows are processed in input order. If the same sku appears more than
    once, the last occurrence wins and keeps the position of the first.

    Args:
        products: Extracted product rows
        image_mappings: product_id → ImageMapping
        existing_entries: sku → stored catalog snapshot
        imported_by: User id recorded on every row

    Returns:
        List of CatalogUpsertRecord, unique on sku
    """
    by_sku: dict[str, CatalogUpsertRecord] = {}
    total = 0

    for product in products:
        total += 1
        by_sku[product.sku] = reconcile_product(
            product,
            image_mappings,
            existing_entries.get(product.sku),
            imported_by,
        )

    records = list(by_sku.values())

    logger.info(
        "products_reconciled",
        products=total,
        records=len(records),
        duplicate_skus=total - len(records),
        existing=sum(1 for r in records if r.sku in existing_entries),
    )

    return records
