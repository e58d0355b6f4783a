"""
Extractors for the three catalog export files.

- Products: Id, Name, StockKeepingUnit, ProductCode (headers vary, see
  schema_mapper)
- ProductMedia: ProductId, ElectronicMediaId
- ManagedContent: Id, ContentKey

Each extractor parses the CSV text, maps records to typed rows, trims
every field and drops rows missing a mandatory field. No I/O: the same
text always yields the same rows.
"""

from dataclasses import dataclass
from typing import Optional

import structlog

from parsers.csv_parser import parse_csv
from parsers.schema_mapper import CanonicalField, resolve_columns

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ProductRow:
    """Product from the products export. id and sku are mandatory."""
    id: str
    name: str
    sku: str
    product_code: str


@dataclass(frozen=True)
class ProductMediaRow:
    """Link from a product to an electronic media record."""
    product_id: str
    electronic_media_id: str


@dataclass(frozen=True)
class ManagedContentRow:
    """Managed content record holding the image content key."""
    id: str
    content_key: str


def _first_value(record: dict[str, str], *columns: str) -> str:
    """First non-empty value among the given column names."""
    for column in columns:
        value = record.get(column)
        if value:
            return value
    return ""


def extract_products(text: str) -> list[ProductRow]:
    """Extract product rows from a products export."""
    products, _ = extract_products_counted(text)
    return products


def extract_products_counted(text: str) -> tuple[list[ProductRow], int]:
    """
    Extract product rows and count the records parsed before validation.

    Columns are located by the schema mapper using the header of the
    file. Rows without id or sku are dropped; name and product code may
    be empty.

    Args:
        text: Products CSV text

    Returns:
        (ProductRow list in file order, number of parsed records)
    """
    products: list[ProductRow] = []
    mapping = None
    total = 0

    for record in parse_csv(text):
        total += 1
        if mapping is None:
            mapping = resolve_columns(list(record.keys()))

        product_id = mapping.get(record, CanonicalField.ID).strip()
        sku = mapping.get(record, CanonicalField.SKU).strip()

        if not product_id or not sku:
            continue

        products.append(ProductRow(
            id=product_id,
            name=mapping.get(record, CanonicalField.NAME).strip(),
            sku=sku,
            product_code=mapping.get(record, CanonicalField.PRODUCT_CODE).strip(),
        ))

    logger.debug(
        "products_extracted",
        rows_parsed=total,
        rows_kept=len(products)
    )

    return products, total


def extract_product_media(text: str) -> list[ProductMediaRow]:
    """
    Extract product media rows.

    Rows without ProductId or ElectronicMediaId are dropped.
    """
    media: list[ProductMediaRow] = []
    total = 0

    for record in parse_csv(text):
        total += 1
        product_id = _first_value(record, "ProductId", "productId").strip()
        electronic_media_id = _first_value(
            record, "ElectronicMediaId", "electronicMediaId"
        ).strip()

        if not product_id or not electronic_media_id:
            continue

        media.append(ProductMediaRow(
            product_id=product_id,
            electronic_media_id=electronic_media_id,
        ))

    logger.debug(
        "product_media_extracted",
        rows_parsed=total,
        rows_kept=len(media)
    )

    return media


def extract_managed_content(text: str) -> list[ManagedContentRow]:
    """
    Extract managed content rows.

    Rows without Id or ContentKey are dropped.
    """
    content: list[ManagedContentRow] = []
    total = 0

    for record in parse_csv(text):
        total += 1
        content_id = _first_value(record, "Id", "id").strip()
        content_key = _first_value(record, "ContentKey", "contentKey").strip()

        if not content_id or not content_key:
            continue

        content.append(ManagedContentRow(id=content_id, content_key=content_key))

    logger.debug(
        "managed_content_extracted",
        rows_parsed=total,
        rows_kept=len(content)
    )

    return content


@dataclass
class ExtractedCatalog:
    """All three datasets extracted from one upload."""
    products: list[ProductRow]
    product_media: list[ProductMediaRow]
    managed_content: list[ManagedContentRow]
    # Product records parsed, including rows dropped for missing id or sku
    products_parsed: int = 0

    @property
    def products_skipped(self) -> int:
        return self.products_parsed - len(self.products)


def extract_catalog(
    products_text: str,
    product_media_text: Optional[str],
    managed_content_text: Optional[str],
) -> ExtractedCatalog:
    """Run all three extractors. Missing media/content texts yield no rows."""
    products, products_parsed = extract_products_counted(products_text)
    return ExtractedCatalog(
        products=products,
        product_media=extract_product_media(product_media_text or ""),
        managed_content=extract_managed_content(managed_content_text or ""),
        products_parsed=products_parsed,
    )
