"""
CSV parsers for catalog exports.

See csv_parser for the generic parser and catalog_extractors for the
per-file adapters.
"""

from parsers.csv_parser import (
    parse_csv,
    parse_csv_line,
)
from parsers.schema_mapper import (
    CanonicalField,
    ColumnMapping,
    resolve_columns,
)
from parsers.catalog_extractors import (
    ProductRow,
    ProductMediaRow,
    ManagedContentRow,
    ExtractedCatalog,
    extract_products,
    extract_products_counted,
    extract_product_media,
    extract_managed_content,
    extract_catalog,
)

__all__ = [
    "parse_csv",
    "parse_csv_line",
    "CanonicalField",
    "ColumnMapping",
    "resolve_columns",
    "ProductRow",
    "ProductMediaRow",
    "ManagedContentRow",
    "ExtractedCatalog",
    "extract_products",
    "extract_products_counted",
    "extract_product_media",
    "extract_managed_content",
    "extract_catalog",
]
