"""
Column mapper for product exports.

Locates the columns that hold the product identifier, name, SKU and
product code in exports whose headers are not guaranteed (renamed,
reordered, prefixed like "Product SKU").

Each field is resolved by trying strategies in order:
1. Exact match (case-insensitive) against a known variant
2. Header contains a known variant (case-insensitive)
3. Fixed column position
First hit wins. Fields are resolved independently, so two fields may
end up on the same column.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Sequence

import structlog

from utils.text_utils import normalize_header

logger = structlog.get_logger(__name__)


class CanonicalField(str, Enum):
    """Semantic fields of a products export."""
    ID = "id"
    NAME = "name"
    SKU = "sku"
    PRODUCT_CODE = "product_code"


@dataclass(frozen=True)
class FieldSpec:
    """Known header variants and fallback position for a field."""
    variants: tuple[str, ...]
    fallback_index: int


FIELD_SPECS: dict[CanonicalField, FieldSpec] = {
    CanonicalField.ID: FieldSpec(
        variants=("id", "productid", "product_id"),
        fallback_index=0,
    ),
    CanonicalField.NAME: FieldSpec(
        variants=("name", "productname", "product_name"),
        fallback_index=1,
    ),
    CanonicalField.SKU: FieldSpec(
        variants=(
            "sku",
            "stockkeepingunit",
            "stock_keeping_unit",
            "productsku",
            "product_sku",
        ),
        fallback_index=2,
    ),
    CanonicalField.PRODUCT_CODE: FieldSpec(
        variants=("productcode", "product_code", "productcode2"),
        fallback_index=3,
    ),
}


# A strategy receives the header labels and the field spec and returns
# the matching label, or None to pass to the next strategy.
Strategy = Callable[[Sequence[str], FieldSpec], Optional[str]]


def match_exact(headers: Sequence[str], spec: FieldSpec) -> Optional[str]:
    """Header equals a variant, ignoring case."""
    for header in headers:
        if normalize_header(header) in spec.variants:
            return header
    return None


def match_substring(headers: Sequence[str], spec: FieldSpec) -> Optional[str]:
    """Header contains a variant, ignoring case."""
    for header in headers:
        normalized = normalize_header(header)
        for variant in spec.variants:
            if variant in normalized:
                return header
    return None


def match_position(headers: Sequence[str], spec: FieldSpec) -> Optional[str]:
    """Column at the field's fixed index, if the export is wide enough."""
    if len(headers) > spec.fallback_index:
        return headers[spec.fallback_index]
    return None


DEFAULT_STRATEGIES: tuple[Strategy, ...] = (
    match_exact,
    match_substring,
    match_position,
)


@dataclass
class ColumnMapping:
    """Resolved header label per canonical field (None = unmapped)."""
    columns: dict[CanonicalField, Optional[str]] = field(default_factory=dict)

    def column_for(self, canonical: CanonicalField) -> Optional[str]:
        return self.columns.get(canonical)

    def get(self, record: dict[str, str], canonical: CanonicalField) -> str:
        """Value of a canonical field in a record, "" when unmapped."""
        column = self.columns.get(canonical)
        if column is None:
            return ""
        return record.get(column, "")

    @property
    def unmapped(self) -> list[CanonicalField]:
        return [f for f, column in self.columns.items() if column is None]


def resolve_column(
    headers: Sequence[str],
    spec: FieldSpec,
    strategies: Sequence[Strategy] = DEFAULT_STRATEGIES,
) -> Optional[str]:
    """Run strategies in order and return the first matching header."""
    for strategy in strategies:
        column = strategy(headers, spec)
        if column is not None:
            return column
    return None


def resolve_columns(
    headers: Sequence[str],
    strategies: Sequence[Strategy] = DEFAULT_STRATEGIES,
    field_specs: Optional[dict[CanonicalField, FieldSpec]] = None,
) -> ColumnMapping:
    """
    Resolve every canonical field against the given headers.

    Args:
        headers: Header labels in file order
        strategies: Resolution strategies, tried in order
        field_specs: Override the known variants (defaults to FIELD_SPECS)

    Returns:
        ColumnMapping with one entry per canonical field
    """
    specs = field_specs or FIELD_SPECS
    headers = list(headers)

    mapping = ColumnMapping(
        columns={
            canonical: resolve_column(headers, spec, strategies)
            for canonical, spec in specs.items()
        }
    )

    logger.debug(
        "columns_resolved",
        columns={f.value: column for f, column in mapping.columns.items()},
        unmapped=[f.value for f in mapping.unmapped],
    )

    return mapping
