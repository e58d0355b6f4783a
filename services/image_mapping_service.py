"""
Image URL resolution for catalog products.

Chains ProductId → ElectronicMediaId → ContentKey → image URL using the
ProductMedia and ManagedContent exports.

The URL convention belongs to the content delivery network and is
configured through settings.image_url_base; pass a custom url_builder
to ImageMappingBuilder to use a different convention.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Optional
import structlog

from config import settings
from parsers.catalog_extractors import ManagedContentRow, ProductMediaRow

logger = structlog.get_logger(__name__)

UrlBuilder = Callable[[str], Optional[str]]


@dataclass(frozen=True)
class ImageMapping:
    """Resolved image for one product."""
    product_id: str
    electronic_media_id: str
    content_key: str
    image_url: Optional[str]


def build_image_url(content_key: Optional[str], base_url: Optional[str] = None) -> Optional[str]:
    """
    Build the delivery URL for a content key.

    Args:
        content_key: Managed content key
        base_url: Delivery base URL (defaults to settings.image_url_base)

    Returns:
        "{base_url}/{content_key}", or None for an empty key
    """
    if not content_key:
        return None

    base = (base_url or settings.image_url_base).rstrip("/")
    return f"{base}/{content_key}"


class ImageMappingBuilder:
    """
    Builds product_id → ImageMapping from the media exports.

    When a product has several media rows, the last row (in file order)
    whose chain resolves wins. Rows whose media id has no managed content
    are skipped and never remove an earlier mapping.
    """

    def __init__(self, url_builder: Optional[UrlBuilder] = None):
        self.url_builder = url_builder or build_image_url

    def build(
        self,
        product_media_rows: Iterable[ProductMediaRow],
        managed_content_rows: Iterable[ManagedContentRow],
    ) -> dict[str, ImageMapping]:
        """
        Resolve one image per product.

        Args:
            product_media_rows: ProductMedia rows in file order
            managed_content_rows: ManagedContent rows

        Returns:
            dict keyed by product_id. Products without a resolvable
            chain have no entry.
        """
        # Step 1: ElectronicMediaId → ContentKey
        content_keys: dict[str, str] = {}
        for content in managed_content_rows:
            content_keys[content.id] = content.content_key

        # Step 2: ProductId → ImageMapping, later rows overwrite earlier ones
        mappings: dict[str, ImageMapping] = {}
        media_count = 0
        unresolved = 0

        for media in product_media_rows:
            media_count += 1
            content_key = content_keys.get(media.electronic_media_id)
            if not content_key:
                unresolved += 1
                continue

            image_url = self.url_builder(content_key)
            if not image_url:
                unresolved += 1
                continue

            mappings[media.product_id] = ImageMapping(
                product_id=media.product_id,
                electronic_media_id=media.electronic_media_id,
                content_key=content_key,
                image_url=image_url,
            )

        logger.info(
            "image_mappings_built",
            media_rows=media_count,
            content_rows=len(content_keys),
            mappings=len(mappings),
            unresolved=unresolved
        )

        return mappings


def get_image_url(product_id: str, mappings: dict[str, ImageMapping]) -> Optional[str]:
    """Image URL for a product, None when missing or empty."""
    mapping = mappings.get(product_id)
    if mapping is None or not mapping.image_url:
        return None
    return mapping.image_url
