"""
Catalog import routes.

Accepts the three catalog CSV exports as one multipart upload:
- products_file: Id, Name, StockKeepingUnit, ProductCode
- product_media_file: ProductId, ElectronicMediaId
- managed_content_file: Id, ContentKey
"""

import asyncio
from fastapi import APIRouter, File, Header, UploadFile
from fastapi.responses import JSONResponse
from typing import Optional
import structlog

from models.catalog import CatalogImportResponse, CatalogImportPreviewResponse
from services.catalog_import_service import decode_upload, get_catalog_import_service
from services.upload_history_service import (
    CATALOG_UPLOAD_TYPE,
    file_hash,
    get_upload_history_service,
)
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter()


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    # Unexpected error
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


async def _read_uploads(
    products_file: UploadFile,
    product_media_file: UploadFile,
    managed_content_file: UploadFile,
) -> tuple[bytes, bytes, bytes]:
    """Read the three uploads concurrently."""
    products, media, content = await asyncio.gather(
        products_file.read(),
        product_media_file.read(),
        managed_content_file.read(),
    )
    return products, media, content


# ===================
# ROUTES
# ===================

@router.post("", response_model=CatalogImportResponse)
async def import_catalog(
    products_file: UploadFile = File(..., description="Products CSV"),
    product_media_file: UploadFile = File(..., description="ProductMedia CSV"),
    managed_content_file: UploadFile = File(..., description="ManagedContent CSV"),
    x_user_id: Optional[str] = Header(None, description="User running the import"),
):
    """
    Import catalog products from the three CSV exports.

    Existing product codes and categories are kept when the export leaves
    them empty. Rows are upserted on SKU, untouched rows are kept.

    Raises:
        422: No valid products, unreadable file, or missing file
        500: Database failure (nothing is written)
    """
    logger.info(
        "catalog_import_upload_started",
        products_filename=products_file.filename,
        media_filename=product_media_file.filename,
        content_filename=managed_content_file.filename
    )

    try:
        products_bytes, media_bytes, content_bytes = await _read_uploads(
            products_file, product_media_file, managed_content_file
        )

        result = get_catalog_import_service().import_catalog(
            decode_upload(products_bytes, products_file.filename),
            decode_upload(media_bytes, product_media_file.filename),
            decode_upload(content_bytes, managed_content_file.filename),
            imported_by=x_user_id,
        )

        get_upload_history_service().record_upload(
            CATALOG_UPLOAD_TYPE,
            file_hash(products_bytes),
            products_file.filename,
            row_count=result.statistics.products_imported,
        )

        return CatalogImportResponse(success=True, statistics=result.statistics)

    except Exception as e:
        return handle_error(e)


@router.post("/preview", response_model=CatalogImportPreviewResponse)
async def preview_catalog_import(
    products_file: UploadFile = File(..., description="Products CSV"),
    product_media_file: UploadFile = File(..., description="ProductMedia CSV"),
    managed_content_file: UploadFile = File(..., description="ManagedContent CSV"),
    x_user_id: Optional[str] = Header(None, description="User running the import"),
):
    """
    Show what an import would write without writing anything.

    Warns when the same products file was already imported.
    """
    try:
        products_bytes, media_bytes, content_bytes = await _read_uploads(
            products_file, product_media_file, managed_content_file
        )

        result = get_catalog_import_service().import_catalog(
            decode_upload(products_bytes, products_file.filename),
            decode_upload(media_bytes, product_media_file.filename),
            decode_upload(content_bytes, managed_content_file.filename),
            imported_by=x_user_id,
            dry_run=True,
        )

        warnings: list[str] = []

        duplicate = get_upload_history_service().check_duplicate(
            CATALOG_UPLOAD_TYPE, file_hash(products_bytes)
        )
        if duplicate:
            warnings.append(
                f"This products file was already imported on "
                f"{str(duplicate.get('uploaded_at', ''))[:10]} ({duplicate.get('filename')})"
            )

        if result.statistics.products_without_images:
            warnings.append(
                f"{result.statistics.products_without_images} product(s) have no image"
            )

        logger.info(
            "catalog_import_preview_created",
            records=len(result.records),
            warnings=len(warnings)
        )

        return CatalogImportPreviewResponse(
            statistics=result.statistics,
            records=result.records_as_response(),
            warnings=warnings,
        )

    except Exception as e:
        return handle_error(e)
