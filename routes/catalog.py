"""
Catalog API routes.

Read and edit products already in the catalog. Imports live in
routes/catalog_import.py.
"""

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
from typing import Optional
import structlog

from models.catalog import (
    CatalogProductUpdate,
    CatalogProductResponse,
    CatalogListResponse,
)
from services.catalog_service import get_catalog_service
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


# ===================
# ROUTES
# ===================

@router.get("", response_model=CatalogListResponse)
async def list_catalog_products(
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(50, ge=1, le=100, description="Items per page"),
    search: Optional[str] = Query(None, description="Search sku, name or product code"),
    category: Optional[str] = Query(None, description="Filter by category")
):
    """
    List catalog products ordered by SKU.

    Returns paginated list of products.
    """
    try:
        service = get_catalog_service()

        products, total = service.get_all(
            page=page,
            page_size=page_size,
            search=search,
            category=category
        )

        total_pages = (total + page_size - 1) // page_size

        return CatalogListResponse(
            data=products,
            total=total,
            page=page,
            page_size=page_size,
            total_pages=total_pages
        )

    except Exception as e:
        return handle_error(e)


@router.get("/{product_id}", response_model=CatalogProductResponse)
async def get_catalog_product(product_id: str):
    """
    Get a single catalog product.

    Raises:
        404: Product not found
    """
    try:
        service = get_catalog_service()
        return service.get_by_id(product_id)

    except Exception as e:
        return handle_error(e)


@router.put("/{product_id}", response_model=CatalogProductResponse)
async def update_catalog_product(product_id: str, data: CatalogProductUpdate):
    """
    Update name, product code or category of a catalog product.

    Raises:
        404: Product not found
        422: Validation error
    """
    try:
        service = get_catalog_service()
        return service.update(product_id, data)

    except Exception as e:
        return handle_error(e)
