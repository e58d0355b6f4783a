"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.catalog import router as catalog_router
from routes.catalog_import import router as catalog_import_router

__all__ = [
    "catalog_router",
    "catalog_import_router",
]
