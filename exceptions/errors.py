"""
Custom exception classes for the application.

Every error carries a code, a message, an HTTP status and details.
"""

from typing import Optional, Any
from datetime import datetime


class AppError(Exception):
    """
    Base exception for all application errors.
    
    All custom exceptions inherit from this.
    
    Attributes:
        code: Error code (e.g., "PRODUCT_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """
    
    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.utcnow().isoformat()
        super().__init__(message)
    
    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""
    
    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""
    
    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class DatabaseError(AppError):
    """Database operation failed (500)."""
    
    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="DATABASE_ERROR",
            message=f"Database {operation} failed: {message}",
            status_code=500,
            details={"operation": operation, **(details or {})}
        )


# ===================
# CATALOG ERRORS
# ===================

class CatalogProductNotFoundError(NotFoundError):
    """Catalog product not found."""

    def __init__(self, product_id: str):
        super().__init__(
            resource="Catalog product",
            identifier=product_id,
            code="CATALOG_PRODUCT_NOT_FOUND"
        )


# ===================
# CATALOG IMPORT ERRORS
# ===================

class NoProductsFoundError(ValidationError):
    """Products export contained no usable rows."""

    def __init__(self):
        super().__init__(
            code="NO_PRODUCTS_FOUND",
            message="No valid products found in products CSV",
            details={"required_fields": ["id", "sku"]}
        )


class CatalogFileDecodeError(ValidationError):
    """Uploaded export is not valid UTF-8 text."""

    def __init__(self, filename: str, error: str):
        super().__init__(
            code="CATALOG_FILE_DECODE_ERROR",
            message=f"Could not read {filename} as UTF-8 text",
            details={"filename": filename, "error": error}
        )
