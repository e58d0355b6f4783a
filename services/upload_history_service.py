"""
Tracks uploaded file hashes to detect repeated catalog imports.

Everything here is best-effort: a failing history table is logged and
never fails the import that triggered it.
"""
import hashlib
import structlog
from typing import Optional

from config import get_supabase_client

logger = structlog.get_logger(__name__)

CATALOG_UPLOAD_TYPE = "catalog_products"


def file_hash(content: bytes) -> str:
    """SHA-256 hex digest of an uploaded file."""
    return hashlib.sha256(content).hexdigest()


class UploadHistoryService:
    def __init__(self):
        self.db = get_supabase_client()
        self.table = "upload_history"

    def check_duplicate(self, upload_type: str, file_hash: str) -> Optional[dict]:
        """Earlier upload of the same file as {filename, uploaded_at, row_count}, or None."""
        try:
            result = (
                self.db.table(self.table)
                .select("filename, uploaded_at, row_count")
                .eq("upload_type", upload_type)
                .eq("file_hash", file_hash)
                .order("uploaded_at", desc=True)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.warning(
                "upload_history_check_failed",
                upload_type=upload_type,
                error=str(e),
            )
            return None
        return result.data[0] if result.data else None

    def record_upload(
        self,
        upload_type: str,
        file_hash: str,
        filename: str,
        row_count: int = 0,
    ) -> bool:
        """Record a successful upload. Returns False if recording failed."""
        try:
            self.db.table(self.table).insert({
                "upload_type": upload_type,
                "file_hash": file_hash,
                "filename": filename or "unknown",
                "row_count": row_count,
                "status": "success",
            }).execute()
        except Exception as e:
            # Never let history recording break the import
            logger.warning(
                "failed_to_record_upload",
                upload_type=upload_type,
                filename=filename,
                error=str(e),
            )
            return False

        logger.info(
            "upload_recorded",
            upload_type=upload_type,
            filename=filename,
            row_count=row_count,
        )
        return True


_service: Optional[UploadHistoryService] = None


def get_upload_history_service() -> UploadHistoryService:
    global _service
    if _service is None:
        _service = UploadHistoryService()
    return _service
