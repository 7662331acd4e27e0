# app/client/uploads.py
import logging
from pathlib import Path
from typing import Any

from app.client.api_client import ApiClient
from app.core.file_rules import content_type_for, validate_upload

logger = logging.getLogger(__name__)


class UploadClient:
    """
    Validates files locally, then sends them to POST /upload.

    Rejected files raise FileValidationError before any network call;
    API failures surface as ApiError / httpx.TransportError.
    """

    def __init__(self, api: ApiClient):
        self.api = api

    def upload(
        self,
        content: bytes,
        filename: str,
        upload_type: str = "general",
        content_type: str | None = None,
        folder: str | None = None,
    ) -> dict[str, Any]:
        content_type = content_type_for(filename, content_type)
        file_type = validate_upload(upload_type, content_type, len(content))
        logger.info("Uploading %s (%s, %d bytes)", filename, file_type, len(content))
        return self.api.upload(content, filename, content_type, upload_type, folder)

    def upload_path(self, path: str | Path, upload_type: str = "general", **kwargs) -> dict[str, Any]:
        path = Path(path)
        return self.upload(path.read_bytes(), path.name, upload_type, **kwargs)

    def attachment_fields(self, result: dict[str, Any]) -> dict[str, Any]:
        """
        Map an upload response onto the attachment fields of a
        document / notice record.
        """
        return {
            "fileUrl": result["url"],
            "fileSize": result["size"],
            "originalName": result.get("originalFilename"),
            "fileType": result.get("fileType"),
        }
