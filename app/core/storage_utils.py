# app/core/storage_utils.py
import logging
import mimetypes
import uuid
from dataclasses import dataclass
from typing import Literal

import httpx
from storage3.utils import StorageException

from app.core.config import get_settings
from app.core.supabase_client import storage_bucket
from app.core.verification import (
    log_verification_result,
    verify_storage_operation,
)

logger = logging.getLogger(__name__)
settings = get_settings()

ResourceKind = Literal["image", "video", "raw"]


class UploadError(Exception):
    """Base class for upload failures. Always recoverable by the caller."""


class UploadRejectedError(UploadError):
    """The media host answered, but refused or mangled the upload."""


class UploadTransportError(UploadError):
    """The media host could not be reached."""


@dataclass(frozen=True)
class UploadResult:
    url: str
    storage_id: str
    resource_kind: ResourceKind
    format: str
    byte_size: int
    original_name: str | None = None


def resource_kind_for(content_type: str | None) -> ResourceKind:
    """
    Map a MIME type to the media host's resource kind.

    image/* -> image, video/* -> video, everything else -> raw
    """
    if content_type:
        if content_type.startswith("image/"):
            return "image"
        if content_type.startswith("video/"):
            return "video"
    return "raw"


def guess_extension(content_type: str | None, original_name: str | None = None) -> str:
    """
    Pick a file extension (without dot) for the stored object.

    Prefers the original filename's extension, then the MIME type, then "bin".
    """
    if original_name and "." in original_name:
        return original_name.rsplit(".", 1)[1].lower()
    if content_type:
        ext = mimetypes.guess_extension(content_type)
        if ext:
            return ext.lstrip(".")
    return "bin"


def generate_filename(ext: str) -> str:
    """
    Generate a random filename using UUID4.

    Args:
        ext: File extension without dot (e.g. "png", "pdf")

    Returns:
        A filename like "<uuid4>.png"
    """
    return f"{uuid.uuid4()}.{ext}"


class UploadGateway:
    """
    Wraps the external media host (Supabase Storage).

    - upload(): raw bytes in, stable public URL + metadata out
    - delete(): best-effort removal, never raises
    - No state is kept between calls apart from the bucket handle.
    """

    def __init__(self, bucket=None, bucket_name: str | None = None):
        # Resolved lazily so the API can boot without Storage credentials.
        self._bucket = bucket
        self.bucket_name = bucket_name or settings.STORAGE_BUCKET

    @property
    def bucket(self):
        if self._bucket is None:
            self._bucket = storage_bucket(self.bucket_name)
        return self._bucket

    def upload(
        self,
        file_bytes: bytes,
        folder: str | None = None,
        resource_kind: ResourceKind | None = None,
        content_type: str | None = None,
        original_name: str | None = None,
    ) -> UploadResult:
        """
        Upload raw bytes and return a public URL plus metadata.

        Path pattern:
            <folder>/<resource_kind>/<uuid>.<ext>

        Raises:
            UploadRejectedError: storage answered with an error or an
                unverifiable response.
            UploadTransportError: network / transport failure.
        """
        kind = resource_kind or resource_kind_for(content_type)
        ext = guess_extension(content_type, original_name)
        path = f"{folder or settings.UPLOAD_FOLDER}/{kind}/{generate_filename(ext)}"

        file_options = {"upsert": "true"}
        if content_type:
            file_options["content-type"] = content_type

        try:
            self.bucket.upload(path, file_bytes, file_options)
            url = self.bucket.get_public_url(path)
        except httpx.TransportError as exc:
            logger.error("Storage upload transport error for %s: %s", path, exc)
            raise UploadTransportError("Could not reach the media host") from exc
        except StorageException as exc:
            logger.error("Storage upload rejected for %s: %s", path, exc)
            raise UploadRejectedError("The media host rejected the upload") from exc
        except RuntimeError as exc:
            # raised by supabase_admin() when Storage credentials are missing
            logger.error("Storage is not configured: %s", exc)
            raise UploadTransportError("The media host is not configured") from exc

        result = UploadResult(
            url=url,
            storage_id=path,
            resource_kind=kind,
            format=ext,
            byte_size=len(file_bytes),
            original_name=original_name,
        )

        verification = verify_storage_operation(
            {"url": result.url, "storage_id": result.storage_id}, "upload"
        )
        log_verification_result(verification, "Storage upload")
        if not verification.success:
            raise UploadRejectedError(verification.message)

        return result

    def delete(self, storage_id: str, resource_kind: ResourceKind = "image") -> bool:
        """
        Remove a previously uploaded object.

        Failures are logged and reported as False; they never raise so that
        record deletion is not blocked by an orphaned asset.
        """
        try:
            removed = self.bucket.remove([storage_id])
        except (httpx.HTTPError, StorageException, RuntimeError) as exc:
            logger.warning(
                "Storage delete failed for %s (%s): %s", storage_id, resource_kind, exc
            )
            return False

        verification = verify_storage_operation(removed, "delete")
        log_verification_result(verification, "Storage delete")
        return verification.success

    def extract_path_from_public_url(self, url: str) -> str | None:
        """
        Given a public URL, extract the object path relative to the bucket.

        Example:
            https://<proj>.supabase.co/storage/v1/object/public/assets/vargo-agro/image/x.png
            -> 'vargo-agro/image/x.png'
        """
        marker = f"/storage/v1/object/public/{self.bucket_name}/"
        idx = url.find(marker)
        if idx == -1:
            return None
        # public URLs may carry a trailing "?" from get_public_url
        return url[idx + len(marker):].split("?", 1)[0] or None

    def delete_public_url(self, url: str | None) -> bool:
        """
        Convenience helper: delete a file by its public URL.
        No-op (False) if the URL is empty or does not belong to this bucket.
        """
        if not url:
            return False
        path = self.extract_path_from_public_url(url)
        if not path:
            return False
        return self.delete(path, resource_kind_for(mimetypes.guess_type(path)[0]))


_gateway: UploadGateway | None = None


def get_upload_gateway() -> UploadGateway:
    """
    FastAPI dependency returning the process-wide gateway.
    Tests override this with a gateway around a fake bucket.
    """
    global _gateway
    if _gateway is None:
        _gateway = UploadGateway()
    return _gateway
