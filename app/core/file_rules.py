# app/core/file_rules.py
"""
Upload constraints shared by the /upload endpoint and the admin client.

Each table maps an accepted MIME type to the file-type label stored on the
record (documents: pdf/word/excel/text/image, notices: image/pdf).
"""
import mimetypes

MAX_UPLOAD_MB = 10
MAX_UPLOAD_BYTES = MAX_UPLOAD_MB * 1024 * 1024

_IMAGES = {
    "image/png": "image",
    "image/jpeg": "image",
    "image/gif": "image",
    "image/webp": "image",
}

DOCUMENT_MIME_TYPES: dict[str, str] = {
    "application/pdf": "pdf",
    "application/msword": "word",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "word",
    "application/vnd.ms-excel": "excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": "excel",
    "text/plain": "text",
    **_IMAGES,
}

NOTICE_MIME_TYPES: dict[str, str] = {
    "image/jpg": "image",
    **_IMAGES,
    "application/pdf": "pdf",
}

GENERAL_MIME_TYPES: dict[str, str] = {
    "image/png": "image",
    "image/jpeg": "image",
    "image/webp": "image",
    "video/mp4": "video",
    "video/webm": "video",
    "application/pdf": "pdf",
}

UPLOAD_RULES: dict[str, dict[str, str]] = {
    "document": DOCUMENT_MIME_TYPES,
    "notice": NOTICE_MIME_TYPES,
    "general": GENERAL_MIME_TYPES,
}

UNSUPPORTED_MESSAGES = {
    "document": "File type not supported. Please upload PDF, Word, Excel, Text, or Image files.",
    "notice": "File type not supported. Please upload an image (JPEG, PNG, GIF, WebP) or a PDF.",
    "general": "File type not supported. Please upload an image, an MP4/WebM video or a PDF.",
}


class FileValidationError(ValueError):
    """The file was rejected before any network call."""


def content_type_for(filename: str | None, content_type: str | None = None) -> str | None:
    """
    Prefer the declared content type; fall back to guessing from the filename.
    """
    if content_type and content_type != "application/octet-stream":
        return content_type
    if filename:
        guessed, _ = mimetypes.guess_type(filename)
        return guessed or content_type
    return content_type


def validate_upload(upload_type: str, content_type: str | None, size: int) -> str:
    """
    Check size and MIME type for an upload kind.

    Returns:
        The derived file-type label (e.g. "pdf", "word", "image").

    Raises:
        FileValidationError: unknown upload kind, oversized or disallowed file.
    """
    rules = UPLOAD_RULES.get(upload_type)
    if rules is None:
        raise FileValidationError(f"Unknown upload type '{upload_type}'")

    if size > MAX_UPLOAD_BYTES:
        raise FileValidationError(f"File size must be less than {MAX_UPLOAD_MB}MB")

    if not content_type or content_type not in rules:
        raise FileValidationError(UNSUPPORTED_MESSAGES[upload_type])

    return rules[content_type]
