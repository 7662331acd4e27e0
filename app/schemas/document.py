# app/schemas/document.py
from pydantic import field_validator, model_validator

from app.schemas.common import (
    CamelModel,
    EntityRead,
    empty_if_none,
    strip_optional,
    strip_required,
)

DOCUMENT_FILE_TYPES = ("pdf", "word", "excel", "text", "image")

DOCUMENT_CATEGORIES = (
    "General",
    "Legal",
    "Tax",
    "Quality",
    "Marketing",
    "Sales",
    "Financial",
    "Environmental",
    "Export",
)

_CATEGORY_LOOKUP = {c.lower(): c for c in DOCUMENT_CATEGORIES}


class DocumentCreate(CamelModel):
    """
    Payload for creating a document record.

    The file itself is uploaded first (POST /upload); this payload carries
    the resulting attachment reference. fileType is the label the upload
    endpoint derived from the MIME type.

    Attachment rule: fileUrl, fileSize and originalName travel together.
    """

    name: str
    description: str
    file_type: str
    category: str = "General"
    file_url: str = ""
    file_size: int | None = None
    original_name: str | None = None

    @field_validator("name", "description")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return strip_required(v)

    @field_validator("file_type")
    @classmethod
    def validate_file_type(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in DOCUMENT_FILE_TYPES:
            raise ValueError(
                "Invalid file type. Must be one of: " + ", ".join(DOCUMENT_FILE_TYPES)
            )
        return v

    @field_validator("category", mode="before")
    @classmethod
    def validate_category(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return "General"
        if not isinstance(v, str):
            return v
        canonical = _CATEGORY_LOOKUP.get(v.strip().lower())
        if canonical is None:
            raise ValueError("Invalid category")
        return canonical

    @field_validator("file_url", mode="before")
    @classmethod
    def normalize_url(cls, v):
        return empty_if_none(v) if v is None or isinstance(v, str) else v

    @field_validator("original_name")
    @classmethod
    def normalize_name(cls, v: str | None) -> str | None:
        return strip_optional(v)

    @field_validator("file_size")
    @classmethod
    def non_negative(cls, v: int | None) -> int | None:
        if v is not None and v < 0:
            raise ValueError("fileSize cannot be negative")
        return v

    @model_validator(mode="after")
    def attachment_is_a_unit(self):
        if not self.file_url:
            self.file_size = None
            self.original_name = None
            return self
        if self.file_size is None or self.original_name is None:
            raise ValueError(
                "Attachment requires fileUrl, fileSize and originalName together"
            )
        return self


class DocumentUpdate(DocumentCreate):
    id: str
    version: int | None = None


class DocumentRead(EntityRead):
    name: str
    description: str
    file_type: str
    category: str
    upload_date: str
    file_url: str | None = None
    file_size: int | None = None
    original_name: str | None = None

    @field_validator("file_url", mode="before")
    @classmethod
    def blank_url_to_none(cls, v):
        return v or None


class DocumentEnvelope(CamelModel):
    success: bool = True
    document: DocumentRead


class DocumentListEnvelope(CamelModel):
    success: bool = True
    documents: list[DocumentRead]
