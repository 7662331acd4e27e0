# app/schemas/notice.py
from typing import Literal

from pydantic import field_validator, model_validator

from app.schemas.common import (
    CamelModel,
    EntityRead,
    empty_if_none,
    strip_optional,
    strip_required,
)

NoticePriority = Literal["low", "medium", "high"]
NoticeFileType = Literal["image", "pdf"]
NoticeCategory = Literal["general", "important", "urgent", "announcement"]

NOTICE_FILE_TYPES = ("image", "pdf")


class NoticeCreate(CamelModel):
    """
    Payload for creating a notice.

    Defaults (applied when a field is missing or null):
      - description -> ""
      - category    -> "general"
      - priority    -> "medium"
      - isActive    -> True (only an explicit false hides a notice)
      - showAsPopup -> False
    """

    title: str
    content: str
    description: str = ""
    category: NoticeCategory = "general"
    priority: NoticePriority = "medium"
    is_active: bool = True
    show_as_popup: bool = False
    file_url: str = ""
    file_type: NoticeFileType | None = None
    file_size: int | None = None
    original_name: str | None = None

    @field_validator("title", "content")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return strip_required(v)

    @field_validator("description", "file_url", mode="before")
    @classmethod
    def blank_text(cls, v):
        return empty_if_none(v) if v is None or isinstance(v, str) else v

    @field_validator("category", mode="before")
    @classmethod
    def default_category(cls, v):
        return v or "general"

    @field_validator("priority", mode="before")
    @classmethod
    def default_priority(cls, v):
        return v or "medium"

    @field_validator("is_active", mode="before")
    @classmethod
    def default_active(cls, v):
        return True if v is None else v

    @field_validator("show_as_popup", mode="before")
    @classmethod
    def default_popup(cls, v):
        return False if v is None else v

    @field_validator("file_type", mode="before")
    @classmethod
    def validate_file_type(cls, v):
        if v is None or v == "":
            return None
        if v not in NOTICE_FILE_TYPES:
            raise ValueError("Invalid file type. Must be 'image' or 'pdf'")
        return v

    @field_validator("original_name")
    @classmethod
    def normalize_name(cls, v: str | None) -> str | None:
        return strip_optional(v)

    @model_validator(mode="after")
    def attachment_is_consistent(self):
        if not self.file_url:
            self.file_type = None
            self.file_size = None
            self.original_name = None
        elif self.file_type is None:
            raise ValueError("fileType is required when fileUrl is set")
        return self


class NoticeUpdate(NoticeCreate):
    id: str
    version: int | None = None


class NoticeRead(EntityRead):
    title: str
    content: str
    description: str = ""
    category: str
    priority: str
    is_active: bool
    show_as_popup: bool
    file_url: str | None = None
    file_type: str | None = None
    file_size: int | None = None
    original_name: str | None = None

    @field_validator("file_url", mode="before")
    @classmethod
    def blank_url_to_none(cls, v):
        return v or None


class NoticeEnvelope(CamelModel):
    success: bool = True
    notice: NoticeRead


class NoticeListEnvelope(CamelModel):
    success: bool = True
    notices: list[NoticeRead]
