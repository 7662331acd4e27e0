# app/models/notice.py
from sqlmodel import Field

from app.models.base import EntityBase


class Notice(EntityBase, table=True):
    """
    Public notice / announcement.

    - is_active: visible on the public site
    - show_as_popup: injected as an interstitial on page load
    - optional attachment restricted to image or pdf
    """

    __tablename__ = "notices"

    title: str = Field(max_length=255, index=True)
    content: str
    description: str = Field(default="")

    category: str = Field(default="general", max_length=30)

    # low | medium | high
    priority: str = Field(default="medium", max_length=10)

    is_active: bool = Field(default=True, index=True)
    show_as_popup: bool = Field(default=False)

    file_url: str = Field(default="")
    file_type: str | None = Field(default=None, max_length=10)
    file_size: int | None = Field(default=None, ge=0)
    original_name: str | None = Field(default=None, max_length=255)
