# app/models/document.py
from sqlmodel import Field

from app.models.base import EntityBase


class Document(EntityBase, table=True):
    """
    Downloadable company document (licences, tax certificates, brochures).

    The attachment (file_url, file_size, original_name) is either fully
    present or fully absent.
    """

    __tablename__ = "documents"

    name: str = Field(max_length=255, index=True)
    description: str

    file_type: str = Field(
        max_length=20,
        description="Derived label: pdf | word | excel | text | image",
    )

    category: str = Field(
        default="General",
        max_length=50,
        index=True,
    )

    upload_date: str = Field(
        description="ISO-8601 timestamp of the original upload",
    )

    file_url: str = Field(default="")
    file_size: int | None = Field(default=None, ge=0)
    original_name: str | None = Field(default=None, max_length=255)
