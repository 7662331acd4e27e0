# app/schemas/common.py
from datetime import datetime

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel
from sqlmodel import SQLModel


class CamelModel(SQLModel):
    """
    Base for wire schemas.

    - camelCase on the wire (isActive, fileUrl, ...), snake_case in Python
    - unknown keys are ignored: clients send whole records back on update
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
    )


class EntityRead(CamelModel):
    """
    Fields every stored entity carries.
    """

    id: str
    created_at: datetime
    updated_at: datetime
    version: int


class StatusResponse(CamelModel):
    success: bool = True


class ErrorResponse(CamelModel):
    """
    Body of every failed request.
    """

    success: bool = False
    error: str


def strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("field cannot be empty")
    return v


def strip_optional(v: str | None) -> str | None:
    if v is None:
        return None
    v = v.strip()
    return v or None


def empty_if_none(v: str | None) -> str:
    if v is None:
        return ""
    return v.strip()
