# app/models/base.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field

from app.core.object_id import new_object_id


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EntityBase(SQLModel):
    """
    Columns shared by every managed resource kind.

      - id: 24-hex ObjectId-style string
      - created_at / updated_at: audit timestamps (UTC)
      - version: bumped on every successful update, used to detect
        concurrent edits
    """

    id: str = Field(
        default_factory=new_object_id,
        primary_key=True,
        max_length=24,
        index=True,
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime = Field(
        default_factory=utcnow,
        description="Last update timestamp (UTC)",
    )

    version: int = Field(
        default=1,
        ge=1,
        description="Monotonic revision counter",
    )
