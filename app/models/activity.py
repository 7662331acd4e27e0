# app/models/activity.py
from datetime import datetime

from sqlmodel import SQLModel, Field

from app.core.object_id import new_object_id
from app.models.base import utcnow


class ActivityLog(SQLModel, table=True):
    """
    Append-only audit entry for an admin action.

    Retention is capped (see ActivityService); newest entries win.
    """

    __tablename__ = "activity_logs"

    id: str = Field(
        default_factory=new_object_id,
        primary_key=True,
        max_length=24,
    )

    # created | updated | deleted | login | ...
    action: str = Field(max_length=50)

    module: str = Field(
        max_length=50,
        index=True,
        description="Resource kind the action touched",
    )

    details: str = Field(default="")

    timestamp: datetime = Field(
        default_factory=utcnow,
        index=True,
    )

    user: str = Field(max_length=100, default="Admin")
