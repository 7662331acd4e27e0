# app/schemas/activity.py
from datetime import datetime

from pydantic import field_validator

from app.schemas.common import CamelModel, strip_required


class ActivityLogCreate(CamelModel):
    """
    Client-recorded action (login, logout, bulk import, ...).
    The acting user comes from the X-Admin-User header.
    """

    action: str
    module: str
    details: str = ""

    @field_validator("action", "module")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return strip_required(v)


class ActivityLogRead(CamelModel):
    id: str
    action: str
    module: str
    details: str
    timestamp: datetime
    user: str


class ActivityLogEnvelope(CamelModel):
    success: bool = True
    activity_log: ActivityLogRead


class ActivityLogListEnvelope(CamelModel):
    success: bool = True
    activity_logs: list[ActivityLogRead]
