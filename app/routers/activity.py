# app/routers/activity.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.database import get_session
from app.routers.common import activity, get_actor, store_failure
from app.schemas.activity import (
    ActivityLogCreate,
    ActivityLogEnvelope,
    ActivityLogListEnvelope,
    ActivityLogRead,
)

router = APIRouter(prefix="/activity-logs", tags=["Activity"])


@router.get("", response_model=ActivityLogListEnvelope)
def list_activity(session: Session = Depends(get_session)):
    """
    Most recent admin actions first (capped history).
    """
    try:
        entries = activity.list(session)
    except SQLAlchemyError:
        raise store_failure("fetch", "activity logs")
    return ActivityLogListEnvelope(
        activity_logs=[ActivityLogRead.model_validate(e) for e in entries]
    )


@router.post("", response_model=ActivityLogEnvelope)
def create_activity(
    payload: ActivityLogCreate,
    session: Session = Depends(get_session),
    actor: str = Depends(get_actor),
):
    """
    Record a client-side action (login, logout, export, ...).
    """
    entry = activity.record(
        session,
        action=payload.action,
        module=payload.module,
        details=payload.details,
        user=actor,
    )
    if entry is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to record activity",
        )
    return ActivityLogEnvelope(activity_log=ActivityLogRead.model_validate(entry))
