# app/routers/common.py
import logging

from fastapi import Header, HTTPException, status
from sqlmodel import Session

from app.core.config import get_settings
from app.core.object_id import is_valid_object_id
from app.services.activity_service import ActivityService
from app.services.resource_service import Conflict, NotFound, UpdateOutcome

logger = logging.getLogger(__name__)
settings = get_settings()

activity = ActivityService()


def get_actor(x_admin_user: str | None = Header(default=None)) -> str:
    """
    Name of the admin performing the request, used for activity attribution.

    There is no authentication here: the dashboard sends whatever name the
    operator signed in with; missing -> DEFAULT_ACTOR.
    """
    if x_admin_user and x_admin_user.strip():
        return x_admin_user.strip()
    return settings.DEFAULT_ACTOR


def require_object_id(entity_id: str | None, label: str) -> str:
    """
    Reject missing or malformed ids before any store call.

    Raises:
        HTTPException(400)
    """
    if not entity_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{label} ID is required",
        )
    if not is_valid_object_id(entity_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {label.lower()} ID format",
        )
    return entity_id


def unwrap_update(outcome: UpdateOutcome, label: str):
    """
    Turn a typed update outcome into the entity or an HTTP error.

    NotFound -> 404, Conflict -> 409.
    """
    if isinstance(outcome, NotFound):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{label} not found",
        )
    if isinstance(outcome, Conflict):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=(
                f"{label} was modified by someone else "
                f"(current version {outcome.current_version}); reload and try again"
            ),
        )
    return outcome.entity


def store_failure(operation: str, label: str) -> HTTPException:
    """
    Log the active exception and build the generic 500 shown to clients.
    """
    logger.exception("%s %s failed", operation, label)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {operation} {label}",
    )


def record_activity(
    session: Session,
    action: str,
    module: str,
    details: str,
    actor: str,
) -> None:
    """
    Fire-and-forget activity entry; never fails the calling request.
    """
    activity.record(session, action=action, module=module, details=details, user=actor)
