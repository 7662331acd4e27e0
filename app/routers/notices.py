# app/routers/notices.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.core.storage_utils import UploadGateway, get_upload_gateway
from app.database import get_session
from app.models.notice import Notice
from app.repositories.resource_repo import ResourceRepository
from app.routers.common import (
    get_actor,
    record_activity,
    require_object_id,
    store_failure,
    unwrap_update,
)
from app.schemas.common import StatusResponse
from app.schemas.notice import (
    NoticeCreate,
    NoticeEnvelope,
    NoticeListEnvelope,
    NoticeRead,
    NoticeUpdate,
)
from app.services.notice_service import NoticeService
from app.services.resource_service import StoreError

router = APIRouter(prefix="/notices", tags=["Notices"])

repo = ResourceRepository(Notice)
service = NoticeService(repo)


# -------- Public endpoints --------


@router.get(
    "",
    response_model=NoticeListEnvelope,
    response_model_exclude_none=True,
)
def list_notices(session: Session = Depends(get_session)):
    """
    List every notice, active or not.
    """
    try:
        notices = service.list(session)
    except SQLAlchemyError:
        raise store_failure("fetch", "notices")
    return NoticeListEnvelope(notices=[NoticeRead.model_validate(n) for n in notices])


@router.get(
    "/popups",
    response_model=NoticeListEnvelope,
    response_model_exclude_none=True,
)
def list_popup_notices(session: Session = Depends(get_session)):
    """
    Active notices to show as an interstitial, newest first.
    """
    try:
        notices = service.list_popups(session)
    except SQLAlchemyError:
        raise store_failure("fetch", "notices")
    return NoticeListEnvelope(notices=[NoticeRead.model_validate(n) for n in notices])


# -------- Admin endpoints --------


@router.post(
    "",
    response_model=NoticeEnvelope,
    response_model_exclude_none=True,
)
def create_notice(
    payload: NoticeCreate,
    session: Session = Depends(get_session),
    actor: str = Depends(get_actor),
):
    """
    Create a notice.

    - title and content are required non-empty strings
    - fileType, when set, must be "image" or "pdf"
    """
    try:
        notice = service.create(session, payload.model_dump())
    except (StoreError, SQLAlchemyError):
        raise store_failure("create", "notice")

    body = NoticeEnvelope(notice=NoticeRead.model_validate(notice))
    record_activity(session, "created", "Notices", f"Created notice: {notice.title}", actor)
    return body


@router.put(
    "",
    response_model=NoticeEnvelope,
    response_model_exclude_none=True,
)
def update_notice(
    payload: NoticeUpdate,
    session: Session = Depends(get_session),
    actor: str = Depends(get_actor),
    gateway: UploadGateway = Depends(get_upload_gateway),
):
    """
    Replace a notice's fields.

    - 400 on malformed id, 404 if missing, 409 on a stale `version`
    """
    require_object_id(payload.id, "Notice")
    fields = payload.model_dump(exclude={"id", "version"})

    try:
        outcome = service.update(session, payload.id, fields, payload.version, gateway)
    except (StoreError, SQLAlchemyError):
        raise store_failure("update", "notice")

    notice = unwrap_update(outcome, "Notice")
    body = NoticeEnvelope(notice=NoticeRead.model_validate(notice))
    record_activity(session, "updated", "Notices", f"Updated notice: {notice.title}", actor)
    return body


@router.delete("", response_model=StatusResponse)
def delete_notice(
    id: str | None = Query(default=None),
    session: Session = Depends(get_session),
    actor: str = Depends(get_actor),
    gateway: UploadGateway = Depends(get_upload_gateway),
):
    """
    Delete a notice by `?id=`; its attachment is removed best-effort.
    """
    notice_id = require_object_id(id, "Notice")

    try:
        deleted = service.delete(session, notice_id, gateway)
    except SQLAlchemyError:
        raise store_failure("delete", "notice")

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Notice not found",
        )

    record_activity(session, "deleted", "Notices", f"Deleted notice: {notice_id}", actor)
    return StatusResponse()
