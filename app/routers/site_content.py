# app/routers/site_content.py
"""
CRUD routes for the site-content kinds (factories, team, media, carousel,
mail). They follow exactly the same contract as products / documents /
notices, so the routers are built from one template.
"""
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.core.storage_utils import UploadGateway, get_upload_gateway
from app.database import get_session
from app.models.site_content import (
    CarouselSlide,
    Factory,
    MailSubmission,
    MediaItem,
    TeamMember,
)
from app.repositories.resource_repo import ResourceRepository
from app.routers.common import (
    get_actor,
    record_activity,
    require_object_id,
    store_failure,
    unwrap_update,
)
from app.schemas.common import CamelModel
from app.schemas import site_content as schemas
from app.services.resource_service import ResourceService, StoreError
from app.services.site_content_service import (
    CarouselSlideService,
    FactoryService,
    MailSubmissionService,
    MediaItemService,
    TeamMemberService,
)


def _dump(read_schema: type[CamelModel], entity) -> dict[str, Any]:
    return read_schema.model_validate(entity).model_dump(
        mode="json", by_alias=True, exclude_none=True
    )


def build_router(
    *,
    prefix: str,
    tag: str,
    label: str,
    module: str,
    singular_key: str,
    plural_key: str,
    service: ResourceService,
    create_schema: type[CamelModel],
    update_schema: type[CamelModel],
    read_schema: type[CamelModel],
) -> APIRouter:
    """
    Build GET / POST / PUT / DELETE routes for one site-content kind.

    Response keys: {success, <plural_key>} for lists and
    {success, <singular_key>} for single records.
    """
    router = APIRouter(prefix=prefix, tags=[tag])
    noun = label.lower()

    @router.get("")
    def list_records(session: Session = Depends(get_session)) -> dict:
        try:
            records = service.list(session)
        except SQLAlchemyError:
            raise store_failure("fetch", plural_key)
        return {"success": True, plural_key: [_dump(read_schema, r) for r in records]}

    @router.post("")
    def create_record(
        payload: create_schema,  # type: ignore[valid-type]
        session: Session = Depends(get_session),
        actor: str = Depends(get_actor),
    ) -> dict:
        try:
            record = service.create(session, payload.model_dump())
        except (StoreError, SQLAlchemyError):
            raise store_failure("create", noun)

        data = _dump(read_schema, record)
        record_activity(session, "created", module, f"Created {noun}: {record.id}", actor)
        return {"success": True, singular_key: data}

    @router.put("")
    def update_record(
        payload: update_schema,  # type: ignore[valid-type]
        session: Session = Depends(get_session),
        actor: str = Depends(get_actor),
        gateway: UploadGateway = Depends(get_upload_gateway),
    ) -> dict:
        require_object_id(payload.id, label)
        fields = payload.model_dump(exclude={"id", "version"})

        try:
            outcome = service.update(session, payload.id, fields, payload.version, gateway)
        except (StoreError, SQLAlchemyError):
            raise store_failure("update", noun)

        record = unwrap_update(outcome, label)
        data = _dump(read_schema, record)
        record_activity(session, "updated", module, f"Updated {noun}: {record.id}", actor)
        return {"success": True, singular_key: data}

    @router.delete("")
    def delete_record(
        id: str | None = Query(default=None),
        session: Session = Depends(get_session),
        actor: str = Depends(get_actor),
        gateway: UploadGateway = Depends(get_upload_gateway),
    ) -> dict:
        record_id = require_object_id(id, label)
        try:
            deleted = service.delete(session, record_id, gateway)
        except SQLAlchemyError:
            raise store_failure("delete", noun)

        if not deleted:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"{label} not found",
            )

        record_activity(session, "deleted", module, f"Deleted {noun}: {record_id}", actor)
        return {"success": True}

    return router


factories_router = build_router(
    prefix="/factories",
    tag="Factories",
    label="Factory",
    module="Factories",
    singular_key="factory",
    plural_key="factories",
    service=FactoryService(ResourceRepository(Factory)),
    create_schema=schemas.FactoryCreate,
    update_schema=schemas.FactoryUpdate,
    read_schema=schemas.FactoryRead,
)

team_router = build_router(
    prefix="/team-members",
    tag="Team",
    label="Team member",
    module="Team",
    singular_key="teamMember",
    plural_key="teamMembers",
    service=TeamMemberService(ResourceRepository(TeamMember)),
    create_schema=schemas.TeamMemberCreate,
    update_schema=schemas.TeamMemberUpdate,
    read_schema=schemas.TeamMemberRead,
)

media_router = build_router(
    prefix="/media-items",
    tag="Media",
    label="Media item",
    module="Media",
    singular_key="mediaItem",
    plural_key="mediaItems",
    service=MediaItemService(ResourceRepository(MediaItem)),
    create_schema=schemas.MediaItemCreate,
    update_schema=schemas.MediaItemUpdate,
    read_schema=schemas.MediaItemRead,
)

carousel_router = build_router(
    prefix="/carousel",
    tag="Carousel",
    label="Slide",
    module="Carousel",
    singular_key="slide",
    plural_key="carousel",
    service=CarouselSlideService(ResourceRepository(CarouselSlide)),
    create_schema=schemas.CarouselSlideCreate,
    update_schema=schemas.CarouselSlideUpdate,
    read_schema=schemas.CarouselSlideRead,
)

mail_router = build_router(
    prefix="/mail-submissions",
    tag="Mail",
    label="Mail submission",
    module="Mail",
    singular_key="mailSubmission",
    plural_key="mailSubmissions",
    service=MailSubmissionService(ResourceRepository(MailSubmission)),
    create_schema=schemas.MailSubmissionCreate,
    update_schema=schemas.MailSubmissionUpdate,
    read_schema=schemas.MailSubmissionRead,
)

routers = [factories_router, team_router, media_router, carousel_router, mail_router]
