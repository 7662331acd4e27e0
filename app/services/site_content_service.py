# app/services/site_content_service.py
from typing import Any

from app.models.base import utcnow
from app.models.site_content import (
    CarouselSlide,
    Factory,
    MailSubmission,
    MediaItem,
    TeamMember,
)
from app.services.resource_service import ResourceService


class FactoryService(ResourceService[Factory]):
    kind = "Factory"
    attachment_fields = ("image", "video")


class TeamMemberService(ResourceService[TeamMember]):
    kind = "TeamMember"
    attachment_fields = ("image",)


class MediaItemService(ResourceService[MediaItem]):
    kind = "MediaItem"
    attachment_fields = ("url", "thumbnail")

    def prepare_create(self, fields: dict[str, Any]) -> dict[str, Any]:
        if not fields.get("upload_date"):
            fields["upload_date"] = utcnow().date().isoformat()
        return fields

    def prepare_update(self, entity: MediaItem, fields: dict[str, Any]) -> dict[str, Any]:
        if not fields.get("upload_date"):
            fields["upload_date"] = entity.upload_date
        return fields


class CarouselSlideService(ResourceService[CarouselSlide]):
    kind = "CarouselSlide"
    attachment_fields = ("image",)


class MailSubmissionService(ResourceService[MailSubmission]):
    """
    Enquiries have no attachments; submitted_at is owned by the server.
    """

    kind = "MailSubmission"

    def prepare_create(self, fields: dict[str, Any]) -> dict[str, Any]:
        fields["submitted_at"] = utcnow().isoformat()
        return fields

    def prepare_update(self, entity: MailSubmission, fields: dict[str, Any]) -> dict[str, Any]:
        fields.pop("submitted_at", None)
        return fields
