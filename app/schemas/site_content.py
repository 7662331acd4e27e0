# app/schemas/site_content.py
from typing import Literal

from pydantic import field_validator, model_validator

from app.schemas.common import CamelModel, EntityRead, strip_optional, strip_required


class LocalizedText(CamelModel):
    """
    English / Nepali pair. Nepali may be left blank while a translation is pending.
    """

    en: str
    ne: str = ""

    @field_validator("en")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return strip_required(v)

    @field_validator("ne")
    @classmethod
    def strip_ne(cls, v: str) -> str:
        return v.strip()


class GeoPoint(CamelModel):
    lat: float
    lng: float

    @field_validator("lat")
    @classmethod
    def valid_lat(cls, v: float) -> float:
        if not -90 <= v <= 90:
            raise ValueError("lat must be between -90 and 90")
        return v

    @field_validator("lng")
    @classmethod
    def valid_lng(cls, v: float) -> float:
        if not -180 <= v <= 180:
            raise ValueError("lng must be between -180 and 180")
        return v


# ----- Factories -----


class FactoryCreate(CamelModel):
    name: str
    location: GeoPoint
    contact: str
    type: Literal["headquarters", "depot", "factory", "dealer"]
    image: str | None = None
    video: str | None = None

    @field_validator("name", "contact")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return strip_required(v)

    @field_validator("image", "video")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        return strip_optional(v)


class FactoryUpdate(FactoryCreate):
    id: str
    version: int | None = None


class FactoryRead(EntityRead):
    name: str
    location: GeoPoint
    contact: str
    type: str
    image: str | None = None
    video: str | None = None


# ----- Team members -----


class TeamMemberCreate(CamelModel):
    name: LocalizedText
    position: LocalizedText
    image: str = ""
    type: Literal["board", "management"]
    order: int = 0
    is_active: bool = True

    @field_validator("order")
    @classmethod
    def non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("order cannot be negative")
        return v

    @field_validator("is_active", mode="before")
    @classmethod
    def default_active(cls, v):
        return True if v is None else v


class TeamMemberUpdate(TeamMemberCreate):
    id: str
    version: int | None = None


class TeamMemberRead(EntityRead):
    name: LocalizedText
    position: LocalizedText
    image: str
    type: str
    order: int
    is_active: bool


# ----- Media items -----


class MediaItemCreate(CamelModel):
    """
    Gallery image or video.

    displayIn defaults by type: images -> ["gallery"], videos -> ["videos"].
    """

    title: str
    type: Literal["image", "video"]
    url: str
    thumbnail: str | None = None
    upload_date: str | None = None
    category: str = "general"
    display_in: list[str] | None = None

    @field_validator("title", "url")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return strip_required(v)

    @field_validator("thumbnail", "upload_date")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        return strip_optional(v)

    @model_validator(mode="after")
    def default_display_in(self):
        if not self.display_in:
            self.display_in = ["gallery"] if self.type == "image" else ["videos"]
        return self


class MediaItemUpdate(MediaItemCreate):
    id: str
    version: int | None = None


class MediaItemRead(EntityRead):
    title: str
    type: str
    url: str
    thumbnail: str | None = None
    upload_date: str
    category: str
    display_in: list[str]


# ----- Carousel -----


class CarouselSlideCreate(CamelModel):
    image: str
    title: LocalizedText
    subtitle: LocalizedText
    duration: int = 5000
    order: int = 0
    is_active: bool = True

    @field_validator("image")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return strip_required(v)

    @field_validator("duration")
    @classmethod
    def positive_duration(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("duration must be positive")
        return v

    @field_validator("order")
    @classmethod
    def non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("order cannot be negative")
        return v

    @field_validator("is_active", mode="before")
    @classmethod
    def default_active(cls, v):
        return True if v is None else v


class CarouselSlideUpdate(CarouselSlideCreate):
    id: str
    version: int | None = None


class CarouselSlideRead(EntityRead):
    image: str
    title: LocalizedText
    subtitle: LocalizedText
    duration: int
    order: int
    is_active: bool


# ----- Mail submissions -----


class MailSubmissionCreate(CamelModel):
    """
    Contact or dealer enquiry from the public site.
    submittedAt is set by the server; status starts as "new".
    """

    type: Literal["contact", "dealer"]
    name: str
    email: str
    phone: str | None = None
    subject: str | None = None
    message: str | None = None
    company: str | None = None
    contact_person: str | None = None
    business_type: str | None = None
    location: str | None = None
    volume: str | None = None
    additional_info: str | None = None
    status: Literal["new", "read", "replied"] = "new"

    @field_validator("name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return strip_required(v)

    @field_validator("email")
    @classmethod
    def looks_like_email(cls, v: str) -> str:
        v = v.strip()
        if "@" not in v or v.startswith("@") or v.endswith("@"):
            raise ValueError("invalid email address")
        return v

    @field_validator(
        "phone",
        "subject",
        "message",
        "company",
        "contact_person",
        "business_type",
        "location",
        "volume",
        "additional_info",
    )
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        return strip_optional(v)

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, v):
        return v or "new"


class MailSubmissionUpdate(MailSubmissionCreate):
    id: str
    version: int | None = None


class MailSubmissionRead(EntityRead):
    type: str
    name: str
    email: str
    phone: str | None = None
    subject: str | None = None
    message: str | None = None
    company: str | None = None
    contact_person: str | None = None
    business_type: str | None = None
    location: str | None = None
    volume: str | None = None
    additional_info: str | None = None
    submitted_at: str
    status: str
