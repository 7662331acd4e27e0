# app/models/site_content.py
"""
Site-content kinds that used to live only in browser storage.

They share the same EntityBase (id / timestamps / version) and go through the
same repository + service stack as products, documents and notices.
Bilingual fields are stored as JSON objects: {"en": ..., "ne": ...}.
"""
from sqlalchemy import JSON, Column
from sqlmodel import Field

from app.models.base import EntityBase


class Factory(EntityBase, table=True):
    """
    Factory / depot / dealer location shown on the map.
    """

    __tablename__ = "factories"

    name: str = Field(max_length=255)
    location: dict = Field(
        default_factory=dict,
        sa_column=Column(JSON, nullable=False),
        description='{"lat": float, "lng": float}',
    )
    contact: str = Field(max_length=100)

    # headquarters | depot | factory | dealer
    type: str = Field(max_length=20, index=True)

    image: str | None = None
    video: str | None = None


class TeamMember(EntityBase, table=True):
    __tablename__ = "team_members"

    name: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    position: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    image: str = Field(default="")

    # board | management
    type: str = Field(max_length=20, index=True)

    order: int = Field(default=0, ge=0)
    is_active: bool = Field(default=True)


class MediaItem(EntityBase, table=True):
    """
    Gallery image or video.

    display_in lists the surfaces showing the item ("gallery", "videos", "home").
    """

    __tablename__ = "media_items"

    title: str = Field(max_length=255)

    # image | video
    type: str = Field(max_length=10, index=True)

    url: str
    thumbnail: str | None = None
    upload_date: str
    category: str = Field(max_length=50)
    display_in: list = Field(default_factory=list, sa_column=Column(JSON, nullable=False))


class CarouselSlide(EntityBase, table=True):
    __tablename__ = "carousel_slides"

    image: str
    title: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    subtitle: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    duration: int = Field(default=5000, gt=0, description="Display time in ms")
    order: int = Field(default=0, ge=0)
    is_active: bool = Field(default=True)


class MailSubmission(EntityBase, table=True):
    """
    Contact-form or dealer-enquiry submission from the public site.
    """

    __tablename__ = "mail_submissions"

    # contact | dealer
    type: str = Field(max_length=10, index=True)

    name: str = Field(max_length=255)
    email: str = Field(max_length=255)
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

    # new | read | replied
    status: str = Field(default="new", max_length=10, index=True)
