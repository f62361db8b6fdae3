"""
Media Schemas

Request/response models for the media endpoints. Media are created from a
multipart upload, so there is no JSON create schema; the link request is the
only JSON body the media routes accept.
"""

from typing import Optional, Sequence
from uuid import UUID

from pydantic import BaseModel, Field

from locket.shared.models.enums import Era, Locket
from locket.shared.models.media import Media
from locket.shared.schemas.common import BaseSchema, TimestampMixin


class MediaResponse(BaseSchema, TimestampMixin):
    """
    Media metadata as returned by list and upload.

    `links` holds the targets of the item's outgoing links.
    """

    id: UUID
    user_id: UUID
    path: str
    mimetype: str
    era: Era
    emotions: list[str] = Field(default_factory=list)
    locket: Locket
    links: list[UUID] = Field(default_factory=list)

    @classmethod
    def from_media(cls, media: Media, links: Optional[Sequence[UUID]] = None) -> "MediaResponse":
        """Build the response from the ORM row and its link targets."""
        response = cls.model_validate(media)
        response.links = list(links or [])
        return response


class LinkRequest(BaseModel):
    """Body of POST /media/links."""

    media_id: UUID = Field(alias="mediaId", description="Media to add the link to")
    link_id: UUID = Field(alias="linkId", description="Media to link to")

    model_config = {"populate_by_name": True}


class MediaUpdate(BaseModel):
    """Accepted for contract symmetry; media updates answer 501."""

    era: Optional[Era] = None
    locket: Optional[Locket] = None
