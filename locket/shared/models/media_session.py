"""
MediaSession Entity Model

Append-only log of present-media exposures: "user U was shown media M at
time T". Rows are written by the present-media selection flow and never
updated or deleted by the application.
"""

from datetime import datetime
from typing import Optional
import uuid

from sqlalchemy import DateTime, ForeignKey, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from locket.shared.models.base import Base


class MediaSession(Base):
    """
    One exposure of a present-era media item to its owner.

    media_id is nulled rather than cascaded when the media is destroyed, so
    the exposure history survives the item.
    """

    __tablename__ = "media_sessions"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    media_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("media.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<MediaSession(media_id={self.media_id}, user_id={self.user_id})>"
