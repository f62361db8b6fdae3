"""
Media Entity Models

A media item is an uploaded binary (usually a photo) owned by one user and
classified into an era. Items from opposite eras can be linked; a link is a
directed edge stored as its own row.

Model Hierarchy:
================
    Media
       ├── user (User)                      - Owner, never changes
       └── links (via media_links)          - Edges where this item is the source

    MediaLink
       ├── media_id  → Media.id             - Source of the edge
       └── link_id   → Media.id             - Target of the edge

SAMPLE MEDIA RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 550e8400-e29b-41d4-a716-446655440000                      │
│ user_id          │ 660e8400-e29b-41d4-a716-446655440000                      │
│ path             │ "660e8400-.../1b4e28ba-2fa1-11d2-883f-0016d3cca427.jpg"   │
│ mimetype         │ "image/jpeg"                                              │
│ era              │ "past"                                                    │
│ emotions         │ ["joy"]                                                   │
│ locket           │ "none"                                                    │
└──────────────────────────────────────────────────────────────────────────────┘

Link Rules:
===========
- Source and target must have different eras.
- (media_id, link_id) is the primary key of media_links, so an edge exists
  at most once and inserting it again is a no-op.
- A → B does not imply B → A.
"""

from datetime import datetime
from typing import TYPE_CHECKING
import uuid

from sqlalchemy import DateTime, Enum as SQLEnum, ForeignKey, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from locket.shared.models.base import Base, TimestampMixin
from locket.shared.models.enums import Era, Locket


if TYPE_CHECKING:
    from locket.shared.models.user import User


def _enum_values(enum_cls) -> list[str]:
    return [member.value for member in enum_cls]


class Media(Base, TimestampMixin):
    """
    Media model - one uploaded payload and its metadata.

    Attributes:
        id: Unique identifier (UUID v4)
        user_id: Owning user (required, never transferred)
        path: Opaque location handle returned by the storage adapter
        mimetype: MIME type of the payload
        era: past or present (defaults to past)
        emotions: Free-form tags
        locket: temp, perm or none (defaults to none)
    """

    __tablename__ = "media"

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # FOREIGN KEYS
    # ═══════════════════════════════════════════════════════════════════════════

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # PAYLOAD
    # ═══════════════════════════════════════════════════════════════════════════

    path: Mapped[str] = mapped_column(String(1024), nullable=False)

    mimetype: Mapped[str] = mapped_column(String(255), nullable=False)

    # ═══════════════════════════════════════════════════════════════════════════
    # CLASSIFICATION
    # ═══════════════════════════════════════════════════════════════════════════

    era: Mapped[Era] = mapped_column(
        SQLEnum(Era, native_enum=False, length=16, values_callable=_enum_values),
        nullable=False,
        default=Era.PAST,
        index=True,
    )

    emotions: Mapped[list[str]] = mapped_column(nullable=False, default=list)

    locket: Mapped[Locket] = mapped_column(
        SQLEnum(Locket, native_enum=False, length=16, values_callable=_enum_values),
        nullable=False,
        default=Locket.NONE,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    user: Mapped["User"] = relationship("User", back_populates="media")

    # ═══════════════════════════════════════════════════════════════════════════
    # METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    def can_link_to(self, other: "Media") -> bool:
        """A link only joins items from opposite eras."""
        return other.era != self.era

    def __repr__(self) -> str:
        return f"<Media(id={self.id}, user_id={self.user_id}, era={self.era})>"


class MediaLink(Base):
    """
    Directed edge from one media item to another of the opposite era.

    Attributes:
        media_id: Source media
        link_id: Target media
        created_at: When the edge was recorded
    """

    __tablename__ = "media_links"

    media_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("media.id", ondelete="CASCADE"),
        primary_key=True,
    )

    link_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("media.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<MediaLink(media_id={self.media_id}, link_id={self.link_id})>"
