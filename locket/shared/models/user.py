"""
User Entity Model

Represents a registered application user.

Model Hierarchy:
================
    User
       ├── media (Media[])            - Uploaded media, looked up through MediaRepository
       ├── devices (Device[])         - Registered devices
       └── media_sessions (MediaSession[])

SAMPLE USER RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 550e8400-e29b-41d4-a716-446655440000                      │
│ email            │ "user@example.com"                                        │
│ name             │ "Ada"                                                     │
│ password_hash    │ "$2b$12$..."                                              │
│ created_at       │ 2024-01-01T00:00:00Z                                      │
│ updated_at       │ 2024-01-15T10:30:00Z                                      │
└──────────────────────────────────────────────────────────────────────────────┘

The user's media ids are not stored on the user row; they are read from the
media table (MediaRepository scopes it by user_id) so there is a single source of
truth for ownership.
"""

from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from locket.shared.models.base import Base, TimestampMixin


if TYPE_CHECKING:
    from locket.shared.models.device import Device
    from locket.shared.models.media import Media


class User(Base, TimestampMixin):
    """
    User model representing a registered application user.

    Attributes:
        id: Unique identifier (UUID v4)
        email: User's email address (unique, indexed)
        name: Optional display name
        password_hash: Bcrypt hashed password
    """

    __tablename__ = "users"

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # PROFILE & AUTHENTICATION
    # ═══════════════════════════════════════════════════════════════════════════

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    name: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )

    password_hash: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    media: Mapped[list["Media"]] = relationship(
        "Media",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    devices: Mapped[list["Device"]] = relationship(
        "Device",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
