"""
Locket SQLAlchemy Models

Model Hierarchy:
================
    User
       ├── media (Media[])
       │      └── media_links (MediaLink[])
       ├── devices (Device[])
       └── MediaSession (append-only exposure log)

Models Overview:
================
- Base: Base class and timestamp mixin
- User: Registered application user
- Device: Device registered by a user
- Media: Uploaded payload with era, locket and emotion tags
- MediaLink: Directed edge between media of opposite eras
- MediaSession: Record of a present-media exposure

Usage:
======
    from locket.shared.models import User, Media, Era
"""

from locket.shared.models.base import Base, TimestampMixin
from locket.shared.models.enums import Era, Locket, Ownership, LinkOutcome
from locket.shared.models.user import User
from locket.shared.models.device import Device
from locket.shared.models.media import Media, MediaLink
from locket.shared.models.media_session import MediaSession

__all__ = [
    # Base classes and mixins
    "Base",
    "TimestampMixin",
    # Enums
    "Era",
    "Locket",
    "Ownership",
    "LinkOutcome",
    # Models
    "User",
    "Device",
    "Media",
    "MediaLink",
    "MediaSession",
]
