"""
Repository Pattern Implementations

Repositories encapsulate database queries and provide a clean API for data access.

Repository Hierarchy:
=====================
    BaseRepository[ModelType]           ← Generic resource operations
         │
         ├── UserRepository             ← SELF-owned; password hashing on store
         ├── DeviceRepository           ← OWNED; generic only
         ├── MediaRepository            ← OWNED; links and present-media draw
         └── MediaSessionRepository     ← Append-only exposure log

Usage Example:
==============
    from locket.shared.repositories import MediaRepository

    async def present_for(db: AsyncSession, user_id: UUID):
        repo = MediaRepository(db)
        return await repo.random_present_for_owner(user_id)
"""

from locket.shared.repositories.base import BaseRepository
from locket.shared.repositories.user_repository import UserRepository
from locket.shared.repositories.device_repository import DeviceRepository
from locket.shared.repositories.media_repository import MediaRepository
from locket.shared.repositories.media_session_repository import MediaSessionRepository

__all__ = [
    # Base class
    "BaseRepository",
    # Entity-specific repositories
    "UserRepository",
    "DeviceRepository",
    "MediaRepository",
    "MediaSessionRepository",
]
