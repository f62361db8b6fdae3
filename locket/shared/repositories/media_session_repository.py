"""
Media Session Repository

Append-only writer for the present-media exposure log. It has no update or
delete.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from locket.shared.models.media_session import MediaSession
from locket.shared.repositories.base import BaseRepository


class MediaSessionRepository(BaseRepository[MediaSession]):
    """Repository for MediaSession records."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(MediaSession, session)

    async def record(self, media_id: UUID, user_id: UUID) -> MediaSession:
        """
        Record that a user was shown a media item now.

        SQL Generated:
            INSERT INTO media_sessions (id, media_id, user_id) VALUES (...)
        """
        return await self.store({"media_id": media_id, "user_id": user_id})
