"""
Media Service

Business logic for the media endpoints: upload, binary retrieval, deletion,
links and present-media selection.

Service Pattern:
================
    media_handler → MediaService → MediaRepository / MediaSessionRepository
                                 → LinkingService
                                 → StorageAdapter (payload backend)

Ordering Guarantees:
====================
Upload:   payload is stored first, then the row is inserted.
          Payload failure → no row. Row failure → the stored payload is
          orphaned and logged, not cleaned up.

Destroy:  payload is deleted first, then the row.
          Payload failure → row untouched. Row failure → ServerError and a
          row whose payload is gone, logged for operator follow-up.

Ownership:
==========
Every operation except get_links() resolves media through the caller's own
collection and reports anything else as not found. get_links() answers for
any media id so linked items can be discovered across users.
"""

from typing import Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from locket.shared.adapters.storage import StorageAdapter
from locket.shared.core.exceptions import MediaNotFoundError, ServerError
from locket.shared.core.logging import get_logger
from locket.shared.models.enums import Era, LinkOutcome, Locket
from locket.shared.models.media import Media
from locket.shared.repositories.media_repository import MediaRepository
from locket.shared.repositories.media_session_repository import MediaSessionRepository
from locket.shared.services.linking_service import LinkingService

logger = get_logger("media")


def file_extension(original_name: str) -> str:
    """Extension of an uploaded file name without the dot, '' if there is none."""
    _, dot, extension = original_name.rpartition(".")
    return extension if dot else ""


class MediaService:
    """
    Service for media business logic.

    Attributes:
        session: Database session
        storage: Payload backend
        repo: MediaRepository instance
        sessions: MediaSessionRepository instance
        linking: LinkingService instance
    """

    def __init__(self, session: AsyncSession, storage: StorageAdapter) -> None:
        self.session = session
        self.storage = storage
        self.repo = MediaRepository(session)
        self.sessions = MediaSessionRepository(session)
        self.linking = LinkingService(session)

    async def _get_owned(self, media_id: UUID, owner_id: UUID) -> Media:
        media = await self.repo.get_owned(media_id, owner_id)
        if media is None:
            raise MediaNotFoundError(str(media_id))
        return media

    # ═══════════════════════════════════════════════════════════════════════════
    # UPLOAD & RETRIEVAL
    # ═══════════════════════════════════════════════════════════════════════════

    async def store_upload(
        self,
        owner_id: UUID,
        local_path: str,
        original_name: str,
        mimetype: str,
        era: Era = Era.PAST,
        locket: Locket = Locket.NONE,
    ) -> Media:
        """
        Persist an uploaded file and create its media row.

        Args:
            owner_id: Authenticated user, becomes the owner
            local_path: Spooled upload on local disk
            original_name: File name as sent by the client
            mimetype: Content type as sent by the client
            era: Era header value
            locket: Locket header value

        Returns:
            The new media row

        Raises:
            StorageError: If the payload could not be stored (no row created)
            ServerError: If the row could not be created
        """
        location = await self.storage.put(
            local_path,
            original_name,
            file_extension(original_name),
            owner_id,
        )

        try:
            media = await self.repo.store({
                "user_id": owner_id,
                "path": location,
                "mimetype": mimetype,
                "era": era,
                "locket": locket,
            })
        except Exception as e:
            logger.error(
                "Media row not created, stored payload orphaned",
                user_id=str(owner_id),
                location=location,
                error=str(e),
            )
            raise ServerError("Media could not be saved") from e

        logger.info("Media stored", media_id=str(media.id), era=media.era.value)
        return media

    async def get_payload(self, owner_id: UUID, media_id: UUID) -> Tuple[Media, bytes]:
        """
        Load a media row owned by the caller together with its payload.

        Raises:
            MediaNotFoundError: If the row is missing, not owned, or its
                payload is missing
        """
        media = await self._get_owned(media_id, owner_id)

        data = await self.storage.get(media.path)
        if data is None:
            logger.warning("Media payload missing", media_id=str(media.id), location=media.path)
            raise MediaNotFoundError(str(media_id))

        return media, data

    # ═══════════════════════════════════════════════════════════════════════════
    # DELETION
    # ═══════════════════════════════════════════════════════════════════════════

    async def destroy(self, owner_id: UUID, media_id: UUID) -> None:
        """
        Delete a media payload, then its row.

        A payload that is already missing does not block the row deletion.

        Raises:
            MediaNotFoundError: If the media is missing or not owned
            StorageError: If the payload could not be deleted (row kept)
            ServerError: If the row could not be deleted after the payload was
        """
        media = await self._get_owned(media_id, owner_id)

        if not await self.storage.delete(media.path):
            logger.warning("Media payload already missing", media_id=str(media.id), location=media.path)

        try:
            deleted = await self.repo.destroy(media.id)
        except Exception as e:
            logger.error(
                "Media payload deleted but row was not",
                media_id=str(media.id),
                location=media.path,
                error=str(e),
            )
            raise ServerError("Media could not be deleted") from e

        if not deleted:
            raise MediaNotFoundError(str(media_id))

        logger.info("Media destroyed", media_id=str(media.id))

    # ═══════════════════════════════════════════════════════════════════════════
    # LINKS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_links(self, media_id: UUID) -> list[UUID]:
        """
        Link targets of any media item, regardless of owner.

        Raises:
            MediaNotFoundError: If the media does not exist
        """
        media = await self.repo.get(media_id)
        if media is None:
            raise MediaNotFoundError(str(media_id))
        return await self.repo.get_link_ids(media.id)

    async def store_link(self, owner_id: UUID, media_id: UUID, link_id: UUID) -> LinkOutcome:
        """
        Link two of the caller's media items (media → link only).

        Raises:
            MediaNotFoundError: If either item is missing or not owned
        """
        media = await self._get_owned(media_id, owner_id)
        link = await self._get_owned(link_id, owner_id)
        return await self.linking.create_link(media, link.id)

    # ═══════════════════════════════════════════════════════════════════════════
    # PRESENT-MEDIA SELECTION
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_present(self, owner_id: UUID) -> Media:
        """
        Draw one of the caller's present-era items and record the exposure.

        Every call is an independent uniform draw, so the same item may come
        back twice in a row.

        Raises:
            MediaNotFoundError: If the caller has no present-era media (no
                exposure is recorded)
        """
        media = await self.repo.random_present_for_owner(owner_id)
        if media is None:
            raise MediaNotFoundError()

        await self.sessions.record(media.id, owner_id)
        logger.info("Present media served", media_id=str(media.id))
        return media
