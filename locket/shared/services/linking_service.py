"""
Linking Service

Creates directed links between media items of opposite eras.

Rules, checked in order:
========================
    1. Target does not exist          → REJECTED_MISSING   (no-op)
    2. Target has the source's era    → REJECTED_SAME_ERA  (no-op)
    3. Edge already recorded          → EXISTS             (no-op)
    4. Otherwise the edge is inserted → CREATED

None of these outcomes is an error. Callers that only care whether the
request was accepted treat every outcome as success; the outcome exists so
the rejection paths can be logged and tested.

Only source → target is written. A reverse edge needs its own call.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from locket.shared.core.logging import get_logger
from locket.shared.models.enums import LinkOutcome
from locket.shared.models.media import Media
from locket.shared.repositories.media_repository import MediaRepository

logger = get_logger("linking")


class LinkingService:
    """Applies the link rules on top of MediaRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.media_repo = MediaRepository(session)

    async def create_link(self, source: Media, target_id: UUID) -> LinkOutcome:
        """
        Link source to the media identified by target_id.

        Args:
            source: Media the edge starts from
            target_id: Id of the media the edge points to

        Returns:
            What happened; never raises for a rejected link
        """
        target = await self.media_repo.get(target_id)
        if target is None:
            outcome = LinkOutcome.REJECTED_MISSING
        elif not source.can_link_to(target):
            outcome = LinkOutcome.REJECTED_SAME_ERA
        elif await self.media_repo.add_link(source.id, target.id):
            outcome = LinkOutcome.CREATED
        else:
            outcome = LinkOutcome.EXISTS

        logger.info(
            "Link requested",
            media_id=str(source.id),
            link_id=str(target_id),
            outcome=outcome.value,
        )
        return outcome
