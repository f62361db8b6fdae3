"""
Media Repository

Database operations for media items and the links between them.

Common Operations:
==================
- get_owned()                 → Media only if it belongs to the given user
- get_link_ids()              → Targets of a media item's outgoing links
- get_link_map()              → Outgoing links for many media items at once
- add_link()                  → Atomic append-if-absent of one directed edge
- random_present_for_owner()  → Uniform random draw over a user's present media

Atomicity:
==========
add_link() is a single INSERT ... ON CONFLICT DO NOTHING against the
(media_id, link_id) primary key, so two concurrent requests for the same edge
cannot both insert it. random_present_for_owner() is a single
ORDER BY random() LIMIT 1 query, so the draw never works from a stale count.
"""

from collections import defaultdict
from typing import Iterable, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from locket.shared.models.enums import Era, Ownership
from locket.shared.models.media import Media, MediaLink
from locket.shared.repositories.base import BaseRepository


# Dialects whose INSERT supports ON CONFLICT DO NOTHING
_INSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class MediaRepository(BaseRepository[Media]):
    """Repository for Media and MediaLink database operations."""

    ownership = Ownership.OWNED
    owner_field = "user_id"
    searchable_fields = ("mimetype",)
    filterable_fields = ("era", "locket", "mimetype")

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Media, session)

    # ═══════════════════════════════════════════════════════════════════════════
    # OWNERSHIP LOOKUPS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_owned(self, media_id: UUID, owner_id: UUID) -> Optional[Media]:
        """
        Get media only if it belongs to the given user.

        SQL Generated:
            SELECT * FROM media WHERE id = '...' AND user_id = '...'
        """
        return await self.get(media_id, owner_id=owner_id)

    async def random_present_for_owner(self, owner_id: UUID) -> Optional[Media]:
        """
        Draw one present-era media item uniformly at random.

        Returns:
            A media item, or None if the user has no present-era media

        SQL Generated:
            SELECT * FROM media
            WHERE user_id = '...' AND era = 'present'
            ORDER BY random() LIMIT 1
        """
        query = (
            select(Media)
            .where(Media.user_id == owner_id, Media.era == Era.PRESENT)
            .order_by(func.random())
            .limit(1)
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    # ═══════════════════════════════════════════════════════════════════════════
    # LINKS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_link_ids(self, media_id: UUID) -> list[UUID]:
        """
        Targets of a media item's outgoing links, in creation order.

        SQL Generated:
            SELECT link_id FROM media_links WHERE media_id = '...'
        """
        query = (
            select(MediaLink.link_id)
            .where(MediaLink.media_id == media_id)
            .order_by(MediaLink.created_at, MediaLink.link_id)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_link_map(self, media_ids: Iterable[UUID]) -> dict[UUID, list[UUID]]:
        """
        Outgoing links for several media items in one query.

        Returns:
            Mapping of media id to its link targets; ids without links map to []
        """
        ids = list(media_ids)
        links: dict[UUID, list[UUID]] = defaultdict(list)
        if not ids:
            return links

        query = (
            select(MediaLink.media_id, MediaLink.link_id)
            .where(MediaLink.media_id.in_(ids))
            .order_by(MediaLink.created_at, MediaLink.link_id)
        )
        result = await self.session.execute(query)
        for media_id, link_id in result.all():
            links[media_id].append(link_id)
        return links

    async def add_link(self, media_id: UUID, link_id: UUID) -> bool:
        """
        Record the edge media_id → link_id unless it already exists.

        Returns:
            True if a new edge was inserted, False if it was already there

        SQL Generated:
            INSERT INTO media_links (media_id, link_id) VALUES ('...', '...')
            ON CONFLICT DO NOTHING
        """
        dialect = self.session.get_bind().dialect.name
        insert = _INSERT_BY_DIALECT.get(dialect)
        if insert is None:
            raise NotImplementedError(f"Atomic link insert unsupported on dialect '{dialect}'")

        statement = (
            insert(MediaLink)
            .values(media_id=media_id, link_id=link_id)
            .on_conflict_do_nothing(index_elements=["media_id", "link_id"])
        )
        result = await self.session.execute(statement)
        await self.session.flush()
        return result.rowcount == 1
