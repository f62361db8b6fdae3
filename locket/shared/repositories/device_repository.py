"""
Device Repository

Devices need nothing beyond the generic operations; this class only declares
ownership and which columns callers may search and filter on.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from locket.shared.models.device import Device
from locket.shared.models.enums import Ownership
from locket.shared.repositories.base import BaseRepository


class DeviceRepository(BaseRepository[Device]):
    """Repository for Device database operations."""

    ownership = Ownership.OWNED
    owner_field = "user_id"
    searchable_fields = ("name", "identifier", "platform")
    filterable_fields = ("name", "identifier", "platform")

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Device, session)
