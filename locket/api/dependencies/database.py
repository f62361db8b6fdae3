"""
Database Dependency

FastAPI dependency for database sessions. The session commits when the
handler returns and rolls back when it raises.

Usage:
======
    from locket.api.dependencies.database import DbSession

    @router.get("/devices")
    async def list_devices(db: DbSession):
        return await DeviceRepository(db).list()
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from locket.shared.db import get_db as _get_db


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield the request's database session."""
    async for session in _get_db():
        yield session


# Type alias for cleaner route signatures
DbSession = Annotated[AsyncSession, Depends(get_db)]
