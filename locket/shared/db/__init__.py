"""
Database Module

Database connectivity and session management for Locket.

Architecture Overview:
======================
    FastAPI Route
        │  Dependency Injection: get_db()
        ▼
    AsyncSession (one per request, commit on success, rollback on error)
        │  Passed to Repository
        ▼
    Repository (UserRepository, DeviceRepository, MediaRepository, ...)
        │  SQL
        ▼
    PostgreSQL (asyncpg) / SQLite (aiosqlite)

Usage in FastAPI:
=================
    from locket.shared.db import get_db

    @app.get("/devices/{device_id}")
    async def show(device_id: UUID, db: AsyncSession = Depends(get_db)):
        return await DeviceRepository(db).get(device_id)
"""

from locket.shared.db.session import (
    get_db,
    init_db,
    close_db,
    AsyncSessionLocal,
    engine,
)

__all__ = [
    "get_db",
    "init_db",
    "close_db",
    "AsyncSessionLocal",
    "engine",
]
