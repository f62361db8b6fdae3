"""
Service Dependencies

FastAPI dependencies for service and adapter injection.

Services are created per request around the request's session; the storage
adapter is shared. Tests replace get_storage_adapter through
app.dependency_overrides.

Usage:
======
    from locket.api.dependencies.services import get_media_service

    @router.get("/request")
    async def present(media_service: MediaService = Depends(get_media_service)):
        ...
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from locket.api.dependencies.database import get_db
from locket.shared.adapters.storage import StorageAdapter, get_storage
from locket.shared.services.auth_service import AuthService
from locket.shared.services.media_service import MediaService


async def get_storage_adapter() -> StorageAdapter:
    """Dependency to get the configured payload backend."""
    return get_storage()


async def get_auth_service(
    db: AsyncSession = Depends(get_db),
) -> AuthService:
    """Dependency to get AuthService instance."""
    return AuthService(db)


async def get_media_service(
    db: AsyncSession = Depends(get_db),
    storage: StorageAdapter = Depends(get_storage_adapter),
) -> MediaService:
    """Dependency to get MediaService instance."""
    return MediaService(db, storage)
