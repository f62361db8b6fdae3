"""
API Dependencies

FastAPI dependencies for injection into route handlers.

Dependencies:
=============
- Database: get_db(), DbSession
- Authentication: get_current_user(), CurrentUser
- Services: get_auth_service(), get_media_service(), get_storage_adapter()

Usage:
======
    from locket.api.dependencies import DbSession, CurrentUser

    @router.get("/devices")
    async def list_devices(db: DbSession, user: CurrentUser):
        return await DeviceRepository(db).list(owner_id=user.user_id)
"""

from locket.api.dependencies.database import (
    get_db,
    DbSession,
)
from locket.api.dependencies.auth import (
    AuthenticatedUser,
    get_current_user,
    get_current_user_token,
    CurrentUser,
)

__all__ = [
    # Database
    "get_db",
    "DbSession",
    # Authentication
    "AuthenticatedUser",
    "get_current_user",
    "get_current_user_token",
    "CurrentUser",
]
