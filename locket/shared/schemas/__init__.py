"""
Pydantic Schemas

Request/response models for the API.

Usage:
======
    from locket.shared.schemas import Reply, DeviceResponse, MediaResponse
"""

from locket.shared.schemas.common import (
    BaseSchema,
    Reply,
    HealthResponse,
)
from locket.shared.schemas.user import (
    UserCreate,
    UserLogin,
    UserUpdate,
    UserResponse,
    AuthResponse,
)
from locket.shared.schemas.device import (
    DeviceCreate,
    DeviceUpdate,
    DeviceResponse,
)
from locket.shared.schemas.media import (
    MediaResponse,
    LinkRequest,
    MediaUpdate,
)

__all__ = [
    # Common
    "BaseSchema",
    "Reply",
    "HealthResponse",
    # User
    "UserCreate",
    "UserLogin",
    "UserUpdate",
    "UserResponse",
    "AuthResponse",
    # Device
    "DeviceCreate",
    "DeviceUpdate",
    "DeviceResponse",
    # Media
    "MediaResponse",
    "LinkRequest",
    "MediaUpdate",
]
