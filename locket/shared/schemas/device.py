"""
Device Schemas
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from locket.shared.schemas.common import BaseSchema, TimestampMixin


class DeviceCreate(BaseModel):
    """Schema for registering a device. The owner comes from the token."""

    name: str = Field(min_length=1, max_length=255)
    identifier: str = Field(min_length=1, max_length=255)
    platform: Optional[str] = Field(default=None, max_length=50)


class DeviceUpdate(BaseModel):
    """Partial device update."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    identifier: Optional[str] = Field(default=None, min_length=1, max_length=255)
    platform: Optional[str] = Field(default=None, max_length=50)


class DeviceResponse(BaseSchema, TimestampMixin):
    """Schema for device response."""

    id: UUID
    user_id: UUID
    name: str
    identifier: str
    platform: Optional[str] = None
