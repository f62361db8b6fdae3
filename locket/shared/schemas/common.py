"""
Common Schemas

Shared schemas used across the application for consistent API responses.

Reply Envelope:
===============
Every JSON response, success or failure, has the same shape:

    {
        "code": 200,
        "message": "success",
        "errors": false,
        "payload": {...}
    }

Reply is generic over its payload so routes can declare precise response
models, e.g. Reply[DeviceResponse] or Reply[list[UUID]].

Usage:
======
    from locket.shared.schemas.common import Reply

    return Reply[DeviceResponse].success(DeviceResponse.model_validate(device))
"""

from datetime import datetime, timezone
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field


PayloadT = TypeVar("PayloadT")


class BaseSchema(BaseModel):
    """
    Base schema with common configuration.

    - from_attributes: Allow creating from ORM models
    - populate_by_name: Allow field population by name or alias
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# REPLY ENVELOPE
# ═══════════════════════════════════════════════════════════════════════════════


class Reply(BaseModel, Generic[PayloadT]):
    """Uniform response envelope."""

    code: int = Field(default=200, description="HTTP status mirrored in the body")
    message: str = Field(default="success", description="Human-readable outcome")
    errors: bool = Field(default=False, description="True when the request failed")
    payload: Optional[PayloadT] = Field(default=None, description="Operation result")

    @classmethod
    def success(cls, payload: Optional[PayloadT] = None) -> "Reply[PayloadT]":
        """Successful reply carrying a payload."""
        return cls(code=200, message="success", errors=False, payload=payload)


# ═══════════════════════════════════════════════════════════════════════════════
# HEALTH CHECK
# ═══════════════════════════════════════════════════════════════════════════════


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = "healthy"
    service: str = "locket"
    version: str = "1.0.0"
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


# ═══════════════════════════════════════════════════════════════════════════════
# MIXINS
# ═══════════════════════════════════════════════════════════════════════════════


class TimestampMixin(BaseModel):
    """Mixin for timestamp fields in responses."""

    created_at: datetime
    updated_at: datetime
