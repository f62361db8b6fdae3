"""
API Handlers

Route handlers for the Locket API.

Handlers follow the pattern:
- Parse HTTP requests
- Call service or repository methods
- Wrap results in the reply envelope

Errors are raised as LocketException subclasses and rendered by the
exception handlers in locket.api.middleware.
"""

from locket.api.handlers import (
    auth_handler,
    device_handler,
    health_handler,
    media_handler,
    resource_handler,
    user_handler,
)

__all__ = [
    "auth_handler",
    "device_handler",
    "health_handler",
    "media_handler",
    "resource_handler",
    "user_handler",
]
