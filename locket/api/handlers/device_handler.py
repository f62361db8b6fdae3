"""
Device Handler

Generic resource routes for the caller's registered devices.
"""

from locket.api.handlers.resource_handler import build_resource_router
from locket.shared.repositories.device_repository import DeviceRepository
from locket.shared.schemas.device import DeviceCreate, DeviceResponse, DeviceUpdate


router = build_resource_router(
    repository=DeviceRepository,
    resource_name="Device",
    response_schema=DeviceResponse,
    create_schema=DeviceCreate,
    update_schema=DeviceUpdate,
)
