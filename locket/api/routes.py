"""
Route Registration

Centralizes all route registration for the FastAPI application.

Route Hierarchy:
================
    /health, /ready, /live   → Health check endpoints (public)
    /api/auth                → Authentication (register, login; public)
    /api/user                → Users (generic resource routes)
    /api/devices             → Devices (generic resource routes)
    /api/media               → Media (upload, binary, links, present draw)

Usage:
======
    from locket.api.routes import register_routes

    app = FastAPI()
    register_routes(app)
"""

from fastapi import FastAPI

from locket.api.handlers import (
    auth_handler,
    device_handler,
    health_handler,
    media_handler,
    user_handler,
)


API_PREFIX = "/api"


def register_routes(app: FastAPI) -> None:
    """
    Register all API routes.

    Args:
        app: FastAPI application instance
    """
    # Health check endpoints (no prefix, root level)
    app.include_router(
        health_handler.router,
        tags=["Health"],
    )

    # Authentication endpoints
    app.include_router(
        auth_handler.router,
        prefix=f"{API_PREFIX}/auth",
        tags=["Authentication"],
    )

    # Resource endpoints
    app.include_router(
        user_handler.router,
        prefix=f"{API_PREFIX}/user",
        tags=["Users"],
    )

    app.include_router(
        device_handler.router,
        prefix=f"{API_PREFIX}/devices",
        tags=["Devices"],
    )

    app.include_router(
        media_handler.router,
        prefix=f"{API_PREFIX}/media",
        tags=["Media"],
    )
