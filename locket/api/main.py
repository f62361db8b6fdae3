"""
Locket API Application Entry Point

FastAPI application setup with all routers, middleware, and lifecycle management.

Application Architecture:
=========================
┌─────────────────────────────────────────────────────────────────────────────┐
│                              LOCKET API                                     │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                             │
│   ┌─────────────────────────────────────────────────────────────┐           │
│   │                    Middleware Stack                         │           │
│   │  ┌─────────────────────────────────────────────────────┐    │           │
│   │  │ CORS Middleware                                     │    │           │
│   │  │ Request Context (request id, log context)           │    │           │
│   │  │ Exception Handlers (reply envelope)                 │    │           │
│   │  └─────────────────────────────────────────────────────┘    │           │
│   └─────────────────────────────────────────────────────────────┘           │
│                              │                                              │
│                              ▼                                              │
│   ┌─────────────────────────────────────────────────────────────┐           │
│   │                       Routers                               │           │
│   │  ┌────────┐ ┌────────┐ ┌────────┐ ┌─────────┐ ┌────────┐    │           │
│   │  │ Health │ │  Auth  │ │  User  │ │ Devices │ │ Media  │    │           │
│   │  └────────┘ └────────┘ └────────┘ └─────────┘ └────────┘    │           │
│   └─────────────────────────────────────────────────────────────┘           │
│                              │                                              │
│                              ▼                                              │
│   ┌─────────────────────────────────────────────────────────────┐           │
│   │                Dependencies (Injected)                      │           │
│   │  ┌──────────┐ ┌──────────┐ ┌──────────┐ ┌──────────┐        │           │
│   │  │ Database │ │   Auth   │ │ Services │ │ Storage  │        │           │
│   │  └──────────┘ └──────────┘ └──────────┘ └──────────┘        │           │
│   └─────────────────────────────────────────────────────────────┘           │
│                                                                             │
└─────────────────────────────────────────────────────────────────────────────┘

Lifecycle:
==========
1. Application starts → lifespan startup
2. Database connection verified (tables created if configured)
3. Application serves requests
4. Application stops → lifespan shutdown
5. Database connection closed

Usage:
======
    # Run with uvicorn
    uvicorn locket.api.main:app --host 0.0.0.0 --port 8000 --reload

    # Or through the console script
    locket-api

    # Or programmatically
    from locket.api.main import create_application
    app = create_application()
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from locket.config.settings import settings
from locket.shared.db import init_db, close_db
from locket.shared.core.logging import logger
from locket.api.middleware import RequestContextMiddleware, setup_exception_handlers
from locket.api.routes import register_routes


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Startup verifies the database; shutdown disposes of the engine.
    """
    # ═══════════════════════════════════════════════════════════════════════════
    # STARTUP
    # ═══════════════════════════════════════════════════════════════════════════
    logger.info(
        "Starting Locket API",
        app_name=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.APP_ENV,
        storage_backend=settings.STORAGE_BACKEND,
    )

    await init_db()

    logger.info("Locket API started successfully")

    yield

    # ═══════════════════════════════════════════════════════════════════════════
    # SHUTDOWN
    # ═══════════════════════════════════════════════════════════════════════════
    logger.info("Shutting down Locket API")

    await close_db()

    logger.info("Locket API shutdown complete")


def create_application() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance

    This factory function:
    1. Creates the FastAPI app with settings
    2. Adds middleware (CORS, request context)
    3. Sets up exception handlers
    4. Registers all routes
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description="Media lockets linking past and present",
        version=settings.APP_VERSION,
        # Only show docs in development
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # MIDDLEWARE
    # ═══════════════════════════════════════════════════════════════════════════

    # Added last runs first: CORS wraps the request context
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # EXCEPTION HANDLERS
    # ═══════════════════════════════════════════════════════════════════════════

    setup_exception_handlers(app)

    # ═══════════════════════════════════════════════════════════════════════════
    # ROUTES
    # ═══════════════════════════════════════════════════════════════════════════

    register_routes(app)

    return app


# Create the application instance
app = create_application()


def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""
    import uvicorn

    uvicorn.run(
        "locket.api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower(),
    )
