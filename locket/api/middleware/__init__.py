"""
API Middleware

Custom middleware for the FastAPI application.

Components:
===========
- error_handler: Global exception handling into the reply envelope
- request_context: Request id and per-request logging context

Usage:
======
    from locket.api.middleware import RequestContextMiddleware, setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
    app.add_middleware(RequestContextMiddleware)
"""

from locket.api.middleware.error_handler import error_reply, setup_exception_handlers
from locket.api.middleware.request_context import RequestContextMiddleware

__all__ = [
    "error_reply",
    "setup_exception_handlers",
    "RequestContextMiddleware",
]
