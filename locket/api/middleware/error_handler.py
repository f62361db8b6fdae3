"""
Error Handler Middleware

Global exception handling for the API.

Every failure is rendered in the same envelope as a success, with
errors=true and an empty payload.

Error Response Format:
======================
    {
        "code": 404,
        "message": "Media not found",
        "errors": true,
        "payload": null
    }

Exception Handling:
===================
1. LocketException subclasses → their status_code and to_reply()
2. Request validation (body, path, query, header) → 400
3. Pydantic ValidationError raised in handlers → 400
4. Starlette HTTP exceptions (unknown route, wrong method) → their status
5. Other exceptions → 500 with generic message (details only in DEBUG)

Usage:
======
    from locket.api.middleware.error_handler import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from locket.config.settings import settings
from locket.shared.core.exceptions import LocketException
from locket.shared.core.logging import logger


def error_reply(status_code: int, message: str) -> dict[str, Any]:
    """Envelope for a failed request."""
    return {
        "code": status_code,
        "message": message,
        "errors": True,
        "payload": None,
    }


def _validation_message(errors: list[dict[str, Any]]) -> str:
    if not errors:
        return "Request validation failed"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    detail = first.get("msg", "invalid value")
    return f"{location}: {detail}" if location else detail


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Set up global exception handlers.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(LocketException)
    async def locket_exception_handler(
        request: Request,
        exc: LocketException,
    ) -> JSONResponse:
        """
        Handle Locket-specific exceptions.

        All custom exceptions carry a status_code, a machine-readable
        error_code, a message and optional details. Details are logged, never
        returned.
        """
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            "Application error",
            error_code=exc.error_code,
            message=exc.message,
            status_code=exc.status_code,
            details=exc.details,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_reply(),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle malformed bodies, paths, query strings and headers."""
        errors = jsonable_encoder(exc.errors())
        logger.warning(
            "Request validation error",
            errors=errors,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=400,
            content=error_reply(400, _validation_message(errors)),
        )

    @app.exception_handler(ValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: ValidationError,
    ) -> JSONResponse:
        """Handle Pydantic validation errors raised while handling a request."""
        errors = jsonable_encoder(exc.errors())
        logger.warning(
            "Validation error",
            errors=errors,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=400,
            content=error_reply(400, _validation_message(errors)),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        """Handle routing errors such as unknown paths and wrong methods."""
        return JSONResponse(
            status_code=exc.status_code,
            content=error_reply(exc.status_code, str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Handle unexpected exceptions.

        Full error details are logged but only exposed to clients in DEBUG.
        """
        logger.error(
            "Unexpected error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
            exc_info=True,
        )
        message = str(exc) if settings.DEBUG else "An unexpected error occurred"
        return JSONResponse(
            status_code=500,
            content=error_reply(500, message),
        )
