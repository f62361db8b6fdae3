"""
Custom Exceptions

Application-specific exceptions with HTTP status codes and error codes.

Exception Hierarchy:
====================
    LocketException (base)
       │
       ├── AuthenticationError (401)        ← Missing or invalid token
       ├── NotFoundError (404)              ← Absent, or owned by someone else
       │      ├── ResourceNotFoundError
       │      └── MediaNotFoundError
       ├── ValidationError (400)            ← Malformed create/update/query input
       ├── ConflictError (409)              ← Resource already exists
       │      └── DuplicateResourceError
       ├── ServerError (500)                ← Unexpected repository failure
       │      └── StorageError              ← Binary payload backend failure
       └── NotImplementedFeatureError (501) ← Operation deliberately unsupported

Usage:
======
    from locket.shared.core.exceptions import NotFoundError, ValidationError

    raise NotFoundError("Media", media_id)
    # Rendered as: {"code": 404, "message": "Media not found", "errors": true, "payload": null}

Ownership and existence are indistinguishable to the caller: a record that
belongs to another user raises the same NotFoundError as a missing record.
"""

from typing import Any, Optional


class LocketException(Exception):
    """
    Base exception for all Locket application errors.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code (default 500)
        error_code: Machine-readable error code
        details: Additional error context (logged, never returned to callers)
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or "INTERNAL_ERROR"
        self.details = details or {}
        super().__init__(self.message)

    def to_reply(self) -> dict[str, Any]:
        """
        Convert exception to the reply envelope.

        Returns:
            Dictionary with code, message, errors and an empty payload
        """
        return {
            "code": self.status_code,
            "message": self.message,
            "errors": True,
            "payload": None,
        }


# ═══════════════════════════════════════════════════════════════════════════════
# AUTHENTICATION (401)
# ═══════════════════════════════════════════════════════════════════════════════


class AuthenticationError(LocketException):
    """
    Authentication failed error (401 Unauthorized).

    Raised when:
    - No token was supplied
    - Token expired or malformed
    - Login credentials are wrong
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=401,
            error_code="AUTHENTICATION_ERROR",
            details=details,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# NOT FOUND ERRORS (404)
# ═══════════════════════════════════════════════════════════════════════════════


class NotFoundError(LocketException):
    """
    Resource not found error (404 Not Found).

    The identifier is kept in details for logging only, the message sent to
    the caller never echoes it.
    """

    def __init__(
        self,
        resource: str,
        resource_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        extra_details = details or {}
        if resource_id:
            extra_details["resource_id"] = str(resource_id)
        super().__init__(
            message=f"{resource} not found",
            status_code=404,
            error_code="NOT_FOUND",
            details=extra_details,
        )


class ResourceNotFoundError(NotFoundError):
    """Generic resource not found error."""

    def __init__(self, resource_id: Optional[str] = None) -> None:
        super().__init__(resource="Resource", resource_id=resource_id)


class MediaNotFoundError(NotFoundError):
    """Media record or its payload not found."""

    def __init__(self, media_id: Optional[str] = None) -> None:
        super().__init__(resource="Media", resource_id=media_id)


# ═══════════════════════════════════════════════════════════════════════════════
# VALIDATION & CONFLICT ERRORS (400, 409)
# ═══════════════════════════════════════════════════════════════════════════════


class ValidationError(LocketException):
    """
    Validation error (400 Bad Request).

    Raised when input data fails validation.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=400,
            error_code="VALIDATION_ERROR",
            details=details,
        )


class ConflictError(LocketException):
    """
    Resource conflict error (409 Conflict).

    Example:
        raise ConflictError("Email already registered")
    """

    def __init__(
        self,
        message: str = "Resource conflict",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=409,
            error_code="CONFLICT",
            details=details,
        )


class DuplicateResourceError(ConflictError):
    """Specific case of conflict when trying to create a duplicate resource."""

    def __init__(
        self,
        message: str = "Resource already exists",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, details=details)


# ═══════════════════════════════════════════════════════════════════════════════
# SERVER ERRORS (500, 501)
# ═══════════════════════════════════════════════════════════════════════════════


class ServerError(LocketException):
    """
    Unexpected server-side failure (500).

    Raised when a repository or storage step fails part-way through an
    operation.
    """

    def __init__(
        self,
        message: str = "Internal server error",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=500,
            error_code="SERVER_ERROR",
            details=details,
        )


class StorageError(ServerError):
    """Binary payload backend failure."""

    def __init__(
        self,
        backend: str,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        extra_details = details or {}
        extra_details["backend"] = backend
        super().__init__(message=message or f"{backend} storage error", details=extra_details)


class NotImplementedFeatureError(LocketException):
    """
    Operation explicitly unsupported (501 Not Implemented).

    Example:
        raise NotImplementedFeatureError("Media cannot be updated")
    """

    def __init__(
        self,
        message: str = "Not implemented",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=501,
            error_code="NOT_IMPLEMENTED",
            details=details,
        )
