"""
Core Module

Provides core functionality shared across the application:
- Structured logging
- Custom exceptions

Usage:
======
    from locket.shared.core import logger, NotFoundError

    logger.info("Starting operation", user_id=user_id)
"""

from locket.shared.core.logging import (
    logger,
    get_logger,
    log_context,
    clear_log_context,
)
from locket.shared.core.exceptions import (
    LocketException,
    AuthenticationError,
    NotFoundError,
    ResourceNotFoundError,
    MediaNotFoundError,
    ValidationError,
    ConflictError,
    DuplicateResourceError,
    ServerError,
    StorageError,
    NotImplementedFeatureError,
)

__all__ = [
    # Logging
    "logger",
    "get_logger",
    "log_context",
    "clear_log_context",
    # Exceptions
    "LocketException",
    "AuthenticationError",
    "NotFoundError",
    "ResourceNotFoundError",
    "MediaNotFoundError",
    "ValidationError",
    "ConflictError",
    "DuplicateResourceError",
    "ServerError",
    "StorageError",
    "NotImplementedFeatureError",
]
