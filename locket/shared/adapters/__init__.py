"""
Adapters Package

External service integrations.

Contents:
=========
- storage: Media payload storage (local disk, S3)

Note: Database access is handled by shared/db/session.py using async SQLAlchemy.

Usage:
======
    from locket.shared.adapters.storage import get_storage

    storage = get_storage()
    location = await storage.put(tmp_path, "beach.jpg", "jpg", user_id)
"""

from locket.shared.adapters.storage import (
    StorageAdapter,
    LocalStorageAdapter,
    S3StorageAdapter,
    get_storage,
)

__all__ = [
    "StorageAdapter",
    "LocalStorageAdapter",
    "S3StorageAdapter",
    "get_storage",
]
