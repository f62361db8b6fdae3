"""
Storage adapter - binary payload persistence for media.

The media subsystem never interprets the location handle returned by put();
it stores it on the media row and hands it back to get() and delete().

Backends:
=========
- LocalStorageAdapter: files under STORAGE_LOCAL_ROOT/<owner>/<uuid>.<ext>
- S3StorageAdapter:    objects under s3://S3_BUCKET/S3_KEY_PREFIX/<owner>/<uuid>.<ext>

Contract:
=========
    put(local_path, original_name, extension, owner_id) -> location
    get(location)    -> bytes, or None if the payload is missing
    delete(location) -> True if removed, False if it was already missing

Backend failures raise StorageError. Blocking I/O (disk, boto3) runs in a
worker thread so a slow transfer does not hold up other requests.

Usage:
======
    storage = get_storage()
    location = await storage.put("/tmp/upload-abc", "beach.jpg", "jpg", user_id)
    data = await storage.get(location)
"""

import asyncio
import shutil
import uuid
from pathlib import Path
from typing import Optional

import boto3
from botocore.exceptions import ClientError

from locket.config.settings import settings
from locket.shared.core.exceptions import StorageError
from locket.shared.core.logging import get_logger

logger = get_logger("storage")


def _object_name(owner_id: uuid.UUID, extension: str) -> str:
    """Collision-free name for a payload: <owner>/<uuid>[.<ext>]."""
    suffix = f".{extension.lower()}" if extension else ""
    return f"{owner_id}/{uuid.uuid4()}{suffix}"


class StorageAdapter:
    """Base class for media payload backends."""

    name = "storage"

    async def put(
        self,
        local_path: str,
        original_name: str,
        extension: str,
        owner_id: uuid.UUID,
    ) -> str:
        raise NotImplementedError

    async def get(self, location: str) -> Optional[bytes]:
        raise NotImplementedError

    async def delete(self, location: str) -> bool:
        raise NotImplementedError


class LocalStorageAdapter(StorageAdapter):
    """
    Adapter that keeps payloads on the local filesystem.

    Locations are paths relative to the root, so the root can move without
    rewriting media rows.
    """

    name = "local"

    def __init__(self, root: Optional[str] = None):
        self.root = Path(root or settings.STORAGE_LOCAL_ROOT).resolve()

    def _resolve(self, location: str) -> Path:
        path = (self.root / location).resolve()
        if not path.is_relative_to(self.root):
            raise StorageError(self.name, "Location escapes storage root", details={"location": location})
        return path

    def _put(self, local_path: str, location: str) -> None:
        target = self._resolve(location)
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(local_path, target)

    async def put(
        self,
        local_path: str,
        original_name: str,
        extension: str,
        owner_id: uuid.UUID,
    ) -> str:
        location = _object_name(owner_id, extension)
        try:
            await asyncio.to_thread(self._put, local_path, location)
        except OSError as e:
            logger.error("Failed to store payload", location=location, error=str(e))
            raise StorageError(self.name, details={"original_name": original_name}) from e

        logger.info("Stored payload", location=location, original_name=original_name)
        return location

    async def get(self, location: str) -> Optional[bytes]:
        path = self._resolve(location)
        try:
            return await asyncio.to_thread(path.read_bytes)
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.error("Failed to read payload", location=location, error=str(e))
            raise StorageError(self.name) from e

    async def delete(self, location: str) -> bool:
        path = self._resolve(location)
        try:
            await asyncio.to_thread(path.unlink)
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.error("Failed to delete payload", location=location, error=str(e))
            raise StorageError(self.name) from e

        logger.info("Deleted payload", location=location)
        return True


class S3StorageAdapter(StorageAdapter):
    """
    Adapter for AWS S3.

    Handles:
    - Uploading spooled files
    - Reading whole objects
    - Deleting objects (missing keys reported as False)
    """

    name = "s3"

    def __init__(
        self,
        bucket: Optional[str] = None,
        key_prefix: Optional[str] = None,
        region: Optional[str] = None,
        aws_access_key_id: Optional[str] = None,
        aws_secret_access_key: Optional[str] = None,
    ):
        """
        Initialize S3 adapter.

        Args:
            bucket: Bucket name
            key_prefix: Prefix prepended to every object key
            region: AWS region
            aws_access_key_id: AWS access key
            aws_secret_access_key: AWS secret key
        """
        self.bucket = bucket or settings.S3_BUCKET
        self.key_prefix = (key_prefix if key_prefix is not None else settings.S3_KEY_PREFIX).strip("/")
        self.region = region or settings.AWS_REGION
        self.aws_access_key_id = aws_access_key_id or settings.AWS_ACCESS_KEY_ID
        self.aws_secret_access_key = aws_secret_access_key or settings.AWS_SECRET_ACCESS_KEY
        self._client = None

    @property
    def client(self):
        """Lazy-loaded S3 client."""
        if self._client is None:
            if self.aws_access_key_id and self.aws_secret_access_key:
                self._client = boto3.client(
                    "s3",
                    region_name=self.region,
                    aws_access_key_id=self.aws_access_key_id,
                    aws_secret_access_key=self.aws_secret_access_key,
                )
            else:
                # Use default credentials (IAM role, environment, etc.)
                self._client = boto3.client("s3", region_name=self.region)
        return self._client

    @staticmethod
    def _is_missing(error: ClientError) -> bool:
        code = error.response.get("Error", {}).get("Code", "")
        return code in ("NoSuchKey", "404", "NotFound")

    async def put(
        self,
        local_path: str,
        original_name: str,
        extension: str,
        owner_id: uuid.UUID,
    ) -> str:
        key = _object_name(owner_id, extension)
        if self.key_prefix:
            key = f"{self.key_prefix}/{key}"

        try:
            await asyncio.to_thread(self.client.upload_file, local_path, self.bucket, key)
        except (ClientError, OSError) as e:
            logger.error("Failed to upload payload", bucket=self.bucket, key=key, error=str(e))
            raise StorageError(self.name, details={"original_name": original_name}) from e

        logger.info("Uploaded payload", bucket=self.bucket, key=key)
        return key

    async def get(self, location: str) -> Optional[bytes]:
        try:
            response = await asyncio.to_thread(
                self.client.get_object, Bucket=self.bucket, Key=location
            )
            return await asyncio.to_thread(response["Body"].read)
        except ClientError as e:
            if self._is_missing(e):
                return None
            logger.error("Failed to fetch payload", bucket=self.bucket, key=location, error=str(e))
            raise StorageError(self.name) from e

    async def delete(self, location: str) -> bool:
        try:
            await asyncio.to_thread(self.client.head_object, Bucket=self.bucket, Key=location)
        except ClientError as e:
            if self._is_missing(e):
                return False
            logger.error("Failed to inspect payload", bucket=self.bucket, key=location, error=str(e))
            raise StorageError(self.name) from e

        try:
            await asyncio.to_thread(self.client.delete_object, Bucket=self.bucket, Key=location)
        except ClientError as e:
            logger.error("Failed to delete payload", bucket=self.bucket, key=location, error=str(e))
            raise StorageError(self.name) from e

        logger.info("Deleted payload", bucket=self.bucket, key=location)
        return True


_storage: Optional[StorageAdapter] = None


def get_storage() -> StorageAdapter:
    """
    Get the configured storage adapter.

    Chosen once from STORAGE_BACKEND and reused for every request.
    """
    global _storage
    if _storage is None:
        backend = settings.STORAGE_BACKEND.lower()
        if backend == "s3":
            _storage = S3StorageAdapter()
        elif backend == "local":
            _storage = LocalStorageAdapter()
        else:
            raise StorageError(backend, f"Unknown storage backend '{settings.STORAGE_BACKEND}'")
    return _storage
