"""File storage adapter for uploaded images and attachments.

Two backends share one interface: a local directory (development, tests)
and an S3 bucket through boto3. Services only use the module-level
functions; ``connect`` picks the backend from settings.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import logging
import uuid

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from app.config import Settings, StorageBackendType, settings
from app.exceptions import ServiceValidationError

logger = logging.getLogger("kdoc_admin.storage")

_backend: Optional["StorageBackend"] = None


@dataclass(frozen=True)
class StoredFile:
    path: str
    url: str
    size: int
    content_type: str


class StorageBackend(ABC):
    """Interface every storage backend implements."""

    @abstractmethod
    def upload(self, path: str, content: bytes, content_type: str) -> None:
        """Write ``content`` at ``path``, replacing any existing object."""

    @abstractmethod
    def delete(self, path: str) -> bool:
        """Remove ``path``; returns False when nothing was there."""

    @abstractmethod
    def public_url(self, path: str) -> str:
        """URL under which clients can fetch ``path``."""


class LocalStorageBackend(StorageBackend):
    def __init__(self, base_dir: str, public_base_url: str):
        self.base_dir = Path(base_dir)
        self.public_base_url = public_base_url.rstrip("/")
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _file_path(self, path: str) -> Path:
        target = (self.base_dir / path).resolve()
        if self.base_dir.resolve() not in target.parents:
            raise ServiceValidationError(f"Invalid storage path: {path}")
        return target

    def upload(self, path: str, content: bytes, content_type: str) -> None:
        target = self._file_path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)

    def delete(self, path: str) -> bool:
        target = self._file_path(path)
        if not target.exists():
            return False
        target.unlink()
        return True

    def public_url(self, path: str) -> str:
        return f"{self.public_base_url}/{path}"


class S3StorageBackend(StorageBackend):
    def __init__(self, bucket: str, region: str, client=None):
        self.bucket = bucket
        self.region = region
        self.client = client or boto3.client("s3", region_name=region)

    def upload(self, path: str, content: bytes, content_type: str) -> None:
        self.client.put_object(
            Bucket=self.bucket, Key=path, Body=content, ContentType=content_type
        )

    def delete(self, path: str) -> bool:
        self.client.delete_object(Bucket=self.bucket, Key=path)
        return True

    def public_url(self, path: str) -> str:
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{path}"


# ------------------ Connection ------------------


def connect(config: Settings) -> StorageBackend:
    """Create the backend selected by ``config.storage_backend``."""
    global _backend
    if config.storage_backend == StorageBackendType.S3:
        _backend = S3StorageBackend(config.s3_bucket, config.s3_region)
        logger.info("Using S3 storage bucket %s (%s)", config.s3_bucket, config.s3_region)
    else:
        _backend = LocalStorageBackend(
            config.storage_local_dir, config.storage_public_base_url
        )
        logger.info("Using local storage directory %s", config.storage_local_dir)
    return _backend


def configure(backend: StorageBackend) -> None:
    """Install an already constructed backend."""
    global _backend
    _backend = backend


def close():
    global _backend
    _backend = None


def get_backend() -> StorageBackend:
    """Lazy init backend from global settings."""
    if _backend is None:
        return connect(settings)
    return _backend


# ------------------ Uploads ------------------


def _extension(filename: Optional[str], content_type: str) -> str:
    for candidate in (
        filename.rsplit(".", 1)[1] if filename and "." in filename else "",
        content_type.split("/")[-1],
    ):
        candidate = candidate.lower()
        if candidate.isalnum() and len(candidate) <= 8:
            return candidate
    return "bin"


def build_path(prefix: str, filename: Optional[str], content_type: str) -> str:
    """``{prefix}/{uuid}.{ext}``, e.g. ``hospitals/<id>/thumbnail/<uuid>.png``"""
    return f"{prefix.strip('/')}/{uuid.uuid4()}.{_extension(filename, content_type)}"


def upload_image(
    prefix: str, filename: Optional[str], content: bytes, content_type: Optional[str]
) -> StoredFile:
    """
    Validate and store an image.

    Raises:
        ServiceValidationError: not an accepted image type, empty, or too large
    """
    content_type = (content_type or "").lower()
    if not content_type.startswith("image/"):
        raise ServiceValidationError("Only image files can be uploaded")
    if content_type not in settings.storage_allowed_image_types:
        raise ServiceValidationError(
            f"Unsupported image type {content_type}",
            details={"allowed": settings.storage_allowed_image_types},
        )
    return _store(prefix, filename, content, content_type, settings.storage_max_image_bytes)


def upload_file(
    prefix: str, filename: Optional[str], content: bytes, content_type: Optional[str]
) -> StoredFile:
    """Store an arbitrary attachment, only the size is checked."""
    content_type = content_type or "application/octet-stream"
    return _store(prefix, filename, content, content_type, settings.storage_max_file_bytes)


def _store(
    prefix: str, filename: Optional[str], content: bytes, content_type: str, max_bytes: int
) -> StoredFile:
    if not content:
        raise ServiceValidationError("Uploaded file is empty")
    if len(content) > max_bytes:
        raise ServiceValidationError(
            f"File size exceeds the {max_bytes // 1024}KB limit",
            details={"size": len(content), "max_bytes": max_bytes},
        )
    backend = get_backend()
    path = build_path(prefix, filename, content_type)
    backend.upload(path, content, content_type)
    logger.info("Stored %s (%d bytes)", path, len(content))
    return StoredFile(
        path=path, url=backend.public_url(path), size=len(content), content_type=content_type
    )


def delete_file(path: Optional[str]) -> bool:
    """Best-effort removal; a storage failure never blocks the database change."""
    if not path:
        return False
    try:
        return get_backend().delete(path)
    except (OSError, BotoCoreError, ClientError):
        logger.exception("Failed to delete stored file %s", path)
        return False
