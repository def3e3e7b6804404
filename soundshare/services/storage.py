"""
File storage backends for uploaded song audio and cover images.

Each upload is tagged with an UploadKind, which maps to a local directory,
a remote folder, and a resource type. Backends generate the stored name
themselves; the client's filename contributes only its extension.
"""

import enum
import logging
import random
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

import aiofiles
import aiofiles.os
import boto3
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import Request
from fastapi.concurrency import run_in_threadpool

from soundshare.core.config import Settings
from soundshare.core.errors import StorageError

logger = logging.getLogger(__name__)


class UploadKind(str, enum.Enum):
    SONG = "song"
    COVER = "cover"


@dataclass(frozen=True)
class UploadTarget:
    """Where files of one kind go: local directory, remote folder, and resource type."""

    directory: str
    folder: str
    resource_type: str


# Audio has no dedicated resource type in object stores that model media; it is stored as video.
UPLOAD_TARGETS: dict[UploadKind, UploadTarget] = {
    UploadKind.SONG: UploadTarget(directory="uploads", folder="songs", resource_type="video"),
    UploadKind.COVER: UploadTarget(directory="covers", folder="covers", resource_type="image"),
}


@dataclass(frozen=True)
class StoredFile:
    """Result of a save: public URL plus the backend-specific locator used for delete."""

    url: str
    locator: str


def generate_filename(original_filename: str | None) -> str:
    """Return ``<ms timestamp>-<random suffix><ext>``, keeping only the original extension."""
    suffix = Path(original_filename or "").suffix.lower()
    return f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}{suffix}"


class StorageBackend(ABC):
    """Destination for uploaded binary assets."""

    @abstractmethod
    async def save(
        self,
        kind: UploadKind,
        filename: str | None,
        content: bytes,
        content_type: str | None = None,
    ) -> StoredFile:
        """Persist content and return its public URL. Raises StorageError on failure."""

    @abstractmethod
    async def delete(self, locator: str) -> None:
        """Remove a stored file. Missing files are not an error."""


class LocalStorageBackend(StorageBackend):
    """Writes files under ``<root>/uploads`` and ``<root>/covers``, served by the static mounts."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def directory_for(self, kind: UploadKind) -> Path:
        return self.root / UPLOAD_TARGETS[kind].directory

    def ensure_directories(self) -> None:
        """Create every kind's directory; called once at startup so the static mounts can serve."""
        for kind in UploadKind:
            self.directory_for(kind).mkdir(parents=True, exist_ok=True)

    async def save(
        self,
        kind: UploadKind,
        filename: str | None,
        content: bytes,
        content_type: str | None = None,
    ) -> StoredFile:
        target = UPLOAD_TARGETS[kind]
        directory = self.directory_for(kind)
        name = generate_filename(filename)
        path = directory / name
        try:
            await aiofiles.os.makedirs(directory, exist_ok=True)
            async with aiofiles.open(path, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.exception("Local write failed: path=%s", path)
            raise StorageError("Upload failed") from e
        logger.info("Stored %s file at %s (%s bytes)", kind.value, path, len(content))
        return StoredFile(url=f"/{target.directory}/{name}", locator=str(path))

    async def delete(self, locator: str) -> None:
        try:
            await aiofiles.os.remove(locator)
        except FileNotFoundError:
            return
        except OSError as e:
            raise StorageError("Delete failed") from e
        logger.info("Deleted stored file %s", locator)


class S3StorageBackend(StorageBackend):
    """
    Uploads to an S3-compatible bucket under ``songs/`` and ``covers/``.

    The boto3 client is blocking, so calls run in the threadpool.
    """

    def __init__(self, client, bucket: str, public_base_url: str) -> None:
        self.client = client
        self.bucket = bucket
        self.public_base_url = public_base_url.rstrip("/")

    async def save(
        self,
        kind: UploadKind,
        filename: str | None,
        content: bytes,
        content_type: str | None = None,
    ) -> StoredFile:
        target = UPLOAD_TARGETS[kind]
        key = f"{target.folder}/{generate_filename(filename)}"
        try:
            await run_in_threadpool(
                self.client.put_object,
                Bucket=self.bucket,
                Key=key,
                Body=content,
                ContentType=content_type or "application/octet-stream",
                Metadata={"resource-type": target.resource_type},
            )
        except (BotoCoreError, ClientError) as e:
            logger.exception("S3 upload failed: bucket=%s key=%s", self.bucket, key)
            raise StorageError("Upload failed") from e
        logger.info("Stored %s object s3://%s/%s", kind.value, self.bucket, key)
        return StoredFile(url=f"{self.public_base_url}/{key}", locator=key)

    async def delete(self, locator: str) -> None:
        try:
            await run_in_threadpool(
                self.client.delete_object, Bucket=self.bucket, Key=locator
            )
        except (BotoCoreError, ClientError) as e:
            raise StorageError("Delete failed") from e
        logger.info("Deleted object s3://%s/%s", self.bucket, locator)


def _default_public_base_url(settings: Settings) -> str:
    if settings.S3_PUBLIC_BASE_URL:
        return settings.S3_PUBLIC_BASE_URL
    if settings.S3_ENDPOINT_URL:
        return f"{settings.S3_ENDPOINT_URL}/{settings.S3_BUCKET}"
    region = settings.S3_REGION or "us-east-1"
    return f"https://{settings.S3_BUCKET}.s3.{region}.amazonaws.com"


def build_storage(settings: Settings) -> StorageBackend:
    """Create the backend selected by STORAGE_BACKEND."""
    if settings.STORAGE_BACKEND == "s3":
        secret = settings.S3_SECRET_ACCESS_KEY
        client = boto3.client(
            "s3",
            endpoint_url=settings.S3_ENDPOINT_URL,
            region_name=settings.S3_REGION,
            aws_access_key_id=settings.S3_ACCESS_KEY_ID,
            aws_secret_access_key=secret.get_secret_value() if secret else None,
        )
        return S3StorageBackend(
            client,
            bucket=settings.S3_BUCKET,
            public_base_url=_default_public_base_url(settings),
        )
    return LocalStorageBackend(settings.UPLOAD_ROOT)


def get_storage(request: Request) -> StorageBackend:
    """Dependency: the storage backend created at startup."""
    return request.app.state.storage
