"""
Key-value storage for the client collection.

The whole client collection lives under a single key, so the backend only
has to read and write one named value. Three backends are available:
- File: one JSON file per key in a data directory (the default)
- R2: one object per key in a Cloudflare R2 (S3-compatible) bucket
- Memory: a dict, for tests and local development

Writes always replace the whole value. There are no partial writes to
recover from.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Optional, Protocol

logger = logging.getLogger(__name__)

BACKEND_MEMORY = "memory"
BACKEND_FILE = "file"
BACKEND_R2 = "r2"

STORAGE_BACKENDS = (BACKEND_MEMORY, BACKEND_FILE, BACKEND_R2)


class StorageError(Exception):
    """A backend could not read or write a value."""
    pass


@dataclass
class StorageConfig:
    """
    Connection details for the R2 backend.

    ``prefix`` namespaces FitCRM's objects so the bucket can be shared.
    """
    access_key_id: str
    secret_access_key: str
    bucket_name: str
    endpoint_url: str
    region: str = "auto"
    prefix: str = "fitcrm/"


class KeyValueStore(Protocol):
    """
    The durable slot the client collection is kept in.

    Values are opaque strings; the JSON inside is the client store's
    business.
    """

    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key was never written."""
        ...

    def set(self, key: str, value: str) -> None:
        """Replace the stored value."""
        ...

    def delete(self, key: str) -> None:
        """Remove the key. Missing keys are ignored."""
        ...


class FileKeyValueStore:
    """
    Stores each key as ``<directory>/<key>.json``.

    Values are written to a temporary file in the same directory and
    renamed over the target, so a crash mid-write leaves the previous
    value intact.
    """

    def __init__(self, directory: Path) -> None:
        self._directory = Path(directory)

        logger.info(
            "Initialized file storage",
            extra={"directory": str(self._directory)}
        )

    def get(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.error(
                "Failed to read key",
                extra={"key": key, "path": str(path), "error": str(e)}
            )
            raise StorageError(f"Read failed: {e}")

    def set(self, key: str, value: str) -> None:
        path = self._path_for(key)
        temp_path = None
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            with NamedTemporaryFile(
                "w",
                dir=self._directory,
                delete=False,
                encoding="utf-8",
                suffix=".tmp",
            ) as tmp:
                tmp.write(value)
                temp_path = Path(tmp.name)
            temp_path.replace(path)

            logger.debug(
                "Wrote key",
                extra={"key": key, "size_bytes": len(value)}
            )

        except OSError as e:
            if temp_path is not None:
                temp_path.unlink(missing_ok=True)
            logger.error(
                "Failed to write key",
                extra={"key": key, "path": str(path), "error": str(e)}
            )
            raise StorageError(f"Write failed: {e}")

    def delete(self, key: str) -> None:
        try:
            self._path_for(key).unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Delete failed: {e}")

    def _path_for(self, key: str) -> Path:
        if not key or os.sep in key or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self._directory / f"{key}.json"


class R2KeyValueStore:
    """
    Stores each key as a JSON object in an R2 bucket.

    Talks to R2 through boto3's S3 client. Any S3-compatible endpoint
    works, which is how local development against MinIO is done.
    """

    def __init__(self, config: StorageConfig) -> None:
        # The other backends run without boto3 installed
        try:
            import boto3
            from botocore.config import Config
        except ImportError:
            raise ImportError(
                "The r2 storage backend needs boto3: pip install boto3"
            )

        self._config = config
        self._s3 = boto3.client(
            "s3",
            endpoint_url=config.endpoint_url,
            aws_access_key_id=config.access_key_id,
            aws_secret_access_key=config.secret_access_key,
            region_name=config.region,
            config=Config(signature_version="s3v4", s3={"addressing_style": "path"}),
        )

        logger.info(
            "Initialized R2 storage",
            extra={"bucket": config.bucket_name, "prefix": config.prefix}
        )

    def get(self, key: str) -> Optional[str]:
        object_key = self._object_key(key)
        try:
            obj = self._s3.get_object(Bucket=self._config.bucket_name, Key=object_key)
            return obj["Body"].read().decode("utf-8")
        except self._s3.exceptions.NoSuchKey:
            return None
        except Exception as e:
            logger.error(
                "R2 read failed",
                extra={"object_key": object_key, "error": str(e)}
            )
            raise StorageError(f"Read failed: {e}")

    def set(self, key: str, value: str) -> None:
        object_key = self._object_key(key)
        try:
            self._s3.put_object(
                Bucket=self._config.bucket_name,
                Key=object_key,
                Body=value.encode("utf-8"),
                ContentType="application/json",
            )
        except Exception as e:
            logger.error(
                "R2 write failed",
                extra={"object_key": object_key, "error": str(e)}
            )
            raise StorageError(f"Write failed: {e}")

        logger.debug(
            "Wrote key to R2",
            extra={"object_key": object_key, "size_bytes": len(value)}
        )

    def delete(self, key: str) -> None:
        object_key = self._object_key(key)
        try:
            self._s3.delete_object(Bucket=self._config.bucket_name, Key=object_key)
        except Exception as e:
            logger.error(
                "R2 delete failed",
                extra={"object_key": object_key, "error": str(e)}
            )
            raise StorageError(f"Delete failed: {e}")

    def _object_key(self, key: str) -> str:
        return f"{self._config.prefix}{key}.json"


class MemoryKeyValueStore:
    """Keeps values in a dict for the life of the process."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}
        logger.debug("Initialized in-memory storage")

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)


def create_key_value_store(
    backend: str = BACKEND_FILE,
    data_dir: Optional[Path] = None,
    config: Optional[StorageConfig] = None,
) -> KeyValueStore:
    """
    Build the store for a backend name.

    Args:
        backend: "memory", "file" or "r2"
        data_dir: Where the file backend keeps its files
        config: Bucket and credentials for the r2 backend

    Returns:
        KeyValueStore implementation
    """
    if backend == BACKEND_MEMORY:
        return MemoryKeyValueStore()

    if backend == BACKEND_FILE:
        if data_dir is None:
            raise ValueError("data_dir is required for the file backend")
        return FileKeyValueStore(data_dir)

    if backend == BACKEND_R2:
        if config is None:
            raise ValueError("config is required for the r2 backend")
        return R2KeyValueStore(config)

    raise ValueError(f"Unknown storage backend: {backend}")
