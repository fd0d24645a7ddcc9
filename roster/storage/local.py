"""Filesystem object store: one file per blob under a root directory."""

from __future__ import annotations

import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from loguru import logger

from roster.core.errors import StorageUnavailableError, ValidationError
from .base import BlobInfo, blob_url

TEMP_PREFIX = ".~tmp-"


class LocalStorage:
    def __init__(self, root: Path, public_base_url: str = "") -> None:
        self.root = root.resolve()
        self.public_base_url = public_base_url
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        normalized = (key or "").strip().lstrip("/")
        if not normalized:
            raise ValidationError({"key": "Blob key is required"})
        path = (self.root / normalized).resolve()
        if path == self.root or self.root not in path.parents:
            raise ValidationError({"key": f"Blob key escapes storage root: {key}"})
        return path

    def _key(self, path: Path) -> str:
        return path.relative_to(self.root).as_posix()

    def put(self, key: str, data: bytes) -> str:
        path = self._path(key)
        tmp_name = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            # readers must never observe a truncated blob
            fd, tmp_name = tempfile.mkstemp(prefix=TEMP_PREFIX, dir=path.parent)
            with os.fdopen(fd, "wb") as fp:
                fp.write(data)
            os.replace(tmp_name, path)
        except OSError as exc:
            if tmp_name:
                Path(tmp_name).unlink(missing_ok=True)
            raise StorageUnavailableError(f"Failed to write blob {key}: {exc}") from exc
        logger.debug("Wrote {} bytes to {}", len(data), path)
        return blob_url(self.public_base_url, self._key(path), str(path))

    def get(self, key: str) -> Optional[bytes]:
        path = self._path(key)
        if not path.is_file():
            return None
        try:
            return path.read_bytes()
        except OSError as exc:
            raise StorageUnavailableError(f"Failed to read blob {key}: {exc}") from exc

    def delete(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise StorageUnavailableError(f"Failed to delete blob {key}: {exc}") from exc

    def list(self, prefix: str = "") -> list[BlobInfo]:
        blobs: list[BlobInfo] = []
        try:
            for path in self.root.rglob("*"):
                if not path.is_file() or path.name.startswith(TEMP_PREFIX):
                    continue
                key = self._key(path)
                if not key.startswith(prefix):
                    continue
                try:
                    stat = path.stat()
                except FileNotFoundError:
                    continue
                blobs.append(
                    BlobInfo(
                        pathname=key,
                        url=blob_url(self.public_base_url, key, str(path)),
                        size=stat.st_size,
                        uploaded_at=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
                    )
                )
        except OSError as exc:
            raise StorageUnavailableError(f"Failed to list blobs under {prefix!r}: {exc}") from exc
        return sorted(blobs, key=lambda blob: blob.pathname)


__all__ = ["LocalStorage"]
