"""Storage abstraction (local filesystem, SQL table or remote blob proxy)."""

from __future__ import annotations

from pathlib import Path

from roster.core.config import Settings
from .base import BlobInfo, ObjectStore
from .http import HttpStorage
from .local import LocalStorage
from .sql import SQLStorage


def build_object_store(settings: Settings) -> ObjectStore:
    backend = settings.storage_backend
    if backend == "local":
        return LocalStorage(Path(settings.storage_dir), public_base_url=settings.blob_public_base_url)
    if backend == "sql":
        if not settings.database_url:
            raise RuntimeError("DATABASE_URL must be configured to use the SQL backend.")
        return SQLStorage(settings.database_url, public_base_url=settings.blob_public_base_url)
    if backend == "http":
        return HttpStorage(
            settings.blob_api_url,
            token=settings.blob_api_token,
            timeout=settings.blob_timeout_seconds,
        )
    raise RuntimeError(f"Unknown STORAGE_BACKEND '{backend}' (expected local, sql or http)")


__all__ = [
    "BlobInfo",
    "ObjectStore",
    "LocalStorage",
    "SQLStorage",
    "HttpStorage",
    "build_object_store",
]
