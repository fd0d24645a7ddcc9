"""Object store backed by a single SQL table (see roster.db.models.Blob)."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from loguru import logger
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from roster.core.errors import StorageUnavailableError
from roster.db.models import Blob
from roster.db.session import get_session
from .base import BlobInfo, blob_url


class SQLStorage:
    """Blob CRUD wrapping the SQLAlchemy session."""

    def __init__(self, database_url: str, public_base_url: str = "") -> None:
        self.database_url = database_url
        self.public_base_url = public_base_url

    def _url(self, key: str) -> str:
        return blob_url(self.public_base_url, key, f"sql://blobs/{key}")

    def put(self, key: str, data: bytes) -> str:
        now = datetime.now(timezone.utc)
        try:
            with get_session(self.database_url) as session:
                entity = session.get(Blob, key)
                if not entity:
                    entity = Blob(key=key, content=data, size=len(data), created_at=now, updated_at=now)
                    session.add(entity)
                else:
                    entity.content = data
                    entity.size = len(data)
                    entity.updated_at = now
                session.commit()
        except SQLAlchemyError as exc:
            raise StorageUnavailableError(f"Failed to write blob {key}: {exc}") from exc
        logger.debug("Stored {} bytes under {}", len(data), key)
        return self._url(key)

    def get(self, key: str) -> Optional[bytes]:
        try:
            with get_session(self.database_url) as session:
                entity = session.get(Blob, key)
                return bytes(entity.content) if entity else None
        except SQLAlchemyError as exc:
            raise StorageUnavailableError(f"Failed to read blob {key}: {exc}") from exc

    def delete(self, key: str) -> None:
        try:
            with get_session(self.database_url) as session:
                session.execute(delete(Blob).where(Blob.key == key))
                session.commit()
        except SQLAlchemyError as exc:
            raise StorageUnavailableError(f"Failed to delete blob {key}: {exc}") from exc

    def list(self, prefix: str = "") -> list[BlobInfo]:
        stmt = select(Blob.key, Blob.size, Blob.updated_at).order_by(Blob.key)
        if prefix:
            stmt = stmt.where(Blob.key.startswith(prefix, autoescape=True))
        try:
            with get_session(self.database_url) as session:
                rows = session.execute(stmt).all()
        except SQLAlchemyError as exc:
            raise StorageUnavailableError(f"Failed to list blobs under {prefix!r}: {exc}") from exc
        return [
            BlobInfo(pathname=row.key, url=self._url(row.key), size=int(row.size or 0), uploaded_at=row.updated_at)
            for row in rows
        ]


__all__ = ["SQLStorage"]
