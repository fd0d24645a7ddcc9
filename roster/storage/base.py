"""Object store protocol shared by the local, SQL and HTTP backends."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol


@dataclass(frozen=True)
class BlobInfo:
    pathname: str
    url: str
    size: int
    uploaded_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "pathname": self.pathname,
            "url": self.url,
            "size": self.size,
            "uploadedAt": self.uploaded_at.isoformat() if self.uploaded_at else None,
        }


class ObjectStore(Protocol):
    def put(self, key: str, data: bytes) -> str:  # returns url
        ...

    def get(self, key: str) -> Optional[bytes]:  # None when missing
        ...

    def delete(self, key: str) -> None:
        ...

    def list(self, prefix: str = "") -> list[BlobInfo]:
        ...


def blob_url(public_base_url: str, key: str, fallback: str) -> str:
    if public_base_url:
        return f"{public_base_url.rstrip('/')}/blob/{key}"
    return fallback
