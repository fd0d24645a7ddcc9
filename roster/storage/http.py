"""Object store client talking to the blob proxy HTTP surface (see roster.routers.blob)."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from urllib.parse import quote

import httpx
from loguru import logger

from roster.core.errors import StorageUnavailableError
from .base import BlobInfo


class HttpStorage:
    def __init__(
        self,
        base_url: str,
        token: str = "",
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self.client = client or httpx.Client(base_url=self.base_url, headers=headers, timeout=timeout)

    def _blob_path(self, key: str) -> str:
        return f"/blob/{quote(key.lstrip('/'), safe='/')}"

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = self.client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise StorageUnavailableError(f"{method} {path} failed: {exc}") from exc
        logger.debug("{} {} -> {}", method, path, response.status_code)
        return response

    @staticmethod
    def _ensure_ok(response: httpx.Response) -> None:
        if response.is_success:
            return
        raise StorageUnavailableError(
            f"{response.request.method} {response.request.url.path} returned {response.status_code}"
        )

    def put(self, key: str, data: bytes) -> str:
        response = self._request(
            "PUT",
            self._blob_path(key),
            content=data,
            headers={"Content-Type": "application/json"},
        )
        self._ensure_ok(response)
        try:
            return str(response.json().get("url") or "")
        except ValueError:
            return ""

    def get(self, key: str) -> Optional[bytes]:
        response = self._request("GET", self._blob_path(key))
        if response.status_code == 404:
            return None
        self._ensure_ok(response)
        return response.content

    def delete(self, key: str) -> None:
        self._ensure_ok(self._request("DELETE", self._blob_path(key)))

    def list(self, prefix: str = "") -> list[BlobInfo]:
        response = self._request("GET", "/list", params={"prefix": prefix})
        self._ensure_ok(response)
        try:
            payload = response.json()
        except ValueError as exc:
            raise StorageUnavailableError(f"Invalid listing payload: {exc}") from exc
        blobs = []
        for item in payload.get("blobs") or []:
            uploaded = item.get("uploadedAt")
            blobs.append(
                BlobInfo(
                    pathname=item.get("pathname", ""),
                    url=item.get("url", ""),
                    size=int(item.get("size") or 0),
                    uploaded_at=datetime.fromisoformat(uploaded) if uploaded else None,
                )
            )
        return blobs

    def close(self) -> None:
        self.client.close()


__all__ = ["HttpStorage"]
