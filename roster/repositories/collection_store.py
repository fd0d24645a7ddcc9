"""
Whole-collection persistence on top of an object store.

One blob (for example ``users/users.json``) is the sole source of truth for an
entity collection. Reads fetch the full JSON array; writes overwrite it in
full. ``mutate`` holds a per-key lock across load and save so writers in the
same process do not clobber each other; separate processes still race and the
last save wins.
"""

from __future__ import annotations

import json
import threading
from typing import Any, Callable, Iterable

from loguru import logger

from roster.core.errors import MalformedCollectionError
from roster.storage import ObjectStore


def encode_collection(items: Iterable[Any]) -> bytes:
    return json.dumps(list(items), ensure_ascii=False, indent=2, allow_nan=False).encode("utf-8")


def decode_collection(key: str, raw: bytes) -> list:
    try:
        payload = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as exc:
        raise MalformedCollectionError(key, f"invalid JSON ({exc})") from exc
    if not isinstance(payload, list):
        raise MalformedCollectionError(key, f"expected an array, got {type(payload).__name__}")
    return payload


class CollectionStore:
    def __init__(self, store: ObjectStore) -> None:
        self.store = store
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _lock_for(self, key: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    def load_collection(self, key: str) -> list:
        raw = self.store.get(key)
        if raw is None:
            logger.debug("Collection {} does not exist yet, starting empty", key)
            return []
        try:
            return decode_collection(key, raw)
        except MalformedCollectionError as exc:
            logger.warning("{}; treating it as empty", exc.message)
            return []

    def save_collection(self, key: str, items: Iterable[Any]) -> None:
        data = encode_collection(items)
        self.store.put(key, data)
        logger.debug("Saved collection {} ({} bytes)", key, len(data))

    def mutate(self, key: str, change: Callable[[list], list]) -> list:
        """Load ``key``, apply ``change`` and save the result under the key's lock.

        If ``change`` raises, nothing is written and the exception propagates.
        """
        with self._lock_for(key):
            items = self.load_collection(key)
            updated = change(items)
            self.save_collection(key, updated)
            return updated
