from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the roster package importable when running the tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from roster.core.config import Settings  # noqa: E402
from roster.repositories import CollectionStore, EventRepository, UserRepository  # noqa: E402
from roster.storage import LocalStorage  # noqa: E402

USERS_KEY = "users/users.json"
EVENTS_KEY = "events/events.json"


@pytest.fixture()
def local_store(tmp_path):
    return LocalStorage(tmp_path / "blobs")


@pytest.fixture()
def collections(local_store):
    return CollectionStore(local_store)


@pytest.fixture()
def user_repo(collections):
    return UserRepository(collections, USERS_KEY)


@pytest.fixture()
def event_repo(collections):
    return EventRepository(collections, EVENTS_KEY)


@pytest.fixture()
def settings(tmp_path):
    return Settings(
        app_env="test",
        storage_backend="local",
        storage_dir=str(tmp_path / "blobs"),
        database_url="",
        blob_api_url="http://testserver",
        blob_api_token="",
        blob_public_base_url="",
        blob_timeout_seconds=5.0,
        users_key=USERS_KEY,
        events_key=EVENTS_KEY,
        log_level="WARNING",
        log_json=False,
        log_file="",
    )
