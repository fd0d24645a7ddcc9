"""
HttpStorage against a mocked transport and against the real blob proxy app.
"""
from __future__ import annotations

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from roster.app import create_app
from roster.core.errors import StorageUnavailableError
from roster.repositories import CollectionStore, EventRepository, UserRepository
from roster.storage import HttpStorage
from tests.factories import make_event, make_user


def _storage(handler) -> HttpStorage:
    client = httpx.Client(base_url="http://blobs.test", transport=httpx.MockTransport(handler))
    return HttpStorage("http://blobs.test", client=client)


def test_get_missing_blob_returns_none():
    store = _storage(lambda request: httpx.Response(404, json={"detail": "Blob not found"}))
    assert store.get("users/users.json") is None


def test_get_returns_raw_bytes_and_hits_blob_path():
    seen = []

    def handler(request):
        seen.append((request.method, request.url.path))
        return httpx.Response(200, content=b'[{"id": "u1"}]')

    store = _storage(handler)
    assert store.get("users/users.json") == b'[{"id": "u1"}]'
    assert seen == [("GET", "/blob/users/users.json")]


def test_put_sends_body_and_returns_url():
    captured = {}

    def handler(request):
        captured["method"] = request.method
        captured["body"] = request.content
        return httpx.Response(200, json={"pathname": "users/users.json", "url": "https://cdn.test/u.json"})

    store = _storage(handler)
    assert store.put("users/users.json", b"[]") == "https://cdn.test/u.json"
    assert captured == {"method": "PUT", "body": b"[]"}


@pytest.mark.parametrize("status", [401, 500, 502, 503])
def test_server_errors_raise_storage_unavailable(status):
    store = _storage(lambda request: httpx.Response(status, json={"error": "upstream"}))
    with pytest.raises(StorageUnavailableError):
        store.get("users/users.json")
    with pytest.raises(StorageUnavailableError):
        store.put("users/users.json", b"[]")
    with pytest.raises(StorageUnavailableError):
        store.delete("users/users.json")


def test_transport_errors_raise_storage_unavailable():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    store = _storage(handler)
    with pytest.raises(StorageUnavailableError):
        store.get("users/users.json")
    with pytest.raises(StorageUnavailableError):
        store.list("users/")


def test_timeouts_raise_storage_unavailable():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(StorageUnavailableError):
        _storage(handler).get("users/users.json")


def test_list_parses_blob_descriptors():
    def handler(request):
        assert request.url.params["prefix"] == "events/"
        return httpx.Response(
            200,
            json={
                "blobs": [
                    {
                        "pathname": "events/events.json",
                        "url": "https://cdn.test/events/events.json",
                        "size": 42,
                        "uploadedAt": "2025-03-01T12:00:00Z",
                    }
                ]
            },
        )

    blobs = _storage(handler).list("events/")
    assert len(blobs) == 1
    assert blobs[0].pathname == "events/events.json"
    assert blobs[0].size == 42
    assert blobs[0].uploaded_at.year == 2025


def test_bearer_token_is_sent():
    store = HttpStorage("http://blobs.test", token="secret")
    try:
        assert store.client.headers["Authorization"] == "Bearer secret"
    finally:
        store.close()


def test_repositories_through_the_blob_proxy(settings):
    proxy = TestClient(create_app(settings))
    remote = HttpStorage("http://testserver", client=proxy)
    collections = CollectionStore(remote)
    users = UserRepository(collections, settings.users_key)
    events = EventRepository(collections, settings.events_key)

    assert users.list_all() == []
    users.save(make_user("u1", "Ann"))
    users.save(make_user("u1", "Ann2"))
    events.save(make_event("e1"))
    events.add_participant("e1", users.get_by_id("u1"))

    assert [(u.id, u.name) for u in users.list_all()] == [("u1", "Ann2")]
    assert [p.user_id for p in events.get_by_id("e1").participants] == ["u1"]

    listing = proxy.get("/list", params={"prefix": "users/"}).json()
    assert [b["pathname"] for b in listing["blobs"]] == ["users/users.json"]
    assert json.loads(remote.get("users/users.json"))[0]["name"] == "Ann2"
