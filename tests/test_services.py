"""
Service layer: validation, search and the {success, data?, error?} envelope.
"""
from __future__ import annotations

from datetime import datetime, timezone

import pytest

from roster.core.errors import StorageUnavailableError
from roster.domain.models import PaymentStatus
from roster.repositories import CollectionStore, EventRepository, UserRepository
from roster.services import EventService, UserService
from tests.factories import make_event, make_user


class _UnavailableStore:
    def put(self, key, data):
        raise StorageUnavailableError("blob host returned 502")

    def get(self, key):
        raise StorageUnavailableError("blob host returned 502")

    def delete(self, key):
        raise StorageUnavailableError("blob host returned 502")

    def list(self, prefix=""):
        raise StorageUnavailableError("blob host returned 502")


@pytest.fixture()
def user_service(user_repo):
    return UserService(user_repo)


@pytest.fixture()
def event_service(event_repo, user_repo):
    return EventService(event_repo, user_repo)


def test_save_user_returns_saved_entity(user_service):
    result = user_service.save_user(make_user("u1", "Ann"))
    assert result.success is True
    assert result.data.id == "u1"
    assert result.error is None


def test_save_user_refreshes_updated_at(user_service):
    stale = datetime(2020, 1, 1, tzinfo=timezone.utc)
    result = user_service.save_user(make_user("u1", updated_at=stale, created_at=stale))
    assert result.data.updated_at > stale
    assert result.data.created_at == stale


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"name": ""}, "name"),
        ({"chinese_name": "  "}, "chineseName"),
        ({"date_of_birth": None}, "dateOfBirth"),
        ({"email": "not-an-email"}, "email"),
        ({"email": ""}, "email"),
        ({"phone_number": "123"}, "phoneNumber"),
    ],
)
def test_invalid_user_is_rejected_without_writing(user_service, user_repo, overrides, field):
    result = user_service.save_user(make_user("u1", **overrides))
    assert result.success is False
    assert field in result.error
    assert result.code == "invalid"
    assert user_repo.list_all() == []


def test_get_missing_user_reports_not_found(user_service):
    result = user_service.get_user("ghost")
    assert result.success is False
    assert result.data is None
    assert result.status_code == 404
    assert "ghost" in result.error


def test_delete_returns_success_without_data(user_service):
    user_service.save_user(make_user("u1"))
    result = user_service.delete_user("u1")
    assert result.success is True
    assert result.to_payload() == {"success": True}
    assert user_service.delete_user("u1").success is True


def test_list_users_search_matches_name_chinese_name_and_email(user_service):
    user_service.save_user(make_user("u1", "Ann Lee", chinese_name="李安", email="ann@example.com"))
    user_service.save_user(make_user("u2", "Bob Chan", chinese_name="陈波", email="bob@club.org"))

    def ids(term):
        return [u.id for u in user_service.list_users(term).data]

    assert ids(None) == ["u1", "u2"]
    assert ids("ANN") == ["u1"]
    assert ids("陈") == ["u2"]
    assert ids("club.org") == ["u2"]
    assert ids("nobody") == []


def test_storage_failures_become_envelopes():
    collections = CollectionStore(_UnavailableStore())
    users = UserRepository(collections, "users/users.json")
    service = UserService(users)

    for result in (service.list_users(), service.save_user(make_user()), service.delete_user("u1")):
        assert result.success is False
        assert result.code == "storage_unavailable"
        assert result.status_code == 503
        assert "502" in result.error


def test_unexpected_errors_are_contained(user_service, monkeypatch):
    def _explode():
        raise KeyError("boom")

    monkeypatch.setattr(user_service.repository, "list_all", _explode)
    result = user_service.list_users()
    assert result.success is False
    assert result.status_code == 500


def test_envelope_payload_uses_wire_names(user_service):
    result = user_service.save_user(make_user("u1"))
    payload = result.to_payload()
    assert payload["success"] is True
    assert payload["data"]["chineseName"] == "安"
    assert "error" not in payload


def test_save_event_validates_fee_and_dates(event_service, event_repo):
    negative = event_service.save_event(make_event("e1", fee=-1))
    assert negative.success is False
    assert "fee" in negative.error

    start = datetime(2025, 5, 1, 18, 0, tzinfo=timezone.utc)
    same = event_service.save_event(make_event("e2", start_date_time=start, end_date_time=start))
    assert same.success is False
    assert "endDateTime" in same.error

    assert event_repo.list_all() == []


def test_save_event_accepts_free_event(event_service):
    assert event_service.save_event(make_event("e1", fee=0)).success is True


def test_save_event_rejects_duplicate_participants(event_service, user_repo):
    event_service.save_event(make_event("e1"))
    user_repo.save(make_user("u1"))
    event = event_service.add_participant("e1", "u1").data
    event.participants.append(event.participants[0].model_copy())

    result = event_service.save_event(event)

    assert result.success is False
    assert result.code == "duplicate_participant"


def test_add_participant_requires_existing_user(event_service):
    event_service.save_event(make_event("e1"))
    result = event_service.add_participant("e1", "ghost")
    assert result.success is False
    assert result.code == "not_found"


def test_add_participant_twice_fails(event_service, user_repo):
    user_repo.save(make_user("u1"))
    event_service.save_event(make_event("e1"))
    assert event_service.add_participant("e1", "u1").success is True
    second = event_service.add_participant("e1", "u1")
    assert second.success is False
    assert second.code == "duplicate_participant"


def test_update_payment_status_accepts_strings(event_service, user_repo):
    user_repo.save(make_user("u1"))
    event_service.save_event(make_event("e1"))
    event_service.add_participant("e1", "u1")

    result = event_service.update_payment_status("e1", "u1", "refunded")

    assert result.success is True
    assert result.data.participants[0].payment_status == PaymentStatus.REFUNDED


def test_update_payment_status_rejects_unknown_status(event_service):
    event_service.save_event(make_event("e1"))
    result = event_service.update_payment_status("e1", "u1", "waived")
    assert result.success is False
    assert "paymentStatus" in result.error


def test_update_payment_status_without_participant_is_silent(event_service):
    event_service.save_event(make_event("e1"))
    before = event_service.get_event("e1").data.updated_at

    result = event_service.update_payment_status("e1", "u1", PaymentStatus.PAID)

    assert result.success is True
    assert result.data.participants == []
    assert event_service.get_event("e1").data.updated_at >= before


def test_set_participants_resolves_users(event_service, user_repo):
    user_repo.save(make_user("u1"))
    user_repo.save(make_user("u2"))
    event_service.save_event(make_event("e1"))

    result = event_service.set_participants("e1", ["u2", "u1"])
    assert [p.user_id for p in result.data.participants] == ["u2", "u1"]

    missing = event_service.set_participants("e1", ["u1", "ghost"])
    assert missing.success is False
    assert [p.user_id for p in event_service.get_event("e1").data.participants] == ["u2", "u1"]


def test_remove_participant(event_service, user_repo):
    user_repo.save(make_user("u1"))
    event_service.save_event(make_event("e1"))
    event_service.add_participant("e1", "u1")

    result = event_service.remove_participant("e1", "u1")

    assert result.success is True
    assert result.data.participants == []


def test_list_events_search_by_name(event_service):
    event_service.save_event(make_event("e1", "Spring Gala"))
    event_service.save_event(make_event("e2", "Summer Picnic"))
    assert [e.id for e in event_service.list_events("gala").data] == ["e1"]
    assert [e.id for e in event_service.list_events().data] == ["e1", "e2"]


def test_delete_event(event_service):
    event_service.save_event(make_event("e1"))
    assert event_service.delete_event("e1").success is True
    assert event_service.get_event("e1").success is False


@pytest.mark.parametrize("fee", [float("nan"), float("inf"), float("-inf")])
def test_save_event_rejects_non_finite_fee(event_service, event_repo, local_store, fee):
    event = make_event("e1")
    event.fee = fee

    result = event_service.save_event(event)

    assert result.success is False
    assert "fee" in result.error
    assert event_repo.list_all() == []
    assert local_store.get("events/events.json") is None
