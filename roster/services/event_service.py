"""Event use cases, including roster and payment status changes."""

from __future__ import annotations

from typing import Optional

from roster.core.errors import DuplicateParticipantError, ValidationError
from roster.core.utils import utcnow
from roster.domain.models import Event, PaymentStatus, User
from roster.domain.validation import validate_event
from roster.repositories.entity_repository import EventRepository, UserRepository

from .responses import ApiResponse, guarded


def _payment_status(value: PaymentStatus | str) -> PaymentStatus:
    try:
        return PaymentStatus(value)
    except ValueError as exc:
        allowed = ", ".join(status.value for status in PaymentStatus)
        raise ValidationError({"paymentStatus": f"Must be one of {allowed}"}) from exc


class EventService:
    def __init__(self, events: EventRepository, users: UserRepository) -> None:
        self.events = events
        self.users = users

    def _resolve_users(self, user_ids: list[str]) -> list[User]:
        return [self.users.get_by_id(user_id) for user_id in user_ids]

    def save_event(self, event: Event) -> ApiResponse:
        def _save() -> Event:
            validate_event(event)
            duplicates = event.duplicate_user_ids()
            if duplicates:
                raise DuplicateParticipantError(event.id, duplicates[0])
            return self.events.save(event.model_copy(update={"updated_at": utcnow()}))

        return guarded("save_event", _save)

    def get_event(self, event_id: str) -> ApiResponse:
        return guarded("get_event", lambda: self.events.get_by_id(event_id))

    def list_events(self, search: Optional[str] = None) -> ApiResponse:
        def _list() -> list[Event]:
            events = self.events.list_all()
            needle = (search or "").strip().lower()
            if needle:
                events = [event for event in events if needle in event.name.lower()]
            return events

        return guarded("list_events", _list)

    def delete_event(self, event_id: str) -> ApiResponse:
        return guarded("delete_event", lambda: self.events.delete_by_id(event_id))

    def update_payment_status(self, event_id: str, user_id: str, status: PaymentStatus | str) -> ApiResponse:
        return guarded(
            "update_payment_status",
            lambda: self.events.update_payment_status(event_id, user_id, _payment_status(status)),
        )

    def add_participant(self, event_id: str, user_id: str) -> ApiResponse:
        return guarded(
            "add_participant",
            lambda: self.events.add_participant(event_id, self.users.get_by_id(user_id)),
        )

    def remove_participant(self, event_id: str, user_id: str) -> ApiResponse:
        return guarded("remove_participant", lambda: self.events.remove_participant(event_id, user_id))

    def set_participants(self, event_id: str, user_ids: list[str]) -> ApiResponse:
        return guarded(
            "set_participants",
            lambda: self.events.set_participants(event_id, self._resolve_users(user_ids)),
        )
