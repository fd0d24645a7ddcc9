"""Exception hierarchy for storage, repository and service layers."""
from __future__ import annotations


class RosterError(Exception):
    """Base error with a stable code and an HTTP status hint."""

    code = "error"
    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class StorageUnavailableError(RosterError):
    """Raised when the blob transport is unreachable, times out or answers non-2xx."""

    code = "storage_unavailable"
    status_code = 503


class NotFoundError(RosterError):
    """Raised when an entity id is absent from its collection."""

    code = "not_found"
    status_code = 404

    def __init__(self, kind: str, entity_id: str) -> None:
        super().__init__(f"{kind} {entity_id} not found")
        self.kind = kind
        self.entity_id = entity_id


class MalformedCollectionError(RosterError):
    """Raised by the collection decoder when a blob is not a JSON array."""

    code = "malformed_collection"

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Collection {key} is malformed: {reason}")
        self.key = key
        self.reason = reason


class ValidationError(RosterError):
    """Raised when an entity fails field validation."""

    code = "invalid"

    def __init__(self, errors: dict[str, str]) -> None:
        message = "; ".join(f"{field}: {text}" for field, text in errors.items())
        super().__init__(message or "Invalid entity")
        self.errors = dict(errors)


class DuplicateParticipantError(RosterError):
    """Raised when a user is already on an event's roster."""

    code = "duplicate_participant"

    def __init__(self, event_id: str, user_id: str) -> None:
        super().__init__(f"User {user_id} already joined event {event_id}")
        self.event_id = event_id
        self.user_id = user_id
