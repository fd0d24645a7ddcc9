"""Typed CRUD over one collection blob (users or events)."""
from __future__ import annotations

from typing import Callable, ClassVar, Generic, Optional, TypeVar

from loguru import logger
from pydantic import ValidationError as ModelValidationError

from roster.core.errors import DuplicateParticipantError, NotFoundError
from roster.core.utils import utcnow
from roster.domain.models import Event, Participant, PaymentStatus, RosterModel, User

from .collection_store import CollectionStore

ModelT = TypeVar("ModelT", bound=RosterModel)


def _item_id(item: object) -> Optional[str]:
    if isinstance(item, dict):
        value = item.get("id")
        return value if isinstance(value, str) else None
    return None


class EntityRepository(Generic[ModelT]):
    """get/list/save/delete by id, each one a full load (and save) of the blob.

    Mutations work on the raw decoded items so records this version cannot
    parse survive a rewrite untouched.
    """

    kind: ClassVar[str] = "Entity"
    model: ClassVar[type]

    def __init__(self, collections: CollectionStore, key: str) -> None:
        self.collections = collections
        self.key = key

    def _decode(self, item: object) -> Optional[ModelT]:
        try:
            return self.model.model_validate(item)
        except ModelValidationError as exc:
            logger.warning(
                "Skipping unreadable {} record {} in {}: {} error(s)",
                self.kind,
                _item_id(item),
                self.key,
                exc.error_count(),
            )
            return None

    # -------------------------- reads --------------------------
    def list_all(self) -> list[ModelT]:
        entities = []
        for item in self.collections.load_collection(self.key):
            entity = self._decode(item)
            if entity is not None:
                entities.append(entity)
        return entities

    def get_by_id(self, entity_id: str) -> ModelT:
        for item in self.collections.load_collection(self.key):
            if _item_id(item) != entity_id:
                continue
            entity = self._decode(item)
            if entity is not None:
                return entity
        raise NotFoundError(self.kind, entity_id)

    # -------------------------- writes --------------------------
    def save(self, entity: ModelT) -> ModelT:
        """Replace the entity with the same id in place, else append it.

        When the caller left ``created_at`` unset, an existing record keeps its
        stored ``createdAt``.
        """
        encoded = entity.to_json()
        keep_created = "created_at" not in entity.model_fields_set

        def _upsert(items: list) -> list:
            for index, item in enumerate(items):
                if _item_id(item) == entity.id:
                    if keep_created and item.get("createdAt"):
                        encoded["createdAt"] = item["createdAt"]
                    items[index] = encoded
                    return items
            items.append(encoded)
            return items

        self.collections.mutate(self.key, _upsert)
        logger.info("Saved {} {}", self.kind, entity.id)
        if keep_created:
            return self._decode(encoded) or entity
        return entity

    def delete_by_id(self, entity_id: str) -> None:
        removed = 0

        def _remove(items: list) -> list:
            nonlocal removed
            kept = [item for item in items if _item_id(item) != entity_id]
            removed = len(items) - len(kept)
            return kept

        self.collections.mutate(self.key, _remove)
        logger.info("Deleted {} {} ({} record(s) removed)", self.kind, entity_id, removed)

    def update(self, entity_id: str, change: Callable[[ModelT], ModelT]) -> ModelT:
        """Apply ``change`` to the stored entity and write it back in place."""
        result: list[ModelT] = []

        def _apply(items: list) -> list:
            for index, item in enumerate(items):
                if _item_id(item) != entity_id:
                    continue
                entity = self._decode(item)
                if entity is None:
                    continue
                updated = change(entity)
                items[index] = updated.to_json()
                result.append(updated)
                return items
            raise NotFoundError(self.kind, entity_id)

        self.collections.mutate(self.key, _apply)
        logger.info("Updated {} {}", self.kind, entity_id)
        return result[0]


class UserRepository(EntityRepository[User]):
    kind = "User"
    model = User


class EventRepository(EntityRepository[Event]):
    kind = "Event"
    model = Event

    def update_payment_status(self, event_id: str, user_id: str, status: PaymentStatus) -> Event:
        """Set one participant's payment status.

        An unknown ``user_id`` leaves the roster as is; the event is saved anyway
        with a fresh ``updatedAt``.
        """
        def _change(event: Event) -> Event:
            participant = event.find_participant(user_id)
            if participant is not None:
                participant.payment_status = status
            event.updated_at = utcnow()
            return event

        return self.update(event_id, _change)

    def add_participant(self, event_id: str, user: User) -> Event:
        def _change(event: Event) -> Event:
            if event.find_participant(user.id) is not None:
                raise DuplicateParticipantError(event_id, user.id)
            event.participants.append(Participant.join(user))
            event.updated_at = utcnow()
            return event

        return self.update(event_id, _change)

    def remove_participant(self, event_id: str, user_id: str) -> Event:
        def _change(event: Event) -> Event:
            event.participants = [p for p in event.participants if p.user_id != user_id]
            event.updated_at = utcnow()
            return event

        return self.update(event_id, _change)

    def set_participants(self, event_id: str, users: list[User]) -> Event:
        """Replace the roster; users already on it keep their entry and payment status."""
        def _change(event: Event) -> Event:
            roster: list[Participant] = []
            seen: set[str] = set()
            for user in users:
                if user.id in seen:
                    continue
                seen.add(user.id)
                roster.append(event.find_participant(user.id) or Participant.join(user))
            event.participants = roster
            event.updated_at = utcnow()
            return event

        return self.update(event_id, _change)
