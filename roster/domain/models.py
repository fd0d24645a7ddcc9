"""
Pydantic models persisted inside the collection blobs.

Attributes are snake_case in Python and camelCase on the wire
(``chineseName``, ``startDateTime``, ``paymentStatus``...), so blobs written by
earlier clients decode unchanged. The models accept partially filled records;
form-level rules live in ``roster.domain.validation``.
"""
from __future__ import annotations

from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from roster.core.utils import generate_id, utcnow


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"


class RosterModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, allow_inf_nan=False)

    @field_validator("*", mode="after")
    @classmethod
    def _assume_utc(cls, value: Any) -> Any:
        # naive timestamps (e.g. from datetime-local inputs) are taken as UTC
        if isinstance(value, datetime) and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class User(RosterModel):
    id: str = Field(default_factory=generate_id)
    name: str = ""
    chinese_name: str = ""
    gender: Gender = Gender.OTHER
    date_of_birth: Optional[date] = None
    email: str = ""
    phone_number: str = ""
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def _blank_date(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class Participant(RosterModel):
    """Roster entry; ``user`` is a snapshot of the user taken when they joined."""

    user_id: str
    user: User
    payment_status: PaymentStatus = PaymentStatus.PENDING
    joined_at: datetime = Field(default_factory=utcnow)

    @classmethod
    def join(cls, user: User) -> "Participant":
        return cls(user_id=user.id, user=user.model_copy(deep=True))


class Event(RosterModel):
    id: str = Field(default_factory=generate_id)
    name: str = ""
    description: str = ""
    fee: float = 0.0
    start_date_time: datetime
    end_date_time: datetime
    participants: list[Participant] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def find_participant(self, user_id: str) -> Optional[Participant]:
        for participant in self.participants:
            if participant.user_id == user_id:
                return participant
        return None

    def duplicate_user_ids(self) -> list[str]:
        seen: set[str] = set()
        duplicates: list[str] = []
        for participant in self.participants:
            if participant.user_id in seen and participant.user_id not in duplicates:
                duplicates.append(participant.user_id)
            seen.add(participant.user_id)
        return duplicates
