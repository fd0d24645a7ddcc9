"""Domain models (users, events, participants) and their validation rules."""

from .models import Event, Gender, Participant, PaymentStatus, User
from .validation import validate_event, validate_user

__all__ = [
    "Event",
    "Gender",
    "Participant",
    "PaymentStatus",
    "User",
    "validate_event",
    "validate_user",
]
