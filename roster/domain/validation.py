"""Field rules applied before users/events are saved."""
from __future__ import annotations

import math
import re

from roster.core.errors import ValidationError

from .models import Event, User

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PHONE_PATTERN = re.compile(r"\+?[\d\s-]{8,}")


def is_valid_email(value: str | None) -> bool:
    return bool(value) and bool(EMAIL_PATTERN.fullmatch(value))


def is_valid_phone_number(value: str | None) -> bool:
    return bool(value) and bool(PHONE_PATTERN.fullmatch(value))


def validate_user(user: User) -> None:
    errors: dict[str, str] = {}
    if not user.id.strip():
        errors["id"] = "Id is required"
    if not user.name.strip():
        errors["name"] = "Name is required"
    if not user.chinese_name.strip():
        errors["chineseName"] = "Chinese name is required"
    if user.date_of_birth is None:
        errors["dateOfBirth"] = "Date of birth is required"
    if not user.email:
        errors["email"] = "Email is required"
    elif not is_valid_email(user.email):
        errors["email"] = "Invalid email format"
    if not user.phone_number:
        errors["phoneNumber"] = "Phone number is required"
    elif not is_valid_phone_number(user.phone_number):
        errors["phoneNumber"] = "Invalid phone number format"
    if errors:
        raise ValidationError(errors)


def validate_event(event: Event) -> None:
    errors: dict[str, str] = {}
    if not event.id.strip():
        errors["id"] = "Id is required"
    if not event.name.strip():
        errors["name"] = "Name is required"
    if not event.description.strip():
        errors["description"] = "Description is required"
    if not math.isfinite(event.fee):
        errors["fee"] = "Fee must be a finite number"
    elif event.fee < 0:
        errors["fee"] = "Fee cannot be negative"
    if event.start_date_time >= event.end_date_time:
        errors["endDateTime"] = "End date/time must be after start date/time"
    if errors:
        raise ValidationError(errors)
