"""
Utility helpers shared across repositories/services.
"""

import secrets
import string
import time
from datetime import datetime, timezone

_ALPHABET = string.digits + string.ascii_lowercase


def _base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits))


def generate_id() -> str:
    """
    Random base-36 chunk followed by the base-36 millisecond clock, e.g. "k3j9x0a1lz2m8q".
    """
    random_part = "".join(secrets.choice(_ALPHABET) for _ in range(11))
    return random_part + _base36(int(time.time() * 1000))


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
