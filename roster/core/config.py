"""
Configuration helpers for the roster backend.

Settings are read from environment variables once and then handed explicitly
to whatever needs them (object store factory, app factory, scripts).
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    storage_backend: str
    storage_dir: str
    database_url: str
    blob_api_url: str
    blob_api_token: str
    blob_public_base_url: str
    blob_timeout_seconds: float
    users_key: str
    events_key: str
    log_level: str
    log_json: bool
    log_file: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _float(value: str | None, default: float = 0.0) -> float:
        try:
            return float(value)
        except (TypeError, ValueError):
            return default

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        storage_backend=(os.getenv("STORAGE_BACKEND") or "local").strip().lower(),
        storage_dir=os.getenv("STORAGE_DIR", "data/blobs"),
        database_url=os.getenv("DATABASE_URL", ""),
        blob_api_url=os.getenv("BLOB_API_URL", "http://localhost:8000").rstrip("/"),
        blob_api_token=os.getenv("BLOB_API_TOKEN", ""),
        blob_public_base_url=os.getenv("BLOB_PUBLIC_BASE_URL", "").rstrip("/"),
        blob_timeout_seconds=_float(os.getenv("BLOB_TIMEOUT_SECONDS", "10"), 10.0),
        users_key=os.getenv("USERS_KEY", "users/users.json"),
        events_key=os.getenv("EVENTS_KEY", "events/events.json"),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        log_json=_bool(os.getenv("LOG_JSON"), False),
        log_file=os.getenv("LOG_FILE", ""),
    )
