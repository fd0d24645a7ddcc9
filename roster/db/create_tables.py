"""Utility script to create the blob table."""
from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError

from roster.core.config import get_settings
from .session import Base, get_engine
from . import models  # noqa: F401  # ensure models are imported for metadata


def create_all(database_url: str) -> None:
    engine = get_engine(database_url)
    Base.metadata.create_all(bind=engine)


if __name__ == "__main__":
    try:
        create_all(get_settings().database_url)
        print("Database tables created successfully.")
    except (SQLAlchemyError, RuntimeError) as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
