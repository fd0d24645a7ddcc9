#!/usr/bin/env python3
"""
Create numbered test users (test-1 .. test-N) in the configured user collection.

Usage:
  python scripts/seed_users.py [--count 100]

Storage is selected by the same env vars as the API (STORAGE_BACKEND, STORAGE_DIR,
DATABASE_URL, BLOB_API_URL...).
"""
from __future__ import annotations

import argparse
import sys
from datetime import date

from roster.core.config import get_settings
from roster.core.logging_config import setup_logging
from roster.domain.models import Gender, User
from roster.repositories import CollectionStore, UserRepository
from roster.services import UserService
from roster.storage import build_object_store


def build_test_user(index: int) -> User:
    return User(
        id=f"test-{index}",
        name=f"Test User {index}",
        chinese_name=f"测试用户 {index}",
        gender=Gender.MALE if index % 2 == 0 else Gender.FEMALE,
        date_of_birth=date(1990, 1, 1),
        email=f"test{index}@example.com",
        phone_number=f"12345678{index:02d}",
    )


def main() -> None:
    ap = argparse.ArgumentParser(description="Seed numbered test users")
    ap.add_argument("--count", type=int, default=100, help="How many users to create (default: 100)")
    args = ap.parse_args()
    if args.count < 1:
        raise SystemExit("--count must be positive")

    settings = get_settings()
    setup_logging(level=settings.log_level, json_format=settings.log_json)
    collections = CollectionStore(build_object_store(settings))
    service = UserService(UserRepository(collections, settings.users_key))

    failures = 0
    for index in range(1, args.count + 1):
        result = service.save_user(build_test_user(index))
        if not result.success:
            failures += 1
            sys.stderr.write(f"test-{index}: {result.error}\n")
    print(f"OK: {args.count - failures} test user(s) saved to {settings.users_key}")
    if failures:
        raise SystemExit(1)


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
