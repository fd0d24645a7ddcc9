"""User use cases (save with validation, lookup, search, delete)."""

from __future__ import annotations

from typing import Optional

from roster.core.utils import utcnow
from roster.domain.models import User
from roster.domain.validation import validate_user
from roster.repositories.entity_repository import UserRepository

from .responses import ApiResponse, guarded


def matches_user(user: User, term: str) -> bool:
    needle = term.strip().lower()
    if not needle:
        return True
    return any(needle in (value or "").lower() for value in (user.name, user.chinese_name, user.email))


class UserService:
    def __init__(self, repository: UserRepository) -> None:
        self.repository = repository

    def save_user(self, user: User) -> ApiResponse:
        def _save() -> User:
            validate_user(user)
            return self.repository.save(user.model_copy(update={"updated_at": utcnow()}))

        return guarded("save_user", _save)

    def get_user(self, user_id: str) -> ApiResponse:
        return guarded("get_user", lambda: self.repository.get_by_id(user_id))

    def list_users(self, search: Optional[str] = None) -> ApiResponse:
        def _list() -> list[User]:
            users = self.repository.list_all()
            if search:
                users = [user for user in users if matches_user(user, search)]
            return users

        return guarded("list_users", _list)

    def delete_user(self, user_id: str) -> ApiResponse:
        return guarded("delete_user", lambda: self.repository.delete_by_id(user_id))
