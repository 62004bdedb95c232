"""In-memory implementation of UserRepository for testing."""

import uuid
from datetime import datetime, timezone
from typing import Any

from adapter.fake.listing import apply_list_options
from domain.model.listing import ListOptions
from domain.model.user import User

_UPDATABLE = {'name', 'email', 'password_hash', 'avatar'}


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}

    # ── write operations ─────────────────────────────────────

    def create(self, name: str, email: str, password_hash: str) -> User:
        user_id = uuid.uuid4().hex
        now = datetime.now(timezone.utc)

        user = User(
            id=user_id,
            name=name,
            email=email,
            created_at=now,
            updated_at=now,
            password_hash=password_hash,
        )
        self.store[user_id] = user
        return user

    def update(self, user_id: str, changes: dict[str, Any]) -> User | None:
        user = self.store.get(user_id)
        if not user:
            return None

        for key, value in changes.items():
            if key in _UPDATABLE:
                setattr(user, key, value)
        user.updated_at = datetime.now(timezone.utc)
        return user

    def set_deleted_at(self, user_id: str, deleted_at: datetime | None) -> User | None:
        user = self.store.get(user_id)
        if not user:
            return None

        user.deleted_at = deleted_at
        user.updated_at = datetime.now(timezone.utc)
        return user

    def erase(self, user_id: str) -> bool:
        return self.store.pop(user_id, None) is not None

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, user_id: str) -> User | None:
        return self.store.get(user_id)

    def find_many(self, options: ListOptions) -> list[User]:
        return apply_list_options(self.store.values(), options)

    def count_matching(self, field: str, value: Any, excluding_id: str | None = None) -> int:
        return sum(
            1 for u in self.store.values()
            if getattr(u, field, None) == value and u.id != excluding_id
        )
