"""In-memory implementation of UserRepository for testing."""

import dataclasses
from datetime import datetime, timezone

from domain.model.errors import DuplicateError
from domain.model.identifiers import require_valid_id
from domain.model.user import User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}

    # ── write operations ─────────────────────────────────────

    def create(self, user: User) -> User:
        require_valid_id(user.id)
        if self.get_by_email(user.email):
            raise DuplicateError("Email already registered")

        now = datetime.now(timezone.utc)
        stored = dataclasses.replace(user, created_at=now, updated_at=now)
        self.store[stored.id] = stored
        return stored

    def update(self, user_id: str, changes: dict) -> User | None:
        require_valid_id(user_id)
        user = self.store.get(user_id)
        if not user:
            return None

        email = changes.get('email')
        if email and any(u.email == email and u.id != user_id for u in self.store.values()):
            raise DuplicateError("Email already registered")

        updated = dataclasses.replace(user, **changes, updated_at=datetime.now(timezone.utc))
        self.store[user_id] = updated
        return updated

    def delete(self, user_id: str) -> bool:
        require_valid_id(user_id)
        return self.store.pop(user_id, None) is not None

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> User | None:
        for user in self.store.values():
            if user.email == email:
                return user
        return None

    def get_by_id(self, user_id: str) -> User | None:
        require_valid_id(user_id)
        return self.store.get(user_id)

    def get_many(self, user_ids: list[str]) -> dict[str, User]:
        return {uid: self.store[uid] for uid in user_ids if uid in self.store}
