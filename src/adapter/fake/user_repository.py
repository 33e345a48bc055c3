"""In-memory implementation of UserRepository for testing."""

import threading
from dataclasses import replace

from domain.model.errors import DuplicateError, NotFoundError
from domain.model.user import User, check_update_fields


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}
        self._lock = threading.Lock()

    def _conflicts(self, user: User, ignore_id: str | None = None) -> bool:
        for other in self.store.values():
            if other.id == ignore_id:
                continue
            if user.email and other.email == user.email:
                return True
            if user.phone_number and other.phone_number == user.phone_number:
                return True
        return False

    # ── write operations ─────────────────────────────────────

    def create(self, user: User) -> User:
        with self._lock:
            if user.id in self.store or self._conflicts(user):
                raise DuplicateError("User with this id, email or phone already exists")
            self.store[user.id] = replace(user)
        return replace(user)

    def update(self, user_id: str, fields: dict) -> User:
        check_update_fields(fields)
        with self._lock:
            current = self.store.get(user_id)
            if current is None:
                raise NotFoundError(f"User {user_id} not found")

            updated = replace(current, **fields)
            if self._conflicts(updated, ignore_id=user_id):
                raise DuplicateError("Email or phone number already in use")
            self.store[user_id] = updated
        return replace(updated)

    def delete(self, user_id: str) -> bool:
        with self._lock:
            return self.store.pop(user_id, None) is not None

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, user_id: str) -> User:
        with self._lock:
            user = self.store.get(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return replace(user)

    def get_by_email(self, email: str) -> User:
        with self._lock:
            for user in self.store.values():
                if email and user.email == email:
                    return replace(user)
        raise NotFoundError("No user with this email")

    def get_by_phone(self, phone_number: str) -> User:
        with self._lock:
            for user in self.store.values():
                if phone_number and user.phone_number == phone_number:
                    return replace(user)
        raise NotFoundError("No user with this phone number")

    def list_all(self) -> list[User]:
        with self._lock:
            return [replace(u) for u in self.store.values()]

    def ping(self) -> bool:
        return True
