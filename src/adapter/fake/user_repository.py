"""In-memory implementation of UserRepository for testing."""

import threading
from dataclasses import replace

from domain.model.errors import DuplicateEmailError
from domain.model.user import User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[int, User] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    # ── write operations ─────────────────────────────────────

    def create(self, user: User) -> int:
        with self._lock:
            if self._email_taken(user.email):
                raise DuplicateEmailError(user.email)

            user_id = self._next_id
            self._next_id += 1
            self.store[user_id] = replace(user, id=user_id)
            return user_id

    def update(self, user: User) -> bool:
        with self._lock:
            if user.id not in self.store:
                return False
            if self._email_taken(user.email, exclude_id=user.id):
                raise DuplicateEmailError(user.email)
            self.store[user.id] = user
            return True

    def delete(self, user_id: int) -> bool:
        with self._lock:
            return self.store.pop(user_id, None) is not None

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> User | None:
        for user in list(self.store.values()):
            if user.email == email:
                return user
        return None

    def get_by_id(self, user_id: int) -> User | None:
        return self.store.get(user_id)

    def exists(self, email: str) -> bool:
        return self.get_by_email(email) is not None

    def _email_taken(self, email: str, exclude_id: int | None = None) -> bool:
        return any(
            u.email == email and uid != exclude_id for uid, u in self.store.items()
        )
