"""Dictionary-backed user repository for tests and local wiring."""

import threading
from dataclasses import replace

from edtech.application.common.pagination import Page
from edtech.domain.common.value_objects import Email, UserId
from edtech.domain.identity.entities.user import User
from edtech.domain.identity.exceptions import EmailAlreadyExistsError


class InMemoryUserRepository:
    """
    Keeps detached copies of users keyed by id.

    Copies come back without pending events, like rows loaded from a
    database.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._users: dict[UserId, User] = {}

    def find_by_id(self, user_id: UserId, for_update: bool = False) -> User | None:
        with self._lock:
            user = self._users.get(user_id)
            return replace(user) if user else None

    def find_by_email(self, email: Email) -> User | None:
        with self._lock:
            for user in self._users.values():
                if user.email == email:
                    return replace(user)
        return None

    def find_all(self, offset: int, limit: int) -> Page[User]:
        with self._lock:
            users = sorted(self._users.values(), key=lambda u: (u.created_at, str(u.id)))
            window = users[offset : offset + limit]
            return Page(items=[replace(u) for u in window], total=len(users))

    def save(self, user: User) -> User:
        with self._lock:
            for existing in self._users.values():
                if existing.id != user.id and existing.email == user.email:
                    raise EmailAlreadyExistsError(user.email.value)
            self._users[user.id] = replace(user)
            return replace(user)

    def delete(self, user_id: UserId) -> bool:
        with self._lock:
            return self._users.pop(user_id, None) is not None
