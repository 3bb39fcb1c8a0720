from typing import Protocol

from edtech.application.common.pagination import Page
from edtech.domain.common.value_objects import Email, UserId
from edtech.domain.identity.entities.user import User


class UserRepositoryProtocol(Protocol):
    def find_by_id(self, user_id: UserId, for_update: bool = False) -> User | None: ...

    def find_by_email(self, email: Email) -> User | None: ...

    def find_all(self, offset: int, limit: int) -> Page[User]: ...

    def save(self, user: User) -> User:
        """Insert or update by id; raises EmailAlreadyExistsError on a taken email."""
        ...

    def delete(self, user_id: UserId) -> bool: ...
