"""Identity domain layer."""

from edtech.domain.identity.entities.user import User
from edtech.domain.identity.exceptions import (
    AccountLockedError,
    EmailAlreadyExistsError,
    RoleTransitionNotAllowedError,
    UserNotFoundError,
)
from edtech.domain.identity.value_objects import UserRole, UserStatus

__all__ = [
    "AccountLockedError",
    "EmailAlreadyExistsError",
    "RoleTransitionNotAllowedError",
    "User",
    "UserNotFoundError",
    "UserRole",
    "UserStatus",
]
