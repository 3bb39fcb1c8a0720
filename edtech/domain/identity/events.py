"""Domain events recorded by the User aggregate."""

from dataclasses import dataclass

from edtech.domain.common.domain_event import DomainEvent
from edtech.domain.common.value_objects import UserId
from edtech.domain.identity.value_objects import UserRole, UserStatus


@dataclass(frozen=True)
class UserEvent(DomainEvent):
    user_id: UserId

    @property
    def aggregate_id(self) -> str:
        return str(self.user_id)


@dataclass(frozen=True)
class UserCreated(UserEvent):
    email: str
    first_name: str
    last_name: str
    role: UserRole
    status: UserStatus


@dataclass(frozen=True)
class UserUpdated(UserEvent):
    """Profile fields changed; ``changed_fields`` names exactly what changed."""

    changed_fields: tuple[str, ...]
    actor_id: str


@dataclass(frozen=True)
class UserStatusChanged(UserEvent):
    from_status: UserStatus
    to_status: UserStatus
    actor_id: str


@dataclass(frozen=True)
class UserRoleChanged(UserEvent):
    old_role: UserRole
    new_role: UserRole
    changed_by: str


@dataclass(frozen=True)
class UserLoginRecorded(UserEvent):
    pass


@dataclass(frozen=True)
class UserLoginFailed(UserEvent):
    failed_attempts: int
