"""User aggregate for identity management."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime

from edtech.domain.common.domain_event import DomainEvent
from edtech.domain.common.entity import Entity
from edtech.domain.common.event_queue import EventQueue
from edtech.domain.common.exceptions import BusinessRuleViolationError, ValidationError
from edtech.domain.common.status_transitions import StatusTransitions
from edtech.domain.common.validation import FieldErrors, clean_labels, optional_text
from edtech.domain.common.value_objects import Email, UserId, UserName
from edtech.domain.identity.events import (
    UserCreated,
    UserLoginFailed,
    UserLoginRecorded,
    UserRoleChanged,
    UserStatusChanged,
    UserUpdated,
)
from edtech.domain.identity.value_objects import UserRole, UserStatus

# Domain constraints
MAX_BIO_LENGTH = 2000
UPDATABLE_FIELDS = ("first_name", "last_name", "email", "bio", "skills")
SYSTEM_ACTOR = "system"

USER_STATUS_TRANSITIONS = StatusTransitions[UserStatus](
    "User",
    {
        UserStatus.PENDING_VERIFICATION: {UserStatus.ACTIVE, UserStatus.INACTIVE},
        UserStatus.ACTIVE: {UserStatus.INACTIVE, UserStatus.SUSPENDED},
        UserStatus.SUSPENDED: {UserStatus.ACTIVE, UserStatus.INACTIVE},
        UserStatus.INACTIVE: {UserStatus.ACTIVE},
    },
)


@dataclass(eq=False)
class User(Entity[UserId]):
    """
    User aggregate representing a student, tutor or administrator.

    Business Rules:
    - Email is normalised and must be unique (enforced at repository level)
    - New users start as PENDING_VERIFICATION
    - Status changes follow USER_STATUS_TRANSITIONS
    - Every observable change records exactly one domain event
    """

    id: UserId
    email: Email
    name: UserName
    role: UserRole
    status: UserStatus
    created_at: datetime
    updated_at: datetime
    bio: str | None = None
    skills: tuple[str, ...] = ()
    failed_login_attempts: int = 0
    last_login_at: datetime | None = None
    email_changed_at: datetime | None = None
    _events: EventQueue = field(default_factory=EventQueue, init=False, repr=False)

    @property
    def is_active(self) -> bool:
        return self.status is UserStatus.ACTIVE

    @property
    def is_student(self) -> bool:
        return self.role is UserRole.STUDENT

    @property
    def is_tutor(self) -> bool:
        return self.role is UserRole.TUTOR

    @property
    def full_name(self) -> str:
        return self.name.full_name

    @property
    def pending_events(self) -> list[DomainEvent]:
        """Return pending events without clearing them."""
        return self._events.snapshot()

    def drain_events(self) -> list[DomainEvent]:
        """Collect and clear all recorded domain events."""
        return self._events.drain()

    def update(
        self,
        changes: Mapping[str, object],
        actor_id: str = SYSTEM_ACTOR,
        now: datetime | None = None,
    ) -> tuple[str, ...]:
        """
        Apply a partial profile update.

        Every provided field is validated before anything is applied.
        Fields whose value is None are treated as not provided. Only
        fields that actually change are recorded.

        Args:
            changes: Mapping of field name to new value
            actor_id: Who requested the change
            now: Timestamp to record (defaults to current time)

        Returns:
            Names of the fields that changed (empty for a no-op)

        Raises:
            ValidationError: Listing every invalid or unknown field
        """
        errors = FieldErrors()
        provided = {key: value for key, value in changes.items() if value is not None}
        for key in provided:
            errors.check(key in UPDATABLE_FIELDS, key, f"{key} cannot be updated")

        name = self.name
        if "first_name" in provided or "last_name" in provided:
            name = errors.capture(
                "name",
                UserName,
                provided.get("first_name", self.name.first_name),
                provided.get("last_name", self.name.last_name),
            ) or self.name
        email = self.email
        if "email" in provided:
            email = errors.capture("email", Email, provided["email"]) or self.email
        bio = self.bio
        if "bio" in provided:
            bio = optional_text(errors, "bio", str(provided["bio"]), MAX_BIO_LENGTH)
        skills = self.skills
        if "skills" in provided:
            skills = clean_labels(errors, "skills", provided["skills"])
        errors.raise_if_any()

        changed: list[str] = []
        if name.first_name != self.name.first_name:
            changed.append("first_name")
        if name.last_name != self.name.last_name:
            changed.append("last_name")
        if email != self.email:
            changed.append("email")
        if bio != self.bio:
            changed.append("bio")
        if skills != self.skills:
            changed.append("skills")
        if not changed:
            return ()

        self.name = name
        self.email = email
        self.bio = bio
        self.skills = skills
        self.updated_at = now or datetime.now(UTC)
        if "email" in changed:
            self.email_changed_at = self.updated_at
        self._events.append(
            UserUpdated(user_id=self.id, changed_fields=tuple(changed), actor_id=actor_id)
        )
        return tuple(changed)

    def transition(
        self,
        target: UserStatus | str,
        actor_id: str = SYSTEM_ACTOR,
        now: datetime | None = None,
    ) -> None:
        """
        Move the account to ``target`` status.

        Raises:
            ValidationError: If target is not a known status
            InvalidTransitionError: If the edge is not in USER_STATUS_TRANSITIONS
        """
        target_status = UserStatus.parse(target, "status")
        USER_STATUS_TRANSITIONS.require(self.status, target_status)

        previous = self.status
        self.status = target_status
        self.updated_at = now or datetime.now(UTC)
        self._events.append(
            UserStatusChanged(
                user_id=self.id,
                from_status=previous,
                to_status=target_status,
                actor_id=actor_id,
            )
        )

    def activate(self, actor_id: str = SYSTEM_ACTOR) -> None:
        self.transition(UserStatus.ACTIVE, actor_id)

    def suspend(self, actor_id: str = SYSTEM_ACTOR) -> None:
        self.transition(UserStatus.SUSPENDED, actor_id)

    def change_role(
        self,
        new_role: UserRole | str,
        changed_by: str = SYSTEM_ACTOR,
        now: datetime | None = None,
    ) -> None:
        """
        Change the user's role.

        Eligibility (waiting periods, privileged tiers) is decided by the
        business rules before calling this.

        Raises:
            ValidationError: If new_role is not a known role
            BusinessRuleViolationError: If the user already has this role
        """
        role = UserRole.parse(new_role, "role")
        if role is self.role:
            raise BusinessRuleViolationError(
                "role_unchanged", f"User already has the {role.value} role"
            )

        old_role = self.role
        self.role = role
        self.updated_at = now or datetime.now(UTC)
        self._events.append(
            UserRoleChanged(
                user_id=self.id, old_role=old_role, new_role=role, changed_by=changed_by
            )
        )

    def record_login(self, now: datetime | None = None) -> None:
        """Record a successful login; resets the failed attempt counter."""
        self.last_login_at = now or datetime.now(UTC)
        self.failed_login_attempts = 0
        self._events.append(UserLoginRecorded(user_id=self.id))

    def record_failed_login(self) -> int:
        """Record a failed login and return the running count."""
        self.failed_login_attempts += 1
        self._events.append(
            UserLoginFailed(user_id=self.id, failed_attempts=self.failed_login_attempts)
        )
        return self.failed_login_attempts

    @classmethod
    def create(
        cls,
        email: str,
        first_name: str,
        last_name: str,
        role: UserRole | str | None = None,
        bio: str | None = None,
        skills: list[str] | tuple[str, ...] | None = None,
        now: datetime | None = None,
    ) -> "User":
        """
        Create a new user.

        Args:
            email: User's email address (normalised to lower case)
            first_name: Given name
            last_name: Family name
            role: Initial role (defaults to STUDENT)
            bio: Optional free-text biography
            skills: Optional list of skills
            now: Creation timestamp (defaults to current time)

        Returns:
            New User instance in PENDING_VERIFICATION with a UserCreated event queued

        Raises:
            ValidationError: Listing every invalid field
        """
        errors = FieldErrors()
        valid_email = errors.capture("email", Email, email)
        valid_name = errors.capture("name", UserName, first_name, last_name)
        valid_role = (
            errors.capture("role", UserRole.parse, role, "role")
            if role is not None
            else UserRole.STUDENT
        )
        valid_bio = optional_text(errors, "bio", bio, MAX_BIO_LENGTH)
        valid_skills = clean_labels(errors, "skills", skills if skills is not None else ())
        errors.raise_if_any()
        if valid_email is None or valid_name is None or valid_role is None:
            raise ValidationError("Invalid user")

        timestamp = now or datetime.now(UTC)
        user = cls(
            id=UserId.generate(),
            email=valid_email,
            name=valid_name,
            role=valid_role,
            status=UserStatus.PENDING_VERIFICATION,
            bio=valid_bio,
            skills=valid_skills,
            created_at=timestamp,
            updated_at=timestamp,
        )
        user._events.append(
            UserCreated(
                user_id=user.id,
                email=user.email.value,
                first_name=user.name.first_name,
                last_name=user.name.last_name,
                role=user.role,
                status=user.status,
            )
        )
        return user

    @classmethod
    def create_with_id(
        cls,
        id: UserId,
        email: Email,
        name: UserName,
        role: UserRole,
        status: UserStatus,
        created_at: datetime,
        updated_at: datetime,
        bio: str | None = None,
        skills: tuple[str, ...] = (),
        failed_login_attempts: int = 0,
        last_login_at: datetime | None = None,
        email_changed_at: datetime | None = None,
    ) -> "User":
        """
        Reconstitute a user from persistence.

        No events are recorded.
        """
        return cls(
            id=id,
            email=email,
            name=name,
            role=role,
            status=status,
            created_at=created_at,
            updated_at=updated_at,
            bio=bio,
            skills=tuple(skills),
            failed_login_attempts=failed_login_attempts,
            last_login_at=last_login_at,
            email_changed_at=email_changed_at,
        )
