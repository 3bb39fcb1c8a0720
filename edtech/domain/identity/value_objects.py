"""Identity value objects: user roles and account statuses."""

from edtech.domain.common.value_objects import ParsableEnum


class UserRole(ParsableEnum):
    """Role of a user on the platform."""

    STUDENT = "STUDENT"
    TUTOR = "TUTOR"
    ADMIN = "ADMIN"
    SUPERADMIN = "SUPERADMIN"

    @property
    def is_privileged(self) -> bool:
        """Administrative tiers; their role changes go through a separate path."""
        return self in (UserRole.ADMIN, UserRole.SUPERADMIN)

    def can_teach(self) -> bool:
        return self is UserRole.TUTOR or self.is_privileged


class UserStatus(ParsableEnum):
    """Lifecycle status of a user account."""

    PENDING_VERIFICATION = "PENDING_VERIFICATION"
    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"
    INACTIVE = "INACTIVE"
