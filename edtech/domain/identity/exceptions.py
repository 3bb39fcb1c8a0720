"""Identity domain exceptions."""

from edtech.domain.common.exceptions import (
    BusinessRuleViolationError,
    ConflictError,
    EntityNotFoundError,
)


class UserNotFoundError(EntityNotFoundError):
    """Raised when a user cannot be found."""

    def __init__(self, user_id: object) -> None:
        super().__init__("User", user_id)


class EmailAlreadyExistsError(ConflictError):
    """Raised when attempting to register with an email that already exists."""

    def __init__(self, email: str) -> None:
        super().__init__("User", "email", email)
        self.email = email


class RoleTransitionNotAllowedError(BusinessRuleViolationError):
    """Raised when the business rules reject a role change."""

    def __init__(self, from_role: str, to_role: str, reasons: list[str] | None = None) -> None:
        message = f"Role transition from {from_role} to {to_role} is not allowed"
        if reasons:
            message = f"{message}: {', '.join(reasons)}"
        super().__init__("role_transition", message)
        self.from_role = from_role
        self.to_role = to_role
        self.reasons = reasons or []


class AccountLockedError(BusinessRuleViolationError):
    """Raised when a login is attempted on a locked account."""

    def __init__(self, user_id: object) -> None:
        super().__init__("account_locked", f"Account {user_id} is locked")
        self.user_id = user_id
