"""
Domain layer exceptions.

These exceptions represent domain-level errors that occur when
business rules are violated or domain invariants are broken.
They should be caught and translated to appropriate responses
by the infrastructure layer.
"""

from dataclasses import dataclass


class DomainError(Exception):
    """
    Base exception for all domain errors.

    All domain exceptions should inherit from this class
    so they can be caught and handled uniformly.
    """

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


@dataclass(frozen=True)
class FieldError:
    """A single violated field."""

    field: str
    message: str


class ValidationError(DomainError):
    """
    Raised when domain validation fails.

    Carries every violated field, not just the first one found.

    Example: Invalid email format, empty first name, negative rate, etc.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: object = None,
        errors: list[FieldError] | None = None,
    ) -> None:
        if errors is None:
            errors = [FieldError(field, message)] if field else []
        details: dict[str, object] = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value
        if len(errors) > 1:
            details["errors"] = [{"field": e.field, "message": e.message} for e in errors]
        super().__init__(message, details)
        self.field = field
        self.value = value
        self.errors = errors

    @property
    def fields(self) -> list[str]:
        """Names of the violated fields, in the order they were found."""
        return [error.field for error in self.errors]

    @classmethod
    def from_errors(cls, errors: list[FieldError]) -> "ValidationError":
        """Build a single error out of several field errors."""
        if len(errors) == 1:
            return cls(errors[0].message, field=errors[0].field, errors=errors)
        names = ", ".join(error.field for error in errors)
        return cls(f"Invalid fields: {names}", errors=errors)


class InvalidTransitionError(DomainError):
    """
    Raised when a status change has no edge in the transition table.

    Callers treat it like a validation error: the input has to change.
    """

    def __init__(self, aggregate: str, from_status: object, to_status: object) -> None:
        message = f"{aggregate} cannot transition from {from_status} to {to_status}"
        super().__init__(
            message,
            {"aggregate": aggregate, "from_status": str(from_status), "to_status": str(to_status)},
        )
        self.aggregate = aggregate
        self.from_status = from_status
        self.to_status = to_status


class EntityNotFoundError(DomainError):
    """
    Raised when an entity cannot be found.

    Example: Looking up a tutor by ID that doesn't exist.
    """

    def __init__(self, entity_type: str, entity_id: object) -> None:
        message = f"{entity_type} with id {entity_id} not found"
        super().__init__(message, {"entity_type": entity_type, "entity_id": str(entity_id)})
        self.entity_type = entity_type
        self.entity_id = entity_id


class ConflictError(DomainError):
    """
    Raised when a uniqueness constraint is violated at save time.

    Example: Registering a second user with an email that is already taken.
    """

    def __init__(self, entity_type: str, field: str, value: object) -> None:
        message = f"{entity_type} with {field} {value} already exists"
        super().__init__(message, {"entity_type": entity_type, "field": field, "value": value})
        self.entity_type = entity_type
        self.field = field
        self.value = value


class BusinessRuleViolationError(DomainError):
    """
    Raised when a business rule is violated.

    Example: A student asking to become a tutor before the waiting period.
    """

    def __init__(self, rule: str, message: str | None = None) -> None:
        msg = message or f"Business rule violated: {rule}"
        super().__init__(msg, {"rule": rule})
        self.rule = rule


class InvariantViolationError(DomainError):
    """
    Raised when an aggregate invariant is violated.

    Invariants are rules that must always be true for an aggregate
    to be in a valid state.

    Example: Editing a matching request that has already been matched.
    """

    def __init__(self, aggregate: str, invariant: str) -> None:
        message = f"Invariant violation in {aggregate}: {invariant}"
        super().__init__(message, {"aggregate": aggregate, "invariant": invariant})
        self.aggregate = aggregate
        self.invariant = invariant
