"""Matching domain exceptions."""

from edtech.domain.common.exceptions import (
    BusinessRuleViolationError,
    ConflictError,
    EntityNotFoundError,
)


class TutorNotFoundError(EntityNotFoundError):
    """Raised when a tutor profile cannot be found."""

    def __init__(self, tutor_id: object) -> None:
        super().__init__("Tutor", tutor_id)


class TutorAlreadyExistsError(ConflictError):
    """Raised when a user already has a tutor profile."""

    def __init__(self, user_id: object) -> None:
        super().__init__("Tutor", "user_id", str(user_id))
        self.user_id = user_id


class MatchingRequestNotFoundError(EntityNotFoundError):
    def __init__(self, request_id: object) -> None:
        super().__init__("MatchingRequest", request_id)


class TutorNotEligibleError(BusinessRuleViolationError):
    """Raised when a tutor cannot take a matching request."""

    def __init__(self, tutor_id: object, reasons: list[str]) -> None:
        message = f"Tutor {tutor_id} is not eligible"
        if reasons:
            message = f"{message}: {', '.join(reasons)}"
        super().__init__("tutor_eligibility", message)
        self.tutor_id = tutor_id
        self.reasons = reasons
