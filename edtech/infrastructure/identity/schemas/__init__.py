"""Identity context schemas."""

from edtech.infrastructure.identity.schemas.user_schemas import (
    LoginAttemptRequest,
    LoginAttemptResponse,
    RoleChangeRequest,
    StatusChangeRequest,
    TutorEligibilityResponse,
    UserCreateRequest,
    UserResponse,
    UserUpdateRequest,
)

__all__ = [
    "LoginAttemptRequest",
    "LoginAttemptResponse",
    "RoleChangeRequest",
    "StatusChangeRequest",
    "TutorEligibilityResponse",
    "UserCreateRequest",
    "UserResponse",
    "UserUpdateRequest",
]
