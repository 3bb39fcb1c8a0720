"""Matching domain layer: tutors and matching requests."""

from edtech.domain.matching.entities import MatchingRequest, Tutor
from edtech.domain.matching.exceptions import (
    MatchingRequestNotFoundError,
    TutorAlreadyExistsError,
    TutorNotEligibleError,
    TutorNotFoundError,
)
from edtech.domain.matching.value_objects import (
    ExperienceLevel,
    MatchingRequestStatus,
    Subject,
    TutorStatus,
)

__all__ = [
    "ExperienceLevel",
    "MatchingRequest",
    "MatchingRequestNotFoundError",
    "MatchingRequestStatus",
    "Subject",
    "Tutor",
    "TutorAlreadyExistsError",
    "TutorNotEligibleError",
    "TutorNotFoundError",
    "TutorStatus",
]
