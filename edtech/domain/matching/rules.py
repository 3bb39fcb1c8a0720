"""
Business rules for matching students with tutors.

Like the identity rules these are pure: they inspect aggregates and
return answers, they never mutate or raise for a "no".
"""

from dataclasses import dataclass

from edtech.domain.common.exceptions import ValidationError
from edtech.domain.matching.entities.matching_request import DEFAULT_TTL_DAYS, MatchingRequest
from edtech.domain.matching.entities.tutor import Tutor


@dataclass(frozen=True)
class MatchingPolicy:
    """Tunable settings for matching requests."""

    request_ttl_days: int = DEFAULT_TTL_DAYS

    def __post_init__(self) -> None:
        if self.request_ttl_days < 1:
            raise ValidationError(
                "request_ttl_days must be at least 1", field="request_ttl_days"
            )


DEFAULT_MATCHING_POLICY = MatchingPolicy()


def eligibility_problems(tutor: Tutor, request: MatchingRequest) -> list[str]:
    """Reasons ``tutor`` cannot take ``request`` (empty when eligible)."""
    problems: list[str] = []
    if not tutor.is_active:
        problems.append("tutor is not active")
    if not tutor.teaches(request.subject):
        problems.append(f"tutor does not teach {request.subject.value}")
    if request.max_hourly_rate is not None and tutor.hourly_rate > request.max_hourly_rate:
        problems.append("hourly rate exceeds the request budget")
    if request.preferred_languages:
        wanted = {language.casefold() for language in request.preferred_languages}
        spoken = {language.casefold() for language in tutor.languages}
        if not wanted & spoken:
            problems.append("tutor does not speak a preferred language")
    if request.preferred_experience_level is not None and not tutor.experience_level.meets(
        request.preferred_experience_level
    ):
        problems.append("tutor experience level is below the preferred level")
    return problems


def is_tutor_eligible(tutor: Tutor, request: MatchingRequest) -> bool:
    return not eligibility_problems(tutor, request)
