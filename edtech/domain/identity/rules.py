"""
Business rules for the identity domain.

Pure functions over a user snapshot: no I/O, no logging, and a "no" is
returned as False (or the lowest tier), never raised. Every numeric
threshold comes from a UserPolicy so deployments can tune them.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum

from edtech.domain.common.exceptions import ValidationError
from edtech.domain.common.value_objects import Email
from edtech.domain.identity.entities.user import User
from edtech.domain.identity.value_objects import UserRole

SECONDS_PER_DAY = 86_400


@dataclass(frozen=True)
class UserPolicy:
    """Tunable thresholds for user and tutor business rules."""

    min_registration_days_for_tutor: int = 7
    max_login_attempts: int = 3
    email_change_cooldown_days: int = 30
    min_reputation_for_premium: float = 75
    min_sessions_for_senior_tutor: int = 50
    min_score_for_senior_tutor: float = 80
    min_score_for_expert_tutor: float = 90
    max_cancellation_rate: float = 0.15

    def __post_init__(self) -> None:
        if self.min_registration_days_for_tutor < 0:
            raise ValidationError(
                "min_registration_days_for_tutor cannot be negative",
                field="min_registration_days_for_tutor",
            )
        if self.max_login_attempts < 1:
            raise ValidationError(
                "max_login_attempts must be at least 1", field="max_login_attempts"
            )
        if not 0.0 <= self.max_cancellation_rate <= 1.0:
            raise ValidationError(
                "max_cancellation_rate must be between 0 and 1", field="max_cancellation_rate"
            )
        if self.min_score_for_expert_tutor < self.min_score_for_senior_tutor:
            raise ValidationError(
                "min_score_for_expert_tutor cannot be below min_score_for_senior_tutor",
                field="min_score_for_expert_tutor",
            )


DEFAULT_POLICY = UserPolicy()


class TutorTier(StrEnum):
    JUNIOR = "JUNIOR"
    SENIOR = "SENIOR"
    EXPERT = "EXPERT"


def days_since(moment: datetime, now: datetime | None = None) -> int:
    """Whole days elapsed since ``moment`` (floor division of the delta)."""
    current = now or datetime.now(UTC)
    return int((current - moment).total_seconds() // SECONDS_PER_DAY)


def get_account_age_days(user: User, now: datetime | None = None) -> int:
    return days_since(user.created_at, now)


def can_become_tutor(
    user: User,
    min_days: int | None = None,
    policy: UserPolicy = DEFAULT_POLICY,
    now: datetime | None = None,
) -> bool:
    """
    Check whether a student may be promoted to tutor.

    Requires an active student whose account is at least ``min_days``
    whole days old (defaults to the policy's waiting period).
    """
    if not user.is_active or not user.is_student:
        return False
    required_days = policy.min_registration_days_for_tutor if min_days is None else min_days
    return days_since(user.created_at, now) >= required_days


def can_transition_role(
    current: UserRole,
    target: UserRole,
    user: User,
    policy: UserPolicy = DEFAULT_POLICY,
    now: datetime | None = None,
) -> bool:
    """
    Check whether ``current -> target`` is an allowed self-service role change.

    Privileged roles are never changed here; those go through an
    administrative path.
    """
    if current is target:
        return False
    if current.is_privileged or target.is_privileged:
        return False
    if not user.is_active:
        return False
    if current is UserRole.STUDENT and target is UserRole.TUTOR:
        return can_become_tutor(user, policy=policy, now=now)
    return True


def can_change_email(
    user: User,
    new_email: Email,
    last_email_change: datetime | None = None,
    policy: UserPolicy = DEFAULT_POLICY,
    now: datetime | None = None,
) -> bool:
    if not user.is_active:
        return False
    if user.email == new_email:
        return False
    if last_email_change is not None:
        return days_since(last_email_change, now) >= policy.email_change_cooldown_days
    return True


def should_lock_account(
    user: User, failed_attempts: int, policy: UserPolicy = DEFAULT_POLICY
) -> bool:
    """An inactive account is always locked; otherwise lock at the attempt limit."""
    if not user.is_active:
        return True
    return failed_attempts >= policy.max_login_attempts


def has_premium_access(
    user: User, reputation_score: float, policy: UserPolicy = DEFAULT_POLICY
) -> bool:
    if user.role.is_privileged:
        return True
    return reputation_score >= policy.min_reputation_for_premium


def get_tutor_tier(
    completed_sessions: int,
    reputation_score: float,
    cancellation_rate: float,
    policy: UserPolicy = DEFAULT_POLICY,
) -> TutorTier:
    """
    Place a tutor in a tier from their track record.

    A cancellation rate above the policy limit forces JUNIOR regardless of
    the other counters.

    Args:
        completed_sessions: Number of sessions the tutor completed
        reputation_score: Score between 0 and 100
        cancellation_rate: Ratio between 0.0 and 1.0

    Raises:
        ValidationError: If a counter is outside its range
    """
    if completed_sessions < 0:
        raise ValidationError(
            "completed_sessions cannot be negative", field="completed_sessions"
        )
    if not 0 <= reputation_score <= 100:
        raise ValidationError(
            "reputation_score must be between 0 and 100", field="reputation_score"
        )
    if not 0.0 <= cancellation_rate <= 1.0:
        raise ValidationError(
            "cancellation_rate must be between 0 and 1", field="cancellation_rate"
        )

    if cancellation_rate > policy.max_cancellation_rate:
        return TutorTier.JUNIOR
    if (
        completed_sessions >= policy.min_sessions_for_senior_tutor
        and reputation_score >= policy.min_score_for_senior_tutor
    ):
        if reputation_score >= policy.min_score_for_expert_tutor:
            return TutorTier.EXPERT
        return TutorTier.SENIOR
    return TutorTier.JUNIOR


def is_profile_complete(user: User) -> bool:
    return bool(
        user.is_active and user.email.value and user.name.first_name and user.name.last_name
    )


def missing_tutor_requirements(
    user: User, policy: UserPolicy = DEFAULT_POLICY, now: datetime | None = None
) -> list[str]:
    """Human-readable reasons a user cannot become a tutor yet (empty if eligible)."""
    reasons: list[str] = []
    if not user.is_active:
        reasons.append("account must be active")
    if not user.is_student:
        reasons.append("only students can become tutors")
    age = days_since(user.created_at, now)
    if age < policy.min_registration_days_for_tutor:
        reasons.append(
            f"account must be at least {policy.min_registration_days_for_tutor} days old"
        )
    return reasons
