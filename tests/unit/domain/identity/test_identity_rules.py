"""Tests for identity business rules."""

from datetime import UTC, datetime, timedelta

import pytest

from edtech.domain.common.exceptions import ValidationError
from edtech.domain.common.value_objects import Email
from edtech.domain.identity.rules import (
    TutorTier,
    UserPolicy,
    can_become_tutor,
    can_change_email,
    can_transition_role,
    days_since,
    get_account_age_days,
    get_tutor_tier,
    has_premium_access,
    is_profile_complete,
    missing_tutor_requirements,
    should_lock_account,
)
from edtech.domain.identity.value_objects import UserRole


class TestDaysSince:
    def test_counts_whole_days(self):
        now = datetime(2024, 1, 10, 12, tzinfo=UTC)
        assert days_since(datetime(2024, 1, 3, 13, tzinfo=UTC), now) == 6
        assert days_since(datetime(2024, 1, 3, 12, tzinfo=UTC), now) == 7

    def test_account_age(self, make_user):
        assert get_account_age_days(make_user(age_days=3)) == 3


class TestCanBecomeTutor:
    def test_old_enough_active_student(self, make_user):
        assert can_become_tutor(make_user(age_days=7))

    def test_too_new(self, make_user):
        assert not can_become_tutor(make_user(age_days=6))

    def test_explicit_min_days_overrides_policy(self, make_user):
        assert can_become_tutor(make_user(age_days=2), min_days=2)

    def test_inactive_student(self, make_user):
        assert not can_become_tutor(make_user(age_days=30, active=False))

    def test_only_students(self, make_user):
        assert not can_become_tutor(make_user(role="TUTOR", age_days=30))

    def test_policy_waiting_period(self, make_user):
        policy = UserPolicy(min_registration_days_for_tutor=0)
        assert can_become_tutor(make_user(), policy=policy)


class TestCanTransitionRole:
    def test_student_to_tutor_follows_waiting_period(self, make_user):
        assert can_transition_role(
            UserRole.STUDENT, UserRole.TUTOR, make_user(age_days=10)
        )
        assert not can_transition_role(UserRole.STUDENT, UserRole.TUTOR, make_user())

    def test_tutor_back_to_student(self, make_user):
        user = make_user(role="TUTOR")
        assert can_transition_role(UserRole.TUTOR, UserRole.STUDENT, user)

    @pytest.mark.parametrize("target", [UserRole.ADMIN, UserRole.SUPERADMIN])
    def test_never_into_privileged_roles(self, make_user, target):
        assert not can_transition_role(UserRole.STUDENT, target, make_user(age_days=30))

    def test_never_out_of_privileged_roles(self, make_user):
        user = make_user(role="ADMIN")
        assert not can_transition_role(UserRole.ADMIN, UserRole.STUDENT, user)

    def test_same_role(self, make_user):
        assert not can_transition_role(UserRole.STUDENT, UserRole.STUDENT, make_user())

    def test_inactive_user(self, make_user):
        user = make_user(role="TUTOR", active=False)
        assert not can_transition_role(UserRole.TUTOR, UserRole.STUDENT, user)


class TestCanChangeEmail:
    def test_active_user_new_address(self, make_user):
        assert can_change_email(make_user(), Email("new@example.com"))

    def test_same_address(self, make_user):
        assert not can_change_email(make_user(), Email("ADA@example.com"))

    def test_inactive_user(self, make_user):
        assert not can_change_email(make_user(active=False), Email("new@example.com"))

    def test_cooldown(self, make_user):
        user = make_user()
        now = datetime.now(UTC)
        recent = now - timedelta(days=29)
        old = now - timedelta(days=30)
        assert not can_change_email(user, Email("new@example.com"), recent, now=now)
        assert can_change_email(user, Email("new@example.com"), old, now=now)


class TestShouldLockAccount:
    def test_below_limit(self, make_user):
        assert not should_lock_account(make_user(), 2)

    def test_at_limit(self, make_user):
        assert should_lock_account(make_user(), 3)

    def test_inactive_account_is_locked(self, make_user):
        assert should_lock_account(make_user(active=False), 0)

    def test_policy_limit(self, make_user):
        assert not should_lock_account(make_user(), 3, UserPolicy(max_login_attempts=5))


class TestPremiumAccess:
    def test_reputation_threshold(self, make_user):
        user = make_user()
        assert has_premium_access(user, 75)
        assert not has_premium_access(user, 74.9)

    def test_privileged_roles_always_have_access(self, make_user):
        assert has_premium_access(make_user(role="SUPERADMIN"), 0)


class TestTutorTier:
    def test_junior_by_default(self):
        assert get_tutor_tier(10, 95, 0.0) is TutorTier.JUNIOR

    def test_senior(self):
        assert get_tutor_tier(50, 80, 0.1) is TutorTier.SENIOR

    def test_expert(self):
        assert get_tutor_tier(50, 90, 0.1) is TutorTier.EXPERT

    def test_high_cancellation_rate_forces_junior(self):
        assert get_tutor_tier(200, 99, 0.16) is TutorTier.JUNIOR

    @pytest.mark.parametrize(
        ("sessions", "score", "rate"),
        [(-1, 50, 0.0), (10, 101, 0.0), (10, -1, 0.0), (10, 50, 1.5)],
    )
    def test_out_of_range_inputs(self, sessions, score, rate):
        with pytest.raises(ValidationError):
            get_tutor_tier(sessions, score, rate)


class TestProfileAndRequirements:
    def test_profile_complete_needs_active_account(self, make_user):
        assert is_profile_complete(make_user())
        assert not is_profile_complete(make_user(active=False))

    def test_missing_requirements_lists_every_reason(self, make_user):
        reasons = missing_tutor_requirements(make_user(role="TUTOR", active=False))
        assert reasons == [
            "account must be active",
            "only students can become tutors",
            "account must be at least 7 days old",
        ]

    def test_no_reasons_when_eligible(self, make_user):
        assert missing_tutor_requirements(make_user(age_days=8)) == []


class TestUserPolicy:
    def test_rejects_inverted_score_thresholds(self):
        with pytest.raises(ValidationError):
            UserPolicy(min_score_for_senior_tutor=90, min_score_for_expert_tutor=80)

    def test_rejects_zero_login_attempts(self):
        with pytest.raises(ValidationError):
            UserPolicy(max_login_attempts=0)
