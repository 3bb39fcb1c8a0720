"""Tests for the tutor and matching request use cases."""

from datetime import timedelta
from decimal import Decimal

import pytest

from edtech.application.common.pagination import Pagination
from edtech.application.matching.use_cases import (
    ChangeTutorStatusUseCase,
    CreateMatchingRequestUseCase,
    CreateTutorUseCase,
    MatchingRequestQueryUseCase,
    MatchingRequestUseCase,
    TutorActivityUseCase,
    TutorQueryUseCase,
    UpdateTutorProfileUseCase,
)
from edtech.domain.common.exceptions import (
    BusinessRuleViolationError,
    InvalidTransitionError,
    InvariantViolationError,
    ValidationError,
)
from edtech.domain.identity.exceptions import UserNotFoundError
from edtech.domain.identity.rules import TutorTier
from edtech.domain.matching.exceptions import (
    MatchingRequestNotFoundError,
    TutorAlreadyExistsError,
    TutorNotEligibleError,
    TutorNotFoundError,
)
from edtech.domain.matching.rules import MatchingPolicy
from edtech.domain.matching.value_objects import MatchingRequestStatus, TutorStatus

TUTOR_PROFILE = {
    "bio": "Patient maths tutor",
    "subjects": ["mathematics", "physics"],
    "experience_level": "advanced",
    "hourly_rate": "45.5",
    "languages": ["English"],
    "education": "MSc Mathematics",
}


@pytest.fixture
def tutor_owner(user_repository, make_user):
    return user_repository.save(make_user(email="tutor@example.com", role="TUTOR"))


@pytest.fixture
def student(user_repository, make_user):
    return user_repository.save(make_user(email="student@example.com"))


@pytest.fixture
def active_tutor(tutor_repository, tutor_owner, make_tutor):
    return tutor_repository.save(make_tutor(tutor_owner.id))


@pytest.fixture
def open_request(matching_request_repository, user_repository, dispatcher, event_sink, student):
    use_case = CreateMatchingRequestUseCase(
        matching_request_repository, user_repository, dispatcher
    )
    request = use_case.create_request(str(student.id), "MATHEMATICS", max_hourly_rate="50")
    event_sink.clear()
    return request


@pytest.fixture
def matching(matching_request_repository, tutor_repository, dispatcher):
    return MatchingRequestUseCase(matching_request_repository, tutor_repository, dispatcher)


class TestCreateTutor:
    def test_creates_pending_profile(
        self, tutor_repository, user_repository, dispatcher, event_sink, tutor_owner
    ):
        use_case = CreateTutorUseCase(tutor_repository, user_repository, dispatcher)

        tutor = use_case.create_tutor(str(tutor_owner.id), **TUTOR_PROFILE)

        assert tutor.status is TutorStatus.PENDING_APPROVAL
        assert tutor.hourly_rate == Decimal("45.50")
        assert tutor.currency == "USD"
        assert event_sink.event_types() == ["TutorCreated"]

    def test_one_profile_per_user(
        self, tutor_repository, user_repository, dispatcher, tutor_owner
    ):
        use_case = CreateTutorUseCase(tutor_repository, user_repository, dispatcher)
        use_case.create_tutor(str(tutor_owner.id), **TUTOR_PROFILE)

        with pytest.raises(TutorAlreadyExistsError):
            use_case.create_tutor(str(tutor_owner.id), **TUTOR_PROFILE)

    def test_students_cannot_own_a_profile(
        self, tutor_repository, user_repository, dispatcher, student
    ):
        use_case = CreateTutorUseCase(tutor_repository, user_repository, dispatcher)

        with pytest.raises(BusinessRuleViolationError) as exc_info:
            use_case.create_tutor(str(student.id), **TUTOR_PROFILE)
        assert exc_info.value.rule == "tutor_role_required"

    def test_invalid_fields_are_reported_together(
        self, tutor_repository, user_repository, dispatcher, tutor_owner
    ):
        use_case = CreateTutorUseCase(tutor_repository, user_repository, dispatcher)
        profile = {**TUTOR_PROFILE, "subjects": [], "hourly_rate": "-1", "bio": " "}

        with pytest.raises(ValidationError) as exc_info:
            use_case.create_tutor(str(tutor_owner.id), **profile)
        assert {"bio", "subjects", "hourly_rate"} <= set(exc_info.value.fields)


class TestTutorLifecycle:
    def test_approve_then_suspend(
        self, tutor_repository, dispatcher, event_sink, tutor_owner, make_tutor
    ):
        tutor = tutor_repository.save(make_tutor(tutor_owner.id, active=False))
        use_case = ChangeTutorStatusUseCase(tutor_repository, dispatcher)

        use_case.approve(str(tutor.id), actor_id="admin-1")
        suspended = use_case.suspend(str(tutor.id), actor_id="admin-1")

        assert suspended.status is TutorStatus.SUSPENDED
        assert event_sink.event_types() == ["TutorStatusChanged", "TutorStatusChanged"]

    def test_pending_tutor_cannot_be_suspended(
        self, tutor_repository, dispatcher, tutor_owner, make_tutor
    ):
        tutor = tutor_repository.save(make_tutor(tutor_owner.id, active=False))
        use_case = ChangeTutorStatusUseCase(tutor_repository, dispatcher)

        with pytest.raises(InvalidTransitionError):
            use_case.suspend(str(tutor.id), actor_id="admin-1")

    def test_profile_update_and_no_op(
        self, tutor_repository, dispatcher, event_sink, active_tutor
    ):
        use_case = UpdateTutorProfileUseCase(tutor_repository, dispatcher)

        updated = use_case.update_profile(
            str(active_tutor.id), {"hourly_rate": "55"}, actor_id="admin-1"
        )
        use_case.update_profile(str(active_tutor.id), {"hourly_rate": "55"}, actor_id="admin-1")

        assert updated.hourly_rate == Decimal("55.00")
        assert event_sink.event_types() == ["TutorProfileUpdated"]

    def test_unknown_tutor(self, tutor_repository, dispatcher):
        use_case = UpdateTutorProfileUseCase(tutor_repository, dispatcher)
        with pytest.raises(TutorNotFoundError):
            use_case.update_profile(
                "00000000-0000-0000-0000-000000000000", {"bio": "x"}, actor_id="admin-1"
            )


class TestTutorActivity:
    def test_rating_update_skips_unchanged_values(
        self, tutor_repository, dispatcher, event_sink, active_tutor
    ):
        use_case = TutorActivityUseCase(tutor_repository, dispatcher)

        use_case.update_rating(str(active_tutor.id), "4.5", 10)
        tutor = use_case.update_rating(str(active_tutor.id), Decimal("4.50"), 10)

        assert tutor.rating == Decimal("4.50")
        assert event_sink.event_types() == ["TutorRatingUpdated"]

    def test_rating_out_of_range(self, tutor_repository, dispatcher, active_tutor):
        use_case = TutorActivityUseCase(tutor_repository, dispatcher)
        with pytest.raises(ValidationError):
            use_case.update_rating(str(active_tutor.id), "5.5", 1)

    def test_sessions_feed_cancellation_rate(self, tutor_repository, dispatcher, active_tutor):
        use_case = TutorActivityUseCase(tutor_repository, dispatcher)

        for completed in (True, True, True, False):
            tutor = use_case.record_session(str(active_tutor.id), completed)

        assert tutor.completed_sessions == 3
        assert tutor.cancelled_sessions == 1
        assert tutor.cancellation_rate == pytest.approx(0.25)


class TestTutorQueries:
    def test_standing(self, tutor_repository, user_repository, tutor_owner, make_tutor):
        tutor = make_tutor(tutor_owner.id)
        tutor.update_rating("4.75", 40)
        for _ in range(60):
            tutor.record_session(True)
        tutor.drain_events()
        tutor_repository.save(tutor)
        use_case = TutorQueryUseCase(tutor_repository, user_repository)

        standing = use_case.get_standing(str(tutor.id))

        assert standing.tier is TutorTier.EXPERT
        assert standing.reputation_score == pytest.approx(95.0)
        assert standing.premium_access

    def test_standing_requires_owner(
        self, tutor_repository, user_repository, tutor_owner, active_tutor
    ):
        user_repository.delete(tutor_owner.id)
        use_case = TutorQueryUseCase(tutor_repository, user_repository)

        with pytest.raises(UserNotFoundError):
            use_case.get_standing(str(active_tutor.id))

    def test_lookup_by_user(self, tutor_repository, user_repository, tutor_owner, active_tutor):
        use_case = TutorQueryUseCase(tutor_repository, user_repository)

        assert use_case.get_tutor_by_user(str(tutor_owner.id)).id == active_tutor.id
        assert use_case.list_tutors(Pagination()).total == 1


class TestCreateMatchingRequest:
    def test_opens_pending_request_with_policy_ttl(
        self, matching_request_repository, user_repository, dispatcher, event_sink, student
    ):
        use_case = CreateMatchingRequestUseCase(
            matching_request_repository,
            user_repository,
            dispatcher,
            policy=MatchingPolicy(request_ttl_days=3),
        )

        request = use_case.create_request(str(student.id), "physics")

        assert request.status is MatchingRequestStatus.PENDING
        assert request.expires_at - request.created_at == timedelta(days=3)
        assert event_sink.event_types() == ["MatchingRequestCreated"]

    def test_inactive_student(
        self, matching_request_repository, user_repository, dispatcher, make_user
    ):
        pending = user_repository.save(make_user(active=False))
        use_case = CreateMatchingRequestUseCase(
            matching_request_repository, user_repository, dispatcher
        )

        with pytest.raises(BusinessRuleViolationError) as exc_info:
            use_case.create_request(str(pending.id), "MATHEMATICS")
        assert exc_info.value.rule == "active_account_required"

    def test_unknown_student(self, matching_request_repository, user_repository, dispatcher):
        use_case = CreateMatchingRequestUseCase(
            matching_request_repository, user_repository, dispatcher
        )
        with pytest.raises(UserNotFoundError):
            use_case.create_request("00000000-0000-0000-0000-000000000000", "MATHEMATICS")


class TestMatchingRequestLifecycle:
    def test_match_with_eligible_tutor(self, matching, event_sink, open_request, active_tutor):
        matched = matching.match_with_tutor(
            str(open_request.id), str(active_tutor.id), actor_id="admin-1"
        )

        assert matched.status is MatchingRequestStatus.MATCHED
        assert matched.matched_tutor_id == active_tutor.id
        assert event_sink.event_types() == ["MatchingRequestMatched"]

    def test_tutor_over_budget_is_not_eligible(
        self, matching, tutor_repository, tutor_owner, open_request, make_tutor
    ):
        pricey = tutor_repository.save(make_tutor(tutor_owner.id, hourly_rate="80"))

        with pytest.raises(TutorNotEligibleError) as exc_info:
            matching.match_with_tutor(str(open_request.id), str(pricey.id), actor_id="admin-1")
        assert exc_info.value.reasons == ["hourly rate exceeds the request budget"]

    def test_overdue_request_is_expired_instead(
        self, matching, matching_request_repository, event_sink, open_request, active_tutor
    ):
        later = open_request.expires_at + timedelta(minutes=1)

        with pytest.raises(BusinessRuleViolationError) as exc_info:
            matching.match_with_tutor(
                str(open_request.id), str(active_tutor.id), actor_id="admin-1", now=later
            )

        assert exc_info.value.rule == "request_expired"
        stored = matching_request_repository.find_by_id(open_request.id)
        assert stored.status is MatchingRequestStatus.EXPIRED
        assert event_sink.event_types() == ["MatchingRequestStatusChanged"]

    def test_cancel_is_terminal(self, matching, open_request, active_tutor):
        cancelled = matching.cancel_request(
            str(open_request.id), actor_id="admin-1", reason="Found a tutor elsewhere"
        )

        assert cancelled.status is MatchingRequestStatus.CANCELLED
        with pytest.raises(InvalidTransitionError):
            matching.match_with_tutor(
                str(open_request.id), str(active_tutor.id), actor_id="admin-1"
            )
        with pytest.raises(InvariantViolationError):
            matching.update_request(str(open_request.id), {"description": "x"}, actor_id="a")

    def test_expire_overdue(self, matching, open_request):
        assert matching.expire_overdue() == []

        expired = matching.expire_overdue(now=open_request.expires_at + timedelta(seconds=1))

        assert [request.id for request in expired] == [open_request.id]
        assert expired[0].status is MatchingRequestStatus.EXPIRED

    def test_unknown_request(self, matching):
        with pytest.raises(MatchingRequestNotFoundError):
            matching.cancel_request("00000000-0000-0000-0000-000000000000", actor_id="admin-1")


class TestMatchingRequestQueries:
    def test_eligible_tutors_filters_by_rules(
        self,
        matching_request_repository,
        tutor_repository,
        user_repository,
        make_user,
        make_tutor,
        open_request,
        active_tutor,
    ):
        other = user_repository.save(make_user(email="other@example.com", role="TUTOR"))
        tutor_repository.save(make_tutor(other.id, active=False))
        use_case = MatchingRequestQueryUseCase(matching_request_repository, tutor_repository)

        eligible = use_case.find_eligible_tutors(str(open_request.id))

        assert [tutor.id for tutor in eligible] == [active_tutor.id]

    def test_list_for_student_and_delete(
        self, matching_request_repository, tutor_repository, student, open_request
    ):
        use_case = MatchingRequestQueryUseCase(matching_request_repository, tutor_repository)

        assert [r.id for r in use_case.list_for_student(str(student.id))] == [open_request.id]

        use_case.delete_request(str(open_request.id))
        with pytest.raises(MatchingRequestNotFoundError):
            use_case.get_request(str(open_request.id))
