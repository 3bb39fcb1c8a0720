"""Use cases that move a matching request through its lifecycle."""

from collections.abc import Mapping
from datetime import UTC, datetime

import structlog

from edtech.application.common.event_dispatcher import EventDispatcher
from edtech.application.matching.protocols.matching_request_repository import (
    MatchingRequestRepositoryProtocol,
)
from edtech.application.matching.protocols.tutor_repository import TutorRepositoryProtocol
from edtech.domain.common.exceptions import BusinessRuleViolationError
from edtech.domain.common.value_objects import MatchingRequestId, TutorId
from edtech.domain.matching.entities.matching_request import MatchingRequest
from edtech.domain.matching.exceptions import (
    MatchingRequestNotFoundError,
    TutorNotEligibleError,
    TutorNotFoundError,
)
from edtech.domain.matching.rules import eligibility_problems

logger = structlog.get_logger(__name__)


class MatchingRequestUseCase:
    def __init__(
        self,
        matching_request_repository: MatchingRequestRepositoryProtocol,
        tutor_repository: TutorRepositoryProtocol,
        event_dispatcher: EventDispatcher,
    ) -> None:
        self.matching_request_repository = matching_request_repository
        self.tutor_repository = tutor_repository
        self.event_dispatcher = event_dispatcher

    def update_request(
        self, request_id: str, changes: Mapping[str, object], actor_id: str
    ) -> MatchingRequest:
        """
        Edit a pending request; a no-op is not saved.

        Raises:
            MatchingRequestNotFoundError: If the request does not exist
            InvariantViolationError: If the request is no longer pending
            ValidationError: If any provided field is invalid
        """
        request = self._load(request_id)
        changed = request.update(changes, actor_id=actor_id)
        if not changed:
            return request
        return self._commit(request, "matching_request_updated", changed_fields=list(changed))

    def match_with_tutor(
        self,
        request_id: str,
        tutor_id: str,
        actor_id: str,
        now: datetime | None = None,
    ) -> MatchingRequest:
        """
        Pair a pending request with an eligible tutor.

        An overdue request is expired (and saved) instead of matched.

        Raises:
            MatchingRequestNotFoundError: If the request does not exist
            TutorNotFoundError: If the tutor does not exist
            BusinessRuleViolationError: If the request has expired
            TutorNotEligibleError: If the tutor does not fit the request
            InvalidTransitionError: If the request is not pending
        """
        current = now or datetime.now(UTC)
        request = self._load(request_id)
        if request.expire(current):
            self._commit(request, "matching_request_expired")
            raise BusinessRuleViolationError(
                "request_expired", f"Matching request {request_id} has expired"
            )

        tutor = self.tutor_repository.find_by_id(TutorId.from_string(tutor_id))
        if tutor is None:
            raise TutorNotFoundError(tutor_id)
        problems = eligibility_problems(tutor, request)
        if problems:
            raise TutorNotEligibleError(tutor_id, problems)

        request.match_with_tutor(tutor.id, actor_id=actor_id, now=current)
        return self._commit(request, "matching_request_matched", tutor_id=tutor_id)

    def cancel_request(
        self, request_id: str, actor_id: str, reason: str | None = None
    ) -> MatchingRequest:
        """
        Raises:
            MatchingRequestNotFoundError: If the request does not exist
            InvalidTransitionError: If the request is not pending
        """
        request = self._load(request_id)
        request.cancel(reason, actor_id=actor_id)
        return self._commit(request, "matching_request_cancelled")

    def expire_overdue(self, now: datetime | None = None) -> list[MatchingRequest]:
        """Expire every pending request past its deadline."""
        current = now or datetime.now(UTC)
        expired: list[MatchingRequest] = []
        for candidate in self.matching_request_repository.find_pending_expired(current):
            request = self.matching_request_repository.find_by_id(candidate.id, for_update=True)
            if request is None or not request.expire(current):
                continue
            expired.append(self._commit(request, "matching_request_expired"))
        logger.info("matching_requests_expired", count=len(expired))
        return expired

    def _load(self, request_id: str) -> MatchingRequest:
        request = self.matching_request_repository.find_by_id(
            MatchingRequestId.from_string(request_id), for_update=True
        )
        if request is None:
            raise MatchingRequestNotFoundError(request_id)
        return request

    def _commit(
        self, request: MatchingRequest, log_event: str, **context: object
    ) -> MatchingRequest:
        saved = self.matching_request_repository.save(request)
        self.event_dispatcher.dispatch(request)
        logger.info(
            log_event, request_id=str(request.id), status=request.status.value, **context
        )
        return saved
