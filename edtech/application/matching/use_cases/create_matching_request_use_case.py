"""Use case for opening matching requests."""

from decimal import Decimal

import structlog

from edtech.application.common.event_dispatcher import EventDispatcher
from edtech.application.identity.protocols.user_repository import UserRepositoryProtocol
from edtech.application.matching.protocols.matching_request_repository import (
    MatchingRequestRepositoryProtocol,
)
from edtech.domain.common.exceptions import BusinessRuleViolationError
from edtech.domain.common.value_objects import UserId
from edtech.domain.identity.exceptions import UserNotFoundError
from edtech.domain.matching.entities.matching_request import MatchingRequest
from edtech.domain.matching.rules import DEFAULT_MATCHING_POLICY, MatchingPolicy

logger = structlog.get_logger(__name__)


class CreateMatchingRequestUseCase:
    """Use case for a student asking to be matched with a tutor."""

    def __init__(
        self,
        matching_request_repository: MatchingRequestRepositoryProtocol,
        user_repository: UserRepositoryProtocol,
        event_dispatcher: EventDispatcher,
        policy: MatchingPolicy = DEFAULT_MATCHING_POLICY,
    ) -> None:
        self.matching_request_repository = matching_request_repository
        self.user_repository = user_repository
        self.event_dispatcher = event_dispatcher
        self.policy = policy

    def create_request(
        self,
        student_id: str,
        subject: str,
        preferred_experience_level: str | None = None,
        max_hourly_rate: Decimal | float | str | None = None,
        preferred_languages: list[str] | None = None,
        description: str | None = None,
    ) -> MatchingRequest:
        """
        Open a PENDING request that expires after the configured TTL.

        Raises:
            UserNotFoundError: If the student does not exist
            BusinessRuleViolationError: If the student account is not active
            ValidationError: If any field is invalid
        """
        owner_id = UserId.from_string(student_id)
        student = self.user_repository.find_by_id(owner_id)
        if student is None:
            raise UserNotFoundError(student_id)
        if not student.is_active:
            raise BusinessRuleViolationError(
                "active_account_required", "Only active users can request a tutor"
            )

        request = MatchingRequest.create(
            student_id=owner_id,
            subject=subject,
            preferred_experience_level=preferred_experience_level,
            max_hourly_rate=max_hourly_rate,
            preferred_languages=preferred_languages,
            description=description,
            ttl_days=self.policy.request_ttl_days,
        )
        saved = self.matching_request_repository.save(request)
        self.event_dispatcher.dispatch(request)

        logger.info(
            "matching_request_created",
            request_id=str(request.id),
            student_id=student_id,
            subject=request.subject.value,
        )
        return saved
