"""Read-side use cases for tutors."""

from dataclasses import dataclass

from edtech.application.common.pagination import PaginatedResult, Pagination
from edtech.application.identity.protocols.user_repository import UserRepositoryProtocol
from edtech.application.matching.protocols.tutor_repository import TutorRepositoryProtocol
from edtech.domain.common.value_objects import TutorId, UserId
from edtech.domain.identity.exceptions import UserNotFoundError
from edtech.domain.identity.rules import (
    DEFAULT_POLICY,
    TutorTier,
    UserPolicy,
    get_tutor_tier,
    has_premium_access,
)
from edtech.domain.matching.entities.tutor import Tutor
from edtech.domain.matching.exceptions import TutorNotFoundError


@dataclass
class TutorStanding:
    """A tutor's tier and the numbers it was computed from."""

    tutor_id: str
    tier: TutorTier
    reputation_score: float
    cancellation_rate: float
    completed_sessions: int
    premium_access: bool


class TutorQueryUseCase:
    def __init__(
        self,
        tutor_repository: TutorRepositoryProtocol,
        user_repository: UserRepositoryProtocol,
        policy: UserPolicy = DEFAULT_POLICY,
    ) -> None:
        self.tutor_repository = tutor_repository
        self.user_repository = user_repository
        self.policy = policy

    def get_tutor(self, tutor_id: str) -> Tutor:
        tutor = self.tutor_repository.find_by_id(TutorId.from_string(tutor_id))
        if tutor is None:
            raise TutorNotFoundError(tutor_id)
        return tutor

    def get_tutor_by_user(self, user_id: str) -> Tutor:
        tutor = self.tutor_repository.find_by_user_id(UserId.from_string(user_id))
        if tutor is None:
            raise TutorNotFoundError(f"user {user_id}")
        return tutor

    def list_tutors(self, pagination: Pagination) -> PaginatedResult[Tutor]:
        page = self.tutor_repository.find_all(pagination.offset, pagination.limit)
        return PaginatedResult.from_page(page, pagination)

    def get_standing(self, tutor_id: str) -> TutorStanding:
        """
        Compute the tutor's tier and premium access.

        Raises:
            TutorNotFoundError: If the tutor does not exist
            UserNotFoundError: If the owning user no longer exists
        """
        tutor = self.get_tutor(tutor_id)
        user = self.user_repository.find_by_id(tutor.user_id)
        if user is None:
            raise UserNotFoundError(tutor.user_id)

        score = tutor.reputation_score
        return TutorStanding(
            tutor_id=tutor_id,
            tier=get_tutor_tier(
                tutor.completed_sessions, score, tutor.cancellation_rate, self.policy
            ),
            reputation_score=score,
            cancellation_rate=tutor.cancellation_rate,
            completed_sessions=tutor.completed_sessions,
            premium_access=has_premium_access(user, score, self.policy),
        )

    def delete_tutor(self, tutor_id: str) -> None:
        if not self.tutor_repository.delete(TutorId.from_string(tutor_id)):
            raise TutorNotFoundError(tutor_id)
