"""Read-side use cases for users."""

from dataclasses import dataclass

import structlog

from edtech.application.common.pagination import PaginatedResult, Pagination
from edtech.application.identity.protocols.user_repository import UserRepositoryProtocol
from edtech.domain.common.value_objects import UserId
from edtech.domain.identity.entities.user import User
from edtech.domain.identity.exceptions import UserNotFoundError
from edtech.domain.identity.rules import (
    DEFAULT_POLICY,
    UserPolicy,
    can_become_tutor,
    get_account_age_days,
    is_profile_complete,
    missing_tutor_requirements,
)

logger = structlog.get_logger(__name__)


@dataclass
class TutorEligibility:
    """Whether a user may become a tutor, and why not."""

    user_id: str
    eligible: bool
    account_age_days: int
    profile_complete: bool
    reasons: list[str]


class UserQueryUseCase:
    def __init__(
        self,
        user_repository: UserRepositoryProtocol,
        policy: UserPolicy = DEFAULT_POLICY,
    ) -> None:
        self.user_repository = user_repository
        self.policy = policy

    def get_user(self, user_id: str) -> User:
        """
        Raises:
            UserNotFoundError: If the user does not exist
        """
        user = self.user_repository.find_by_id(UserId.from_string(user_id))
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def list_users(self, pagination: Pagination) -> PaginatedResult[User]:
        page = self.user_repository.find_all(pagination.offset, pagination.limit)
        return PaginatedResult.from_page(page, pagination)

    def check_tutor_eligibility(self, user_id: str) -> TutorEligibility:
        user = self.get_user(user_id)
        return TutorEligibility(
            user_id=user_id,
            eligible=can_become_tutor(user, policy=self.policy),
            account_age_days=get_account_age_days(user),
            profile_complete=is_profile_complete(user),
            reasons=missing_tutor_requirements(user, self.policy),
        )

    def delete_user(self, user_id: str) -> None:
        """
        Remove a user permanently (administrative path).

        Raises:
            UserNotFoundError: If the user does not exist
        """
        if not self.user_repository.delete(UserId.from_string(user_id)):
            raise UserNotFoundError(user_id)
        logger.info("user_deleted", user_id=user_id)
