"""Use case for recording login outcomes and locking accounts."""

from dataclasses import dataclass

import structlog

from edtech.application.common.event_dispatcher import EventDispatcher
from edtech.application.identity.protocols.user_repository import UserRepositoryProtocol
from edtech.domain.common.value_objects import UserId
from edtech.domain.identity.entities.user import SYSTEM_ACTOR, User
from edtech.domain.identity.exceptions import AccountLockedError, UserNotFoundError
from edtech.domain.identity.rules import DEFAULT_POLICY, UserPolicy, should_lock_account

logger = structlog.get_logger(__name__)


@dataclass
class LoginAttemptResult:
    user: User
    failed_attempts: int
    locked: bool


class LoginAttemptUseCase:
    """
    Track login outcomes reported by the authentication provider.

    Credentials are checked elsewhere; this only keeps the counters and
    suspends the account once the failure limit is reached.
    """

    def __init__(
        self,
        user_repository: UserRepositoryProtocol,
        event_dispatcher: EventDispatcher,
        policy: UserPolicy = DEFAULT_POLICY,
    ) -> None:
        self.user_repository = user_repository
        self.event_dispatcher = event_dispatcher
        self.policy = policy

    def record_success(self, user_id: str) -> LoginAttemptResult:
        """
        Record a successful login.

        Raises:
            UserNotFoundError: If the user does not exist
            AccountLockedError: If the account is not active
        """
        user = self._load(user_id)
        if not user.is_active:
            logger.warning("login_rejected_locked_account", user_id=user_id)
            raise AccountLockedError(user_id)

        user.record_login()
        saved = self.user_repository.save(user)
        self.event_dispatcher.dispatch(user)

        logger.info("user_login_recorded", user_id=user_id)
        return LoginAttemptResult(user=saved, failed_attempts=0, locked=False)

    def record_failure(self, user_id: str) -> LoginAttemptResult:
        """
        Record a failed login, suspending the account at the attempt limit.

        Raises:
            UserNotFoundError: If the user does not exist
        """
        user = self._load(user_id)
        attempts = user.record_failed_login()
        locked = should_lock_account(user, attempts, self.policy)
        if locked and user.is_active:
            user.suspend(SYSTEM_ACTOR)
            logger.warning("user_account_locked", user_id=user_id, failed_attempts=attempts)

        saved = self.user_repository.save(user)
        self.event_dispatcher.dispatch(user)

        logger.info("user_login_failed", user_id=user_id, failed_attempts=attempts)
        return LoginAttemptResult(user=saved, failed_attempts=attempts, locked=locked)

    def _load(self, user_id: str) -> User:
        user = self.user_repository.find_by_id(UserId.from_string(user_id), for_update=True)
        if user is None:
            raise UserNotFoundError(user_id)
        return user
