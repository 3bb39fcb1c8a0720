"""Use case for moving a user through the account status graph."""

import structlog

from edtech.application.common.event_dispatcher import EventDispatcher
from edtech.application.identity.protocols.user_repository import UserRepositoryProtocol
from edtech.domain.common.value_objects import UserId
from edtech.domain.identity.entities.user import User
from edtech.domain.identity.exceptions import UserNotFoundError

logger = structlog.get_logger(__name__)


class ChangeUserStatusUseCase:
    def __init__(
        self,
        user_repository: UserRepositoryProtocol,
        event_dispatcher: EventDispatcher,
    ) -> None:
        self.user_repository = user_repository
        self.event_dispatcher = event_dispatcher

    def change_status(self, user_id: str, status: str, actor_id: str) -> User:
        """
        Transition a user to ``status``.

        Raises:
            UserNotFoundError: If the user does not exist
            ValidationError: If status is not a known status
            InvalidTransitionError: If the transition is not allowed
        """
        user = self.user_repository.find_by_id(UserId.from_string(user_id), for_update=True)
        if user is None:
            raise UserNotFoundError(user_id)

        previous = user.status
        user.transition(status, actor_id=actor_id)
        saved = self.user_repository.save(user)
        self.event_dispatcher.dispatch(user)

        logger.info(
            "user_status_changed",
            user_id=user_id,
            from_status=previous.value,
            to_status=user.status.value,
            actor_id=actor_id,
        )
        return saved
