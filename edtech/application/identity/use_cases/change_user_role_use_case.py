"""Use case for role changes, including a student becoming a tutor."""

import structlog

from edtech.application.common.event_dispatcher import EventDispatcher
from edtech.application.identity.protocols.user_repository import UserRepositoryProtocol
from edtech.domain.common.value_objects import UserId
from edtech.domain.identity.entities.user import User
from edtech.domain.identity.exceptions import RoleTransitionNotAllowedError, UserNotFoundError
from edtech.domain.identity.rules import (
    DEFAULT_POLICY,
    UserPolicy,
    can_transition_role,
    missing_tutor_requirements,
)
from edtech.domain.identity.value_objects import UserRole

logger = structlog.get_logger(__name__)


class ChangeUserRoleUseCase:
    """Use case for self-service role changes."""

    def __init__(
        self,
        user_repository: UserRepositoryProtocol,
        event_dispatcher: EventDispatcher,
        policy: UserPolicy = DEFAULT_POLICY,
    ) -> None:
        self.user_repository = user_repository
        self.event_dispatcher = event_dispatcher
        self.policy = policy

    def change_role(self, user_id: str, role: str, actor_id: str) -> User:
        """
        Change a user's role after checking the role transition rules.

        Raises:
            UserNotFoundError: If the user does not exist
            ValidationError: If role is not a known role
            RoleTransitionNotAllowedError: If the rules reject the change
        """
        target = UserRole.parse(role, "role")
        user = self.user_repository.find_by_id(UserId.from_string(user_id), for_update=True)
        if user is None:
            raise UserNotFoundError(user_id)

        if not can_transition_role(user.role, target, user, policy=self.policy):
            raise RoleTransitionNotAllowedError(
                user.role.value, target.value, self._reasons(user, target)
            )

        previous = user.role
        user.change_role(target, changed_by=actor_id)
        saved = self.user_repository.save(user)
        self.event_dispatcher.dispatch(user)

        logger.info(
            "user_role_changed",
            user_id=user_id,
            old_role=previous.value,
            new_role=target.value,
            changed_by=actor_id,
        )
        return saved

    def become_tutor(self, user_id: str, actor_id: str) -> User:
        """Promote a student to the TUTOR role."""
        return self.change_role(user_id, UserRole.TUTOR.value, actor_id)

    def _reasons(self, user: User, target: UserRole) -> list[str]:
        if user.role is target:
            return [f"user already has the {target.value} role"]
        if user.role.is_privileged or target.is_privileged:
            return ["privileged roles cannot be changed here"]
        if not user.is_active:
            return ["account must be active"]
        if target is UserRole.TUTOR:
            return missing_tutor_requirements(user, self.policy)
        return []
