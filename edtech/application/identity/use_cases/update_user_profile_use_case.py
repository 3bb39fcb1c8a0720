"""Use case for editing a user's profile."""

from collections.abc import Mapping

import structlog

from edtech.application.common.event_dispatcher import EventDispatcher
from edtech.application.identity.protocols.user_repository import UserRepositoryProtocol
from edtech.domain.common.exceptions import BusinessRuleViolationError, ValidationError
from edtech.domain.common.value_objects import Email, UserId
from edtech.domain.identity.entities.user import User
from edtech.domain.identity.exceptions import EmailAlreadyExistsError, UserNotFoundError
from edtech.domain.identity.rules import DEFAULT_POLICY, UserPolicy, can_change_email

logger = structlog.get_logger(__name__)


class UpdateUserProfileUseCase:
    """Use case for partial profile updates."""

    def __init__(
        self,
        user_repository: UserRepositoryProtocol,
        event_dispatcher: EventDispatcher,
        policy: UserPolicy = DEFAULT_POLICY,
    ) -> None:
        self.user_repository = user_repository
        self.event_dispatcher = event_dispatcher
        self.policy = policy

    def update_profile(self, user_id: str, changes: Mapping[str, object], actor_id: str) -> User:
        """
        Apply a partial update to a user's profile.

        Fields set to None are ignored. Nothing is saved when no field
        actually changes.

        Raises:
            UserNotFoundError: If the user does not exist
            ValidationError: If any provided field is invalid
            BusinessRuleViolationError: If the email may not be changed now
            EmailAlreadyExistsError: If the new email belongs to another user
        """
        user = self.user_repository.find_by_id(UserId.from_string(user_id), for_update=True)
        if user is None:
            raise UserNotFoundError(user_id)

        new_email = changes.get("email")
        if new_email is not None:
            try:
                email = Email(str(new_email))
            except ValidationError:
                # reported together with the other fields by user.update
                email = None
            if email is not None:
                self._check_email_change(user, email)

        changed = user.update(changes, actor_id=actor_id)
        if not changed:
            logger.debug("user_profile_unchanged", user_id=user_id)
            return user

        saved = self.user_repository.save(user)
        self.event_dispatcher.dispatch(user)

        logger.info("user_profile_updated", user_id=user_id, changed_fields=list(changed))
        return saved

    def _check_email_change(self, user: User, email: Email) -> None:
        if email == user.email:
            return
        if not user.is_active:
            raise BusinessRuleViolationError(
                "email_change_not_allowed", "Only active users can change their email"
            )
        if not can_change_email(
            user, email, last_email_change=user.email_changed_at, policy=self.policy
        ):
            raise BusinessRuleViolationError(
                "email_change_cooldown",
                f"Email can be changed once every {self.policy.email_change_cooldown_days} days",
            )
        existing = self.user_repository.find_by_email(email)
        if existing is not None and existing.id != user.id:
            raise EmailAlreadyExistsError(email.value)
