"""Use case for creating users."""

import structlog

from edtech.application.common.event_dispatcher import EventDispatcher
from edtech.application.identity.protocols.user_repository import UserRepositoryProtocol
from edtech.domain.identity.entities.user import User
from edtech.domain.identity.exceptions import EmailAlreadyExistsError

logger = structlog.get_logger(__name__)


class CreateUserUseCase:
    """Use case for user creation."""

    def __init__(
        self,
        user_repository: UserRepositoryProtocol,
        event_dispatcher: EventDispatcher,
    ) -> None:
        self.user_repository = user_repository
        self.event_dispatcher = event_dispatcher

    def create_user(
        self,
        email: str,
        first_name: str,
        last_name: str,
        role: str | None = None,
        bio: str | None = None,
        skills: list[str] | None = None,
    ) -> User:
        """
        Create a new user account.

        Args:
            email: User's email address
            first_name: Given name
            last_name: Family name
            role: Initial role (defaults to STUDENT)
            bio: Optional biography
            skills: Optional list of skills

        Returns:
            The saved user

        Raises:
            ValidationError: If any field is invalid
            EmailAlreadyExistsError: If the email is already registered
        """
        user = User.create(
            email=email,
            first_name=first_name,
            last_name=last_name,
            role=role,
            bio=bio,
            skills=skills,
        )
        if self.user_repository.find_by_email(user.email) is not None:
            raise EmailAlreadyExistsError(user.email.value)

        saved = self.user_repository.save(user)
        self.event_dispatcher.dispatch(user)

        logger.info("user_created", user_id=str(user.id), role=user.role.value)
        return saved
