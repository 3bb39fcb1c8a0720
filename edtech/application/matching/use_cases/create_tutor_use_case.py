"""Use case for creating tutor profiles."""

from decimal import Decimal

import structlog

from edtech.application.common.event_dispatcher import EventDispatcher
from edtech.application.identity.protocols.user_repository import UserRepositoryProtocol
from edtech.application.matching.protocols.tutor_repository import TutorRepositoryProtocol
from edtech.domain.common.exceptions import BusinessRuleViolationError
from edtech.domain.common.value_objects import UserId
from edtech.domain.identity.exceptions import UserNotFoundError
from edtech.domain.matching.entities.tutor import DEFAULT_CURRENCY, Tutor
from edtech.domain.matching.exceptions import TutorAlreadyExistsError

logger = structlog.get_logger(__name__)


class CreateTutorUseCase:
    """Use case for tutor profile creation."""

    def __init__(
        self,
        tutor_repository: TutorRepositoryProtocol,
        user_repository: UserRepositoryProtocol,
        event_dispatcher: EventDispatcher,
    ) -> None:
        self.tutor_repository = tutor_repository
        self.user_repository = user_repository
        self.event_dispatcher = event_dispatcher

    def create_tutor(
        self,
        user_id: str,
        bio: str,
        subjects: list[str],
        experience_level: str,
        hourly_rate: Decimal | float | str,
        languages: list[str],
        education: str,
        currency: str = DEFAULT_CURRENCY,
    ) -> Tutor:
        """
        Create a tutor profile for an existing user.

        The profile starts in PENDING_APPROVAL.

        Raises:
            UserNotFoundError: If the user does not exist
            BusinessRuleViolationError: If the user's role cannot teach
            TutorAlreadyExistsError: If the user already has a tutor profile
            ValidationError: If any field is invalid
        """
        owner_id = UserId.from_string(user_id)
        user = self.user_repository.find_by_id(owner_id)
        if user is None:
            raise UserNotFoundError(user_id)
        if not user.role.can_teach():
            raise BusinessRuleViolationError(
                "tutor_role_required",
                f"User with role {user.role.value} cannot have a tutor profile",
            )
        if self.tutor_repository.find_by_user_id(owner_id) is not None:
            raise TutorAlreadyExistsError(user_id)

        tutor = Tutor.create(
            user_id=owner_id,
            bio=bio,
            subjects=subjects,
            experience_level=experience_level,
            hourly_rate=hourly_rate,
            languages=languages,
            education=education,
            currency=currency,
        )
        saved = self.tutor_repository.save(tutor)
        self.event_dispatcher.dispatch(tutor)

        logger.info("tutor_created", tutor_id=str(tutor.id), user_id=user_id)
        return saved
