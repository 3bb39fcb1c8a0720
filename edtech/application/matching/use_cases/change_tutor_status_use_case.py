"""Use case for approving, suspending and deactivating tutors."""

import structlog

from edtech.application.common.event_dispatcher import EventDispatcher
from edtech.application.matching.protocols.tutor_repository import TutorRepositoryProtocol
from edtech.domain.common.value_objects import TutorId
from edtech.domain.matching.entities.tutor import Tutor
from edtech.domain.matching.exceptions import TutorNotFoundError
from edtech.domain.matching.value_objects import TutorStatus

logger = structlog.get_logger(__name__)


class ChangeTutorStatusUseCase:
    def __init__(
        self,
        tutor_repository: TutorRepositoryProtocol,
        event_dispatcher: EventDispatcher,
    ) -> None:
        self.tutor_repository = tutor_repository
        self.event_dispatcher = event_dispatcher

    def change_status(self, tutor_id: str, status: str, actor_id: str) -> Tutor:
        """
        Transition a tutor to ``status``.

        Raises:
            TutorNotFoundError: If the tutor does not exist
            ValidationError: If status is not a known status
            InvalidTransitionError: If the transition is not allowed
        """
        tutor = self.tutor_repository.find_by_id(TutorId.from_string(tutor_id), for_update=True)
        if tutor is None:
            raise TutorNotFoundError(tutor_id)

        previous = tutor.status
        tutor.transition(status, actor_id=actor_id)
        saved = self.tutor_repository.save(tutor)
        self.event_dispatcher.dispatch(tutor)

        logger.info(
            "tutor_status_changed",
            tutor_id=tutor_id,
            from_status=previous.value,
            to_status=tutor.status.value,
            actor_id=actor_id,
        )
        return saved

    def approve(self, tutor_id: str, actor_id: str) -> Tutor:
        return self.change_status(tutor_id, TutorStatus.ACTIVE.value, actor_id)

    def suspend(self, tutor_id: str, actor_id: str) -> Tutor:
        return self.change_status(tutor_id, TutorStatus.SUSPENDED.value, actor_id)
