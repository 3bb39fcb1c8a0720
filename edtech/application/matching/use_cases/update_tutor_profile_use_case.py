"""Use case for editing a tutor profile."""

from collections.abc import Mapping

import structlog

from edtech.application.common.event_dispatcher import EventDispatcher
from edtech.application.matching.protocols.tutor_repository import TutorRepositoryProtocol
from edtech.domain.common.value_objects import TutorId
from edtech.domain.matching.entities.tutor import Tutor
from edtech.domain.matching.exceptions import TutorNotFoundError

logger = structlog.get_logger(__name__)


class UpdateTutorProfileUseCase:
    def __init__(
        self,
        tutor_repository: TutorRepositoryProtocol,
        event_dispatcher: EventDispatcher,
    ) -> None:
        self.tutor_repository = tutor_repository
        self.event_dispatcher = event_dispatcher

    def update_profile(self, tutor_id: str, changes: Mapping[str, object], actor_id: str) -> Tutor:
        """
        Apply a partial update to a tutor profile; a no-op is not saved.

        Raises:
            TutorNotFoundError: If the tutor does not exist
            ValidationError: If any provided field is invalid
        """
        tutor = self.tutor_repository.find_by_id(TutorId.from_string(tutor_id), for_update=True)
        if tutor is None:
            raise TutorNotFoundError(tutor_id)

        changed = tutor.update(changes, actor_id=actor_id)
        if not changed:
            return tutor

        saved = self.tutor_repository.save(tutor)
        self.event_dispatcher.dispatch(tutor)

        logger.info("tutor_profile_updated", tutor_id=tutor_id, changed_fields=list(changed))
        return saved
