"""Use case for ratings and session counters reported by other services."""

from decimal import Decimal

import structlog

from edtech.application.common.event_dispatcher import EventDispatcher
from edtech.application.matching.protocols.tutor_repository import TutorRepositoryProtocol
from edtech.domain.common.value_objects import TutorId
from edtech.domain.matching.entities.tutor import Tutor
from edtech.domain.matching.exceptions import TutorNotFoundError

logger = structlog.get_logger(__name__)


class TutorActivityUseCase:
    """Keeps a tutor's track record up to date."""

    def __init__(
        self,
        tutor_repository: TutorRepositoryProtocol,
        event_dispatcher: EventDispatcher,
    ) -> None:
        self.tutor_repository = tutor_repository
        self.event_dispatcher = event_dispatcher

    def update_rating(
        self, tutor_id: str, rating: Decimal | float | str, total_reviews: int
    ) -> Tutor:
        """
        Replace the aggregated rating; unchanged values are not saved.

        Raises:
            TutorNotFoundError: If the tutor does not exist
            ValidationError: If the rating or review count is out of range
        """
        tutor = self._load(tutor_id)
        if not tutor.update_rating(rating, total_reviews):
            return tutor

        saved = self.tutor_repository.save(tutor)
        self.event_dispatcher.dispatch(tutor)

        logger.info(
            "tutor_rating_updated",
            tutor_id=tutor_id,
            rating=str(tutor.rating),
            total_reviews=total_reviews,
        )
        return saved

    def record_session(self, tutor_id: str, completed: bool) -> Tutor:
        tutor = self._load(tutor_id)
        tutor.record_session(completed)
        saved = self.tutor_repository.save(tutor)
        self.event_dispatcher.dispatch(tutor)

        logger.info("tutor_session_recorded", tutor_id=tutor_id, completed=completed)
        return saved

    def _load(self, tutor_id: str) -> Tutor:
        tutor = self.tutor_repository.find_by_id(TutorId.from_string(tutor_id), for_update=True)
        if tutor is None:
            raise TutorNotFoundError(tutor_id)
        return tutor
