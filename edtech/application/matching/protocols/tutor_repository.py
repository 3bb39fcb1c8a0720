from typing import Protocol

from edtech.application.common.pagination import Page
from edtech.domain.common.value_objects import TutorId, UserId
from edtech.domain.matching.entities.tutor import Tutor
from edtech.domain.matching.value_objects import Subject


class TutorRepositoryProtocol(Protocol):
    def find_by_id(self, tutor_id: TutorId, for_update: bool = False) -> Tutor | None: ...

    def find_by_user_id(self, user_id: UserId) -> Tutor | None: ...

    def find_by_subject(self, subject: Subject) -> list[Tutor]: ...

    def find_all(self, offset: int, limit: int) -> Page[Tutor]: ...

    def save(self, tutor: Tutor) -> Tutor:
        """Insert or update by id; raises TutorAlreadyExistsError on a taken user_id."""
        ...

    def delete(self, tutor_id: TutorId) -> bool: ...
