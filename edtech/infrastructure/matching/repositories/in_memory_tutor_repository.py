"""Dictionary-backed tutor repository for tests and local wiring."""

import threading
from dataclasses import replace

from edtech.application.common.pagination import Page
from edtech.domain.common.value_objects import TutorId, UserId
from edtech.domain.matching.entities.tutor import Tutor
from edtech.domain.matching.exceptions import TutorAlreadyExistsError
from edtech.domain.matching.value_objects import Subject


class InMemoryTutorRepository:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tutors: dict[TutorId, Tutor] = {}

    def find_by_id(self, tutor_id: TutorId, for_update: bool = False) -> Tutor | None:
        with self._lock:
            tutor = self._tutors.get(tutor_id)
            return replace(tutor) if tutor else None

    def find_by_user_id(self, user_id: UserId) -> Tutor | None:
        with self._lock:
            for tutor in self._tutors.values():
                if tutor.user_id == user_id:
                    return replace(tutor)
        return None

    def find_by_subject(self, subject: Subject) -> list[Tutor]:
        with self._lock:
            matches = [t for t in self._tutors.values() if t.teaches(subject)]
        matches.sort(key=lambda t: (-t.rating, t.created_at))
        return [replace(t) for t in matches]

    def find_all(self, offset: int, limit: int) -> Page[Tutor]:
        with self._lock:
            tutors = sorted(self._tutors.values(), key=lambda t: (t.created_at, str(t.id)))
            window = tutors[offset : offset + limit]
            return Page(items=[replace(t) for t in window], total=len(tutors))

    def save(self, tutor: Tutor) -> Tutor:
        with self._lock:
            for existing in self._tutors.values():
                if existing.id != tutor.id and existing.user_id == tutor.user_id:
                    raise TutorAlreadyExistsError(tutor.user_id)
            self._tutors[tutor.id] = replace(tutor)
            return replace(tutor)

    def delete(self, tutor_id: TutorId) -> bool:
        with self._lock:
            return self._tutors.pop(tutor_id, None) is not None
