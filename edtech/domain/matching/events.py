"""Domain events recorded by the matching aggregates."""

from dataclasses import dataclass
from decimal import Decimal

from edtech.domain.common.domain_event import DomainEvent
from edtech.domain.common.value_objects import MatchingRequestId, TutorId, UserId
from edtech.domain.matching.value_objects import MatchingRequestStatus, Subject, TutorStatus


@dataclass(frozen=True)
class TutorEvent(DomainEvent):
    tutor_id: TutorId

    @property
    def aggregate_id(self) -> str:
        return str(self.tutor_id)


@dataclass(frozen=True)
class TutorCreated(TutorEvent):
    user_id: UserId
    subjects: tuple[Subject, ...]


@dataclass(frozen=True)
class TutorProfileUpdated(TutorEvent):
    changed_fields: tuple[str, ...]
    actor_id: str


@dataclass(frozen=True)
class TutorStatusChanged(TutorEvent):
    from_status: TutorStatus
    to_status: TutorStatus
    actor_id: str


@dataclass(frozen=True)
class TutorRatingUpdated(TutorEvent):
    rating: Decimal
    total_reviews: int


@dataclass(frozen=True)
class TutorSessionRecorded(TutorEvent):
    completed: bool
    completed_sessions: int
    cancelled_sessions: int


@dataclass(frozen=True)
class MatchingRequestEvent(DomainEvent):
    request_id: MatchingRequestId

    @property
    def aggregate_id(self) -> str:
        return str(self.request_id)


@dataclass(frozen=True)
class MatchingRequestCreated(MatchingRequestEvent):
    student_id: UserId
    subject: Subject


@dataclass(frozen=True)
class MatchingRequestUpdated(MatchingRequestEvent):
    changed_fields: tuple[str, ...]
    actor_id: str


@dataclass(frozen=True)
class MatchingRequestStatusChanged(MatchingRequestEvent):
    from_status: MatchingRequestStatus
    to_status: MatchingRequestStatus
    actor_id: str


@dataclass(frozen=True)
class MatchingRequestMatched(MatchingRequestStatusChanged):
    student_id: UserId
    tutor_id: TutorId


@dataclass(frozen=True)
class MatchingRequestCancelled(MatchingRequestStatusChanged):
    reason: str | None
