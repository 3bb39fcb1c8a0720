from datetime import datetime
from typing import Protocol

from edtech.application.common.pagination import Page
from edtech.domain.common.value_objects import MatchingRequestId, UserId
from edtech.domain.matching.entities.matching_request import MatchingRequest


class MatchingRequestRepositoryProtocol(Protocol):
    def find_by_id(
        self, request_id: MatchingRequestId, for_update: bool = False
    ) -> MatchingRequest | None: ...

    def find_by_student(self, student_id: UserId) -> list[MatchingRequest]: ...

    def find_pending_expired(self, now: datetime) -> list[MatchingRequest]:
        """Pending requests whose ``expires_at`` is before ``now``."""
        ...

    def find_all(self, offset: int, limit: int) -> Page[MatchingRequest]: ...

    def save(self, request: MatchingRequest) -> MatchingRequest: ...

    def delete(self, request_id: MatchingRequestId) -> bool: ...
