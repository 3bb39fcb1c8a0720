"""Dictionary-backed matching request repository for tests and local wiring."""

import threading
from dataclasses import replace
from datetime import datetime

from edtech.application.common.pagination import Page
from edtech.domain.common.value_objects import MatchingRequestId, UserId
from edtech.domain.matching.entities.matching_request import MatchingRequest


class InMemoryMatchingRequestRepository:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._requests: dict[MatchingRequestId, MatchingRequest] = {}

    def find_by_id(
        self, request_id: MatchingRequestId, for_update: bool = False
    ) -> MatchingRequest | None:
        with self._lock:
            request = self._requests.get(request_id)
            return replace(request) if request else None

    def find_by_student(self, student_id: UserId) -> list[MatchingRequest]:
        with self._lock:
            owned = [r for r in self._requests.values() if r.student_id == student_id]
        owned.sort(key=lambda r: r.created_at, reverse=True)
        return [replace(r) for r in owned]

    def find_pending_expired(self, now: datetime) -> list[MatchingRequest]:
        with self._lock:
            overdue = [r for r in self._requests.values() if r.is_pending and r.is_expired(now)]
        overdue.sort(key=lambda r: r.expires_at)
        return [replace(r) for r in overdue]

    def find_all(self, offset: int, limit: int) -> Page[MatchingRequest]:
        with self._lock:
            requests = sorted(self._requests.values(), key=lambda r: (r.created_at, str(r.id)))
            window = requests[offset : offset + limit]
            return Page(items=[replace(r) for r in window], total=len(requests))

    def save(self, request: MatchingRequest) -> MatchingRequest:
        with self._lock:
            self._requests[request.id] = replace(request)
            return replace(request)

    def delete(self, request_id: MatchingRequestId) -> bool:
        with self._lock:
            return self._requests.pop(request_id, None) is not None
