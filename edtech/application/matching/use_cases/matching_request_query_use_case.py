"""Read-side use cases for matching requests."""

from edtech.application.common.pagination import PaginatedResult, Pagination
from edtech.application.matching.protocols.matching_request_repository import (
    MatchingRequestRepositoryProtocol,
)
from edtech.application.matching.protocols.tutor_repository import TutorRepositoryProtocol
from edtech.domain.common.value_objects import MatchingRequestId, UserId
from edtech.domain.matching.entities.matching_request import MatchingRequest
from edtech.domain.matching.entities.tutor import Tutor
from edtech.domain.matching.exceptions import MatchingRequestNotFoundError
from edtech.domain.matching.rules import is_tutor_eligible


class MatchingRequestQueryUseCase:
    def __init__(
        self,
        matching_request_repository: MatchingRequestRepositoryProtocol,
        tutor_repository: TutorRepositoryProtocol,
    ) -> None:
        self.matching_request_repository = matching_request_repository
        self.tutor_repository = tutor_repository

    def get_request(self, request_id: str) -> MatchingRequest:
        request = self.matching_request_repository.find_by_id(
            MatchingRequestId.from_string(request_id)
        )
        if request is None:
            raise MatchingRequestNotFoundError(request_id)
        return request

    def list_requests(self, pagination: Pagination) -> PaginatedResult[MatchingRequest]:
        page = self.matching_request_repository.find_all(pagination.offset, pagination.limit)
        return PaginatedResult.from_page(page, pagination)

    def list_for_student(self, student_id: str) -> list[MatchingRequest]:
        return self.matching_request_repository.find_by_student(UserId.from_string(student_id))

    def find_eligible_tutors(self, request_id: str) -> list[Tutor]:
        """Tutors teaching the request's subject who pass every eligibility rule."""
        request = self.get_request(request_id)
        return [
            tutor
            for tutor in self.tutor_repository.find_by_subject(request.subject)
            if is_tutor_eligible(tutor, request)
        ]

    def delete_request(self, request_id: str) -> None:
        if not self.matching_request_repository.delete(MatchingRequestId.from_string(request_id)):
            raise MatchingRequestNotFoundError(request_id)
