"""API routes for matching requests."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from edtech.application.common.pagination import Pagination
from edtech.application.matching.use_cases.create_matching_request_use_case import (
    CreateMatchingRequestUseCase,
)
from edtech.application.matching.use_cases.matching_request_query_use_case import (
    MatchingRequestQueryUseCase,
)
from edtech.application.matching.use_cases.matching_request_use_case import (
    MatchingRequestUseCase,
)
from edtech.core import container
from edtech.domain.common.exceptions import DomainError
from edtech.domain.matching.entities.matching_request import MatchingRequest
from edtech.exceptions import EdtechError
from edtech.infrastructure.common.dependencies import ActorId
from edtech.infrastructure.common.di import inject_use_case
from edtech.infrastructure.common.schemas import PaginatedResponse, SuccessResponse
from edtech.infrastructure.matching.routers.tutors import to_tutor_response
from edtech.infrastructure.matching.schemas import (
    CancelRequest,
    ExpireOverdueResponse,
    MatchingRequestCreateRequest,
    MatchingRequestResponse,
    MatchingRequestUpdateRequest,
    MatchRequest,
    TutorResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/matching-requests", tags=["matching-requests"])


def _unexpected(action: str, err: Exception) -> HTTPException:
    logger.error(f"Failed to {action}: {err!s}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected error occurred. Please try again later.",
    )


def to_matching_request_response(request: MatchingRequest) -> MatchingRequestResponse:
    level = request.preferred_experience_level
    return MatchingRequestResponse(
        id=request.id.value,
        student_id=request.student_id.value,
        subject=request.subject.value,
        preferred_experience_level=level.value if level else None,
        max_hourly_rate=request.max_hourly_rate,
        preferred_languages=list(request.preferred_languages),
        description=request.description,
        status=request.status.value,
        matched_tutor_id=request.matched_tutor_id.value if request.matched_tutor_id else None,
        created_at=request.created_at,
        updated_at=request.updated_at,
        expires_at=request.expires_at,
    )


@router.post("", response_model=MatchingRequestResponse, status_code=status.HTTP_201_CREATED)
def create_matching_request(
    request: MatchingRequestCreateRequest,
    use_case: CreateMatchingRequestUseCase = Depends(
        inject_use_case(container.create_matching_request_use_case)
    ),
) -> MatchingRequestResponse:
    """Open a pending request for an active student."""
    try:
        matching_request = use_case.create_request(
            student_id=request.student_id,
            subject=request.subject,
            preferred_experience_level=request.preferred_experience_level,
            max_hourly_rate=request.max_hourly_rate,
            preferred_languages=request.preferred_languages,
            description=request.description,
        )
        return to_matching_request_response(matching_request)
    except (DomainError, EdtechError):
        raise
    except Exception as e:
        raise _unexpected("create matching request", e) from e


@router.get("", response_model=PaginatedResponse[MatchingRequestResponse])
def list_matching_requests(
    page: int = Query(1, description="Page number, starting at 1"),
    page_size: int = Query(20, description="Number of requests per page"),
    use_case: MatchingRequestQueryUseCase = Depends(
        inject_use_case(container.matching_request_query_use_case)
    ),
) -> PaginatedResponse[MatchingRequestResponse]:
    try:
        result = use_case.list_requests(Pagination(page=page, page_size=page_size))
        return PaginatedResponse[MatchingRequestResponse].build(
            result, [to_matching_request_response(item) for item in result.items]
        )
    except (DomainError, EdtechError):
        raise
    except Exception as e:
        raise _unexpected("list matching requests", e) from e


@router.post("/expire-overdue", response_model=ExpireOverdueResponse)
def expire_overdue_requests(
    use_case: MatchingRequestUseCase = Depends(
        inject_use_case(container.matching_request_use_case)
    ),
) -> ExpireOverdueResponse:
    """Expire every pending request whose deadline has passed."""
    try:
        expired = use_case.expire_overdue()
        return ExpireOverdueResponse(
            expired=[request.id.value for request in expired], count=len(expired)
        )
    except (DomainError, EdtechError):
        raise
    except Exception as e:
        raise _unexpected("expire overdue matching requests", e) from e


@router.get("/by-student/{student_id}", response_model=list[MatchingRequestResponse])
def list_matching_requests_for_student(
    student_id: str,
    use_case: MatchingRequestQueryUseCase = Depends(
        inject_use_case(container.matching_request_query_use_case)
    ),
) -> list[MatchingRequestResponse]:
    try:
        return [
            to_matching_request_response(item) for item in use_case.list_for_student(student_id)
        ]
    except (DomainError, EdtechError):
        raise
    except Exception as e:
        raise _unexpected(f"list matching requests of student {student_id}", e) from e


@router.get("/{request_id}", response_model=MatchingRequestResponse)
def get_matching_request(
    request_id: str,
    use_case: MatchingRequestQueryUseCase = Depends(
        inject_use_case(container.matching_request_query_use_case)
    ),
) -> MatchingRequestResponse:
    try:
        return to_matching_request_response(use_case.get_request(request_id))
    except (DomainError, EdtechError):
        raise
    except Exception as e:
        raise _unexpected(f"get matching request {request_id}", e) from e


@router.patch("/{request_id}", response_model=MatchingRequestResponse)
def update_matching_request(
    request_id: str,
    request: MatchingRequestUpdateRequest,
    actor_id: ActorId,
    use_case: MatchingRequestUseCase = Depends(
        inject_use_case(container.matching_request_use_case)
    ),
) -> MatchingRequestResponse:
    try:
        matching_request = use_case.update_request(
            request_id, request.model_dump(exclude_none=True), actor_id=actor_id
        )
        return to_matching_request_response(matching_request)
    except (DomainError, EdtechError):
        raise
    except Exception as e:
        raise _unexpected(f"update matching request {request_id}", e) from e


@router.post("/{request_id}/match", response_model=MatchingRequestResponse)
def match_matching_request(
    request_id: str,
    request: MatchRequest,
    actor_id: ActorId,
    use_case: MatchingRequestUseCase = Depends(
        inject_use_case(container.matching_request_use_case)
    ),
) -> MatchingRequestResponse:
    """
    Pair a pending request with an eligible tutor.

    An overdue request is expired instead and the call fails with 422.
    """
    try:
        matching_request = use_case.match_with_tutor(
            request_id, request.tutor_id, actor_id=actor_id
        )
        return to_matching_request_response(matching_request)
    except (DomainError, EdtechError):
        raise
    except Exception as e:
        raise _unexpected(f"match matching request {request_id}", e) from e


@router.post("/{request_id}/cancel", response_model=MatchingRequestResponse)
def cancel_matching_request(
    request_id: str,
    request: CancelRequest,
    actor_id: ActorId,
    use_case: MatchingRequestUseCase = Depends(
        inject_use_case(container.matching_request_use_case)
    ),
) -> MatchingRequestResponse:
    try:
        matching_request = use_case.cancel_request(
            request_id, actor_id=actor_id, reason=request.reason
        )
        return to_matching_request_response(matching_request)
    except (DomainError, EdtechError):
        raise
    except Exception as e:
        raise _unexpected(f"cancel matching request {request_id}", e) from e


@router.get("/{request_id}/eligible-tutors", response_model=list[TutorResponse])
def list_eligible_tutors(
    request_id: str,
    use_case: MatchingRequestQueryUseCase = Depends(
        inject_use_case(container.matching_request_query_use_case)
    ),
) -> list[TutorResponse]:
    try:
        return [to_tutor_response(tutor) for tutor in use_case.find_eligible_tutors(request_id)]
    except (DomainError, EdtechError):
        raise
    except Exception as e:
        raise _unexpected(f"find eligible tutors for request {request_id}", e) from e


@router.delete("/{request_id}", response_model=SuccessResponse)
def delete_matching_request(
    request_id: str,
    actor_id: ActorId,
    use_case: MatchingRequestQueryUseCase = Depends(
        inject_use_case(container.matching_request_query_use_case)
    ),
) -> SuccessResponse:
    try:
        use_case.delete_request(request_id)
        logger.info(f"Matching request {request_id} deleted by {actor_id}")
        return SuccessResponse(success=True, message="Matching request deleted successfully")
    except (DomainError, EdtechError):
        raise
    except Exception as e:
        raise _unexpected(f"delete matching request {request_id}", e) from e
