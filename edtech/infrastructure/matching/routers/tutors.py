"""API routes for tutor profiles."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from edtech.application.common.pagination import Pagination
from edtech.application.matching.use_cases.change_tutor_status_use_case import (
    ChangeTutorStatusUseCase,
)
from edtech.application.matching.use_cases.create_tutor_use_case import CreateTutorUseCase
from edtech.application.matching.use_cases.tutor_activity_use_case import TutorActivityUseCase
from edtech.application.matching.use_cases.tutor_query_use_case import TutorQueryUseCase
from edtech.application.matching.use_cases.update_tutor_profile_use_case import (
    UpdateTutorProfileUseCase,
)
from edtech.core import container
from edtech.domain.common.exceptions import DomainError
from edtech.domain.matching.entities.tutor import Tutor
from edtech.exceptions import EdtechError
from edtech.infrastructure.common.dependencies import ActorId
from edtech.infrastructure.common.di import inject_use_case
from edtech.infrastructure.common.schemas import PaginatedResponse, SuccessResponse
from edtech.infrastructure.identity.schemas import StatusChangeRequest
from edtech.infrastructure.matching.schemas import (
    TutorCreateRequest,
    TutorRatingRequest,
    TutorResponse,
    TutorSessionRequest,
    TutorStandingResponse,
    TutorUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tutors", tags=["tutors"])


def _unexpected(action: str, err: Exception) -> HTTPException:
    logger.error(f"Failed to {action}: {err!s}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected error occurred. Please try again later.",
    )


def to_tutor_response(tutor: Tutor) -> TutorResponse:
    return TutorResponse(
        id=tutor.id.value,
        user_id=tutor.user_id.value,
        bio=tutor.bio,
        subjects=[subject.value for subject in tutor.subjects],
        experience_level=tutor.experience_level.value,
        hourly_rate=tutor.hourly_rate,
        currency=tutor.currency,
        languages=list(tutor.languages),
        education=tutor.education,
        status=tutor.status.value,
        rating=tutor.rating,
        total_reviews=tutor.total_reviews,
        completed_sessions=tutor.completed_sessions,
        cancelled_sessions=tutor.cancelled_sessions,
        created_at=tutor.created_at,
        updated_at=tutor.updated_at,
    )


@router.post("", response_model=TutorResponse, status_code=status.HTTP_201_CREATED)
def create_tutor(
    request: TutorCreateRequest,
    use_case: CreateTutorUseCase = Depends(inject_use_case(container.create_tutor_use_case)),
) -> TutorResponse:
    """
    Create a tutor profile for an existing user.

    The user must hold a teaching role and may own only one profile. New
    profiles wait in PENDING_APPROVAL.
    """
    try:
        tutor = use_case.create_tutor(
            user_id=request.user_id,
            bio=request.bio,
            subjects=request.subjects,
            experience_level=request.experience_level,
            hourly_rate=request.hourly_rate,
            languages=request.languages,
            education=request.education,
            currency=request.currency,
        )
        return to_tutor_response(tutor)
    except (DomainError, EdtechError):
        raise
    except Exception as e:
        raise _unexpected("create tutor", e) from e


@router.get("", response_model=PaginatedResponse[TutorResponse])
def list_tutors(
    page: int = Query(1, description="Page number, starting at 1"),
    page_size: int = Query(20, description="Number of tutors per page"),
    use_case: TutorQueryUseCase = Depends(inject_use_case(container.tutor_query_use_case)),
) -> PaginatedResponse[TutorResponse]:
    try:
        result = use_case.list_tutors(Pagination(page=page, page_size=page_size))
        return PaginatedResponse[TutorResponse].build(
            result, [to_tutor_response(tutor) for tutor in result.items]
        )
    except (DomainError, EdtechError):
        raise
    except Exception as e:
        raise _unexpected("list tutors", e) from e


@router.get("/by-user/{user_id}", response_model=TutorResponse)
def get_tutor_by_user(
    user_id: str,
    use_case: TutorQueryUseCase = Depends(inject_use_case(container.tutor_query_use_case)),
) -> TutorResponse:
    try:
        return to_tutor_response(use_case.get_tutor_by_user(user_id))
    except (DomainError, EdtechError):
        raise
    except Exception as e:
        raise _unexpected(f"get tutor of user {user_id}", e) from e


@router.get("/{tutor_id}", response_model=TutorResponse)
def get_tutor(
    tutor_id: str,
    use_case: TutorQueryUseCase = Depends(inject_use_case(container.tutor_query_use_case)),
) -> TutorResponse:
    try:
        return to_tutor_response(use_case.get_tutor(tutor_id))
    except (DomainError, EdtechError):
        raise
    except Exception as e:
        raise _unexpected(f"get tutor {tutor_id}", e) from e


@router.patch("/{tutor_id}", response_model=TutorResponse)
def update_tutor(
    tutor_id: str,
    request: TutorUpdateRequest,
    actor_id: ActorId,
    use_case: UpdateTutorProfileUseCase = Depends(
        inject_use_case(container.update_tutor_profile_use_case)
    ),
) -> TutorResponse:
    try:
        tutor = use_case.update_profile(
            tutor_id, request.model_dump(exclude_none=True), actor_id=actor_id
        )
        return to_tutor_response(tutor)
    except (DomainError, EdtechError):
        raise
    except Exception as e:
        raise _unexpected(f"update tutor {tutor_id}", e) from e


@router.post("/{tutor_id}/status", response_model=TutorResponse)
def change_tutor_status(
    tutor_id: str,
    request: StatusChangeRequest,
    actor_id: ActorId,
    use_case: ChangeTutorStatusUseCase = Depends(
        inject_use_case(container.change_tutor_status_use_case)
    ),
) -> TutorResponse:
    try:
        tutor = use_case.change_status(tutor_id, request.status, actor_id=actor_id)
        return to_tutor_response(tutor)
    except (DomainError, EdtechError):
        raise
    except Exception as e:
        raise _unexpected(f"change status of tutor {tutor_id}", e) from e


@router.post("/{tutor_id}/rating", response_model=TutorResponse)
def update_tutor_rating(
    tutor_id: str,
    request: TutorRatingRequest,
    use_case: TutorActivityUseCase = Depends(inject_use_case(container.tutor_activity_use_case)),
) -> TutorResponse:
    try:
        tutor = use_case.update_rating(tutor_id, request.rating, request.total_reviews)
        return to_tutor_response(tutor)
    except (DomainError, EdtechError):
        raise
    except Exception as e:
        raise _unexpected(f"update rating of tutor {tutor_id}", e) from e


@router.post("/{tutor_id}/sessions", response_model=TutorResponse)
def record_tutor_session(
    tutor_id: str,
    request: TutorSessionRequest,
    use_case: TutorActivityUseCase = Depends(inject_use_case(container.tutor_activity_use_case)),
) -> TutorResponse:
    try:
        return to_tutor_response(use_case.record_session(tutor_id, request.completed))
    except (DomainError, EdtechError):
        raise
    except Exception as e:
        raise _unexpected(f"record session for tutor {tutor_id}", e) from e


@router.get("/{tutor_id}/standing", response_model=TutorStandingResponse)
def get_tutor_standing(
    tutor_id: str,
    use_case: TutorQueryUseCase = Depends(inject_use_case(container.tutor_query_use_case)),
) -> TutorStandingResponse:
    """Tier, reputation and premium access computed from the tutor's record."""
    try:
        standing = use_case.get_standing(tutor_id)
        return TutorStandingResponse(
            tutor_id=standing.tutor_id,
            tier=standing.tier.value,
            reputation_score=standing.reputation_score,
            cancellation_rate=standing.cancellation_rate,
            completed_sessions=standing.completed_sessions,
            premium_access=standing.premium_access,
        )
    except (DomainError, EdtechError):
        raise
    except Exception as e:
        raise _unexpected(f"get standing of tutor {tutor_id}", e) from e


@router.delete("/{tutor_id}", response_model=SuccessResponse)
def delete_tutor(
    tutor_id: str,
    actor_id: ActorId,
    use_case: TutorQueryUseCase = Depends(inject_use_case(container.tutor_query_use_case)),
) -> SuccessResponse:
    try:
        use_case.delete_tutor(tutor_id)
        logger.info(f"Tutor {tutor_id} deleted by {actor_id}")
        return SuccessResponse(success=True, message="Tutor deleted successfully")
    except (DomainError, EdtechError):
        raise
    except Exception as e:
        raise _unexpected(f"delete tutor {tutor_id}", e) from e
