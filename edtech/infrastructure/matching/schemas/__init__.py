"""Matching context schemas."""

from edtech.infrastructure.matching.schemas.matching_request_schemas import (
    CancelRequest,
    ExpireOverdueResponse,
    MatchingRequestCreateRequest,
    MatchingRequestResponse,
    MatchingRequestUpdateRequest,
    MatchRequest,
)
from edtech.infrastructure.matching.schemas.tutor_schemas import (
    TutorCreateRequest,
    TutorRatingRequest,
    TutorResponse,
    TutorSessionRequest,
    TutorStandingResponse,
    TutorUpdateRequest,
)

__all__ = [
    "CancelRequest",
    "ExpireOverdueResponse",
    "MatchRequest",
    "MatchingRequestCreateRequest",
    "MatchingRequestResponse",
    "MatchingRequestUpdateRequest",
    "TutorCreateRequest",
    "TutorRatingRequest",
    "TutorResponse",
    "TutorSessionRequest",
    "TutorStandingResponse",
    "TutorUpdateRequest",
]
