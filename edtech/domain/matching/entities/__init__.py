from .matching_request import (
    MATCHING_REQUEST_DIRECT_TRANSITIONS,
    MATCHING_REQUEST_STATUS_TRANSITIONS,
    MatchingRequest,
)
from .tutor import TUTOR_STATUS_TRANSITIONS, Tutor

__all__ = [
    "MATCHING_REQUEST_DIRECT_TRANSITIONS",
    "MATCHING_REQUEST_STATUS_TRANSITIONS",
    "TUTOR_STATUS_TRANSITIONS",
    "MatchingRequest",
    "Tutor",
]
