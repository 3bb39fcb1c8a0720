"""Shared value objects."""

from .email import Email
from .ids import MatchingRequestId, TutorId, UserId
from .parsable_enum import ParsableEnum
from .user_name import UserName

__all__ = [
    "Email",
    "MatchingRequestId",
    "ParsableEnum",
    "TutorId",
    "UserId",
    "UserName",
]
