from dataclasses import dataclass

from ..entity import EntityId


@dataclass(frozen=True, eq=False)
class UserId(EntityId):
    """Strongly-typed user identifier."""


@dataclass(frozen=True, eq=False)
class TutorId(EntityId):
    """Strongly-typed tutor identifier."""


@dataclass(frozen=True, eq=False)
class MatchingRequestId(EntityId):
    """Strongly-typed matching request identifier."""
