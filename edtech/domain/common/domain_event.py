"""
Base class for Domain Events.

Domain Events represent something significant that happened in the domain.
They are immutable records of past occurrences that other parts of the
system can react to.

Example:
    @dataclass(frozen=True)
    class TutorCreated(DomainEvent):
        tutor_id: TutorId
        user_id: UserId
"""

from dataclasses import dataclass, field, fields
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID, uuid4


def _to_primitive(value: object) -> object:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, tuple | list):
        return [_to_primitive(item) for item in value]
    if hasattr(value, "to_primitive"):
        return value.to_primitive()
    return value


@dataclass(frozen=True)
class DomainEvent:
    """
    Base class for Domain Events.

    Domain Events are:
    - Immutable (frozen dataclass)
    - Named in past tense (TutorCreated, not CreateTutor)
    - Self-contained (carry all data needed to understand what happened)
    - Timestamped (when the event occurred)

    Subclasses should be decorated with @dataclass(frozen=True)
    and define their specific attributes. The base attributes are
    keyword-only so subclasses can declare required fields.
    """

    event_id: UUID = field(default_factory=uuid4, kw_only=True)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC), kw_only=True)

    @property
    def event_type(self) -> str:
        """Return the event type name for serialization."""
        return self.__class__.__name__

    @property
    def aggregate_id(self) -> str:
        """Identity of the aggregate that recorded the event."""
        raise NotImplementedError

    def to_dict(self) -> dict[str, object]:
        """Convert event to dictionary for serialization."""
        result: dict[str, object] = {
            f.name: _to_primitive(getattr(self, f.name)) for f in fields(self)
        }
        result["event_type"] = self.event_type
        return result
