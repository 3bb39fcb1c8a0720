"""
Base class for Entities.

Entities are objects that have a distinct identity that runs through time
and different states. Two entities are equal if they have the same identity,
regardless of their attributes.

Example:
    @dataclass(eq=False)
    class User(Entity[UserId]):
        id: UserId
        email: Email
"""

from abc import ABC
from dataclasses import dataclass
from typing import Generic, Self, TypeVar
from uuid import UUID, uuid4

from .exceptions import ValidationError
from .value_object import ValueObject


@dataclass(frozen=True, eq=False)
class EntityId(ValueObject):
    """
    Base class for strongly-typed entity identifiers.

    Entity IDs are value objects that wrap a UUID assigned when the
    aggregate is created. They provide type safety to prevent mixing up
    IDs of different entities.

    Example:
        @dataclass(frozen=True, eq=False)
        class UserId(EntityId):
            pass

        user_id = UserId.generate()
        tutor_id = TutorId(user_id.value)
        # These are different types, preventing accidental mixing
    """

    value: UUID

    def __post_init__(self) -> None:
        if not isinstance(self.value, UUID):
            raise ValidationError(
                f"{self.__class__.__name__} must be a UUID", field="id", value=self.value
            )

    def __str__(self) -> str:
        return str(self.value)

    @classmethod
    def generate(cls) -> Self:
        """Assign a fresh identity."""
        return cls(uuid4())

    @classmethod
    def from_string(cls, raw: str) -> Self:
        """
        Parse an identifier from its string form.

        Raises:
            ValidationError: If the string is empty or not a UUID
        """
        if not raw or not raw.strip():
            raise ValidationError(f"{cls.__name__} cannot be empty", field="id", value=raw)
        try:
            return cls(UUID(raw.strip()))
        except ValueError as err:
            raise ValidationError(
                f"{cls.__name__} must be a valid UUID", field="id", value=raw
            ) from err

    def to_primitive(self) -> str:
        """Convert to primitive for serialization."""
        return str(self.value)


IdType = TypeVar("IdType", bound=EntityId)


class Entity(ABC, Generic[IdType]):
    """
    Base class for Entities in the domain model.

    Entities are:
    - Defined by identity (not attributes)
    - Mutable (state can change over time)
    - Have lifecycle (created, modified, deleted)

    Subclasses must have an 'id' attribute of type IdType and be declared
    with @dataclass(eq=False) so identity equality is kept.
    """

    id: IdType

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.id})"
