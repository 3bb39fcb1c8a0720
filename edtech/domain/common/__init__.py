"""
Domain common module.

Contains base building blocks for domain modeling:
- ValueObject: Immutable objects defined by their attributes
- Entity: Objects with identity and lifecycle
- EventQueue: Pending domain events held by an aggregate
- DomainEvent: Notifications of significant domain occurrences
- StatusTransitions: Fixed status graph of an aggregate
"""

from .domain_event import DomainEvent
from .entity import Entity, EntityId
from .event_queue import EventQueue, HasPendingEvents
from .exceptions import (
    BusinessRuleViolationError,
    ConflictError,
    DomainError,
    EntityNotFoundError,
    FieldError,
    InvalidTransitionError,
    InvariantViolationError,
    ValidationError,
)
from .status_transitions import StatusTransitions
from .value_object import ValueObject

__all__ = [
    "BusinessRuleViolationError",
    "ConflictError",
    "DomainError",
    "DomainEvent",
    "Entity",
    "EntityId",
    "EntityNotFoundError",
    "EventQueue",
    "FieldError",
    "HasPendingEvents",
    "InvalidTransitionError",
    "InvariantViolationError",
    "StatusTransitions",
    "ValidationError",
    "ValueObject",
]
