"""
Pending domain events for an aggregate.

Aggregates hold an EventQueue as a field instead of inheriting a shared
mutable base class. Anything exposing ``pending_events`` and
``drain_events()`` satisfies HasPendingEvents, which is all the
application layer needs to dispatch events after persisting.

Example:
    @dataclass(eq=False)
    class Tutor(Entity[TutorId]):
        id: TutorId
        _events: EventQueue = field(default_factory=EventQueue, init=False, repr=False)

        def approve(self) -> None:
            ...
            self._events.append(TutorStatusChanged(...))

        def drain_events(self) -> list[DomainEvent]:
            return self._events.drain()
"""

from collections.abc import Iterator
from typing import Protocol, runtime_checkable

from .domain_event import DomainEvent


class EventQueue:
    """
    Ordered, append-only list of events waiting to be published.

    Events can only be appended or drained; draining hands the events
    over exactly once.
    """

    __slots__ = ("_events",)

    def __init__(self) -> None:
        self._events: list[DomainEvent] = []

    def append(self, event: DomainEvent) -> None:
        self._events.append(event)

    def drain(self) -> list[DomainEvent]:
        """Return all pending events and clear the queue."""
        events = self._events
        self._events = []
        return events

    def snapshot(self) -> list[DomainEvent]:
        """Return pending events without clearing them."""
        return list(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[DomainEvent]:
        return iter(list(self._events))


@runtime_checkable
class HasPendingEvents(Protocol):
    """An aggregate that records domain events for later dispatch."""

    @property
    def pending_events(self) -> list[DomainEvent]: ...

    def drain_events(self) -> list[DomainEvent]: ...
