"""
Event sink implementations.

- LoggingEventSink: writes each event to the structured log
- OutboxEventSink: stores each event as a row in ``outbox_events`` for a relay
- InMemoryEventSink: keeps events in a list (tests and local wiring)
"""

import threading

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from edtech.application.common.exceptions import PublishError
from edtech.domain.common.domain_event import DomainEvent
from edtech.models import OutboxEvent as OutboxEventORM

logger = structlog.get_logger(__name__)


class LoggingEventSink:
    def publish(self, event: DomainEvent) -> None:
        logger.info(
            "domain_event_published",
            event_type=event.event_type,
            aggregate_id=event.aggregate_id,
            payload=event.to_dict(),
        )


class OutboxEventSink:
    """Persists events to the outbox table, one commit per event."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def publish(self, event: DomainEvent) -> None:
        """
        Raises:
            PublishError: If the outbox row could not be written
        """
        row = OutboxEventORM(
            id=event.event_id,
            event_type=event.event_type,
            aggregate_id=event.aggregate_id,
            payload=event.to_dict(),
            occurred_at=event.occurred_at,
        )
        try:
            self.db.add(row)
            self.db.commit()
        except SQLAlchemyError as err:
            self.db.rollback()
            raise PublishError(event.event_type, str(err)) from err


class InMemoryEventSink:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._events: list[DomainEvent] = []

    def publish(self, event: DomainEvent) -> None:
        with self._lock:
            self._events.append(event)

    @property
    def events(self) -> list[DomainEvent]:
        with self._lock:
            return list(self._events)

    def event_types(self) -> list[str]:
        return [event.event_type for event in self.events]

    def clear(self) -> None:
        with self._lock:
            self._events.clear()
