"""Storage for events that exhausted every publish attempt."""

import threading
from dataclasses import dataclass, field
from datetime import UTC, datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from edtech.domain.common.domain_event import DomainEvent
from edtech.models import DeadLetterEvent as DeadLetterEventORM


@dataclass(frozen=True)
class DeadLetterEntry:
    event: DomainEvent
    error: str
    failed_at: datetime = field(default_factory=lambda: datetime.now(UTC))


class SqlDeadLetterStore:
    """Writes dead letters to ``dead_letter_events``; failures propagate."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def add(self, event: DomainEvent, error: str) -> None:
        row = DeadLetterEventORM(
            event_id=event.event_id,
            event_type=event.event_type,
            aggregate_id=event.aggregate_id,
            payload=event.to_dict(),
            error=error,
            occurred_at=event.occurred_at,
        )
        try:
            self.db.add(row)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise


class InMemoryDeadLetterStore:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: list[DeadLetterEntry] = []

    def add(self, event: DomainEvent, error: str) -> None:
        with self._lock:
            self._entries.append(DeadLetterEntry(event=event, error=error))

    @property
    def entries(self) -> list[DeadLetterEntry]:
        with self._lock:
            return list(self._entries)
