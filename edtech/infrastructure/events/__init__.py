"""Event sinks and dead-letter stores."""

from .dead_letter_stores import DeadLetterEntry, InMemoryDeadLetterStore, SqlDeadLetterStore
from .event_sinks import InMemoryEventSink, LoggingEventSink, OutboxEventSink

__all__ = [
    "DeadLetterEntry",
    "InMemoryDeadLetterStore",
    "InMemoryEventSink",
    "LoggingEventSink",
    "OutboxEventSink",
    "SqlDeadLetterStore",
]
