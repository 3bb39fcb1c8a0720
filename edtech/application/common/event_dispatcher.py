"""
Publishing drained domain events.

Use cases save the aggregate first and then hand it to an ``EventDispatcher``.
Every drained event is published through the configured sink with bounded
exponential backoff. An event that still fails after the last attempt is
written to the dead-letter store and logged at warning level; the entity
stays saved. A failure of the dead-letter store itself propagates.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

import structlog

from edtech.application.common.exceptions import PublishError
from edtech.domain.common.domain_event import DomainEvent
from edtech.domain.common.event_queue import HasPendingEvents

logger = structlog.get_logger(__name__)


class EventSinkProtocol(Protocol):
    def publish(self, event: DomainEvent) -> None:
        """Deliver one event; raise PublishError when delivery fails."""
        ...


class DeadLetterStoreProtocol(Protocol):
    def add(self, event: DomainEvent, error: str) -> None: ...


@dataclass(frozen=True)
class RetryPolicy:
    """
    Bounded exponential backoff for event publishing.

    Attributes:
        max_attempts: Total publish attempts, including the first one
        initial_delay: Seconds to wait after the first failure
        max_delay: Upper bound for any single wait
        backoff_multiplier: Factor applied to the delay after each failure
    """

    max_attempts: int = 3
    initial_delay: float = 0.1
    max_delay: float = 2.0
    backoff_multiplier: float = 2.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.initial_delay < 0:
            raise ValueError("initial_delay must be non-negative")
        if self.max_delay < self.initial_delay:
            raise ValueError("max_delay must be >= initial_delay")
        if self.backoff_multiplier < 1:
            raise ValueError("backoff_multiplier must be at least 1")

    def calculate_delay(self, attempt: int) -> float:
        """
        Seconds to wait after failed attempt number ``attempt`` (1-based).
        """
        if attempt <= 0:
            return 0.0
        delay = self.initial_delay * (self.backoff_multiplier ** (attempt - 1))
        return min(delay, self.max_delay)


def publish_with_retry(
    sink: EventSinkProtocol,
    event: DomainEvent,
    policy: RetryPolicy,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """
    Publish ``event``, retrying PublishError with backoff.

    Other exceptions are not retried and propagate unchanged.

    Returns:
        Number of attempts it took

    Raises:
        PublishError: The error of the last attempt once all are used up
    """
    attempt = 1
    while True:
        try:
            sink.publish(event)
            return attempt
        except PublishError as err:
            if attempt >= policy.max_attempts:
                raise
            delay = policy.calculate_delay(attempt)
            logger.info(
                "domain_event_publish_retry",
                event_type=event.event_type,
                event_id=str(event.event_id),
                attempt=attempt,
                delay_seconds=delay,
                error=str(err),
            )
            sleep(delay)
            attempt += 1


@dataclass
class DispatchReport:
    """What happened to the events drained from one aggregate."""

    published: list[DomainEvent] = field(default_factory=list)
    dead_lettered: list[DomainEvent] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.published) + len(self.dead_lettered)


class EventDispatcher:
    """Drains aggregates and owns the publish, retry and dead-letter policy."""

    def __init__(
        self,
        sink: EventSinkProtocol,
        dead_letter_store: DeadLetterStoreProtocol,
        retry_policy: RetryPolicy | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.sink = sink
        self.dead_letter_store = dead_letter_store
        self.retry_policy = retry_policy or RetryPolicy()
        self._sleep = sleep

    def dispatch(self, aggregate: HasPendingEvents) -> DispatchReport:
        """
        Drain ``aggregate`` and publish its events in order.

        Call only after the aggregate has been saved.
        """
        report = DispatchReport()
        for event in aggregate.drain_events():
            try:
                publish_with_retry(self.sink, event, self.retry_policy, self._sleep)
            except PublishError as err:
                logger.warning(
                    "domain_event_dead_lettered",
                    event_type=event.event_type,
                    event_id=str(event.event_id),
                    aggregate_id=event.aggregate_id,
                    attempts=self.retry_policy.max_attempts,
                    error=str(err),
                )
                self.dead_letter_store.add(event, str(err))
                report.dead_lettered.append(event)
            else:
                report.published.append(event)
        return report
