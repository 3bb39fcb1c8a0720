"""Tests for publishing domain events with retries and dead-lettering."""

import pytest

from edtech.application.common.event_dispatcher import (
    EventDispatcher,
    RetryPolicy,
    publish_with_retry,
)
from edtech.application.common.exceptions import PublishError
from edtech.domain.common.domain_event import DomainEvent
from edtech.domain.identity.entities.user import User
from edtech.infrastructure.events import InMemoryDeadLetterStore, InMemoryEventSink


class FlakySink:
    """Fails the first ``failures`` publish calls, then delivers."""

    def __init__(self, failures: int, error: Exception | None = None) -> None:
        self.failures = failures
        self.error = error
        self.calls = 0
        self.delivered: list[DomainEvent] = []

    def publish(self, event: DomainEvent) -> None:
        self.calls += 1
        if self.calls <= self.failures:
            raise self.error or PublishError(event.event_type, "broker unavailable")
        self.delivered.append(event)


class BrokenDeadLetterStore:
    def add(self, event: DomainEvent, error: str) -> None:
        raise RuntimeError("dead letter table missing")


def _user() -> User:
    return User.create("ada@example.com", "Ada", "Lovelace")


class TestRetryPolicy:
    def test_backoff_doubles_and_caps(self):
        policy = RetryPolicy(max_attempts=5, initial_delay=0.1, max_delay=0.3)
        delays = [policy.calculate_delay(attempt) for attempt in range(1, 5)]
        assert delays == pytest.approx([0.1, 0.2, 0.3, 0.3])

    def test_no_delay_before_first_attempt(self):
        assert RetryPolicy().calculate_delay(0) == 0.0

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_attempts": 0},
            {"initial_delay": -1},
            {"initial_delay": 2, "max_delay": 1},
            {"backoff_multiplier": 0.5},
        ],
    )
    def test_rejects_invalid_settings(self, kwargs):
        with pytest.raises(ValueError):
            RetryPolicy(**kwargs)


class TestPublishWithRetry:
    def test_succeeds_after_transient_failures(self):
        sink = FlakySink(failures=2)
        sleeps: list[float] = []
        event = _user().drain_events()[0]

        attempts = publish_with_retry(
            sink, event, RetryPolicy(max_attempts=3, initial_delay=0.1), sleeps.append
        )

        assert attempts == 3
        assert sink.delivered == [event]
        assert sleeps == pytest.approx([0.1, 0.2])

    def test_raises_last_error_when_exhausted(self):
        sink = FlakySink(failures=5)
        event = _user().drain_events()[0]

        with pytest.raises(PublishError):
            publish_with_retry(sink, event, RetryPolicy(max_attempts=2), lambda _s: None)
        assert sink.calls == 2

    def test_other_errors_are_not_retried(self):
        sink = FlakySink(failures=1, error=RuntimeError("bug"))
        event = _user().drain_events()[0]

        with pytest.raises(RuntimeError):
            publish_with_retry(sink, event, RetryPolicy(max_attempts=3), lambda _s: None)
        assert sink.calls == 1


class TestEventDispatcher:
    def test_publishes_in_order_and_drains(self):
        sink = InMemoryEventSink()
        dispatcher = EventDispatcher(sink, InMemoryDeadLetterStore(), sleep=lambda _s: None)
        user = _user()
        user.activate("admin-1")

        report = dispatcher.dispatch(user)

        assert sink.event_types() == ["UserCreated", "UserStatusChanged"]
        assert report.total == 2
        assert report.dead_lettered == []
        assert user.pending_events == []

    def test_dead_letters_after_exhausting_retries(self):
        store = InMemoryDeadLetterStore()
        dispatcher = EventDispatcher(
            FlakySink(failures=3),
            store,
            RetryPolicy(max_attempts=3, initial_delay=0.0, max_delay=0.0),
            sleep=lambda _s: None,
        )
        user = _user()
        user.activate("admin-1")

        report = dispatcher.dispatch(user)

        assert [event.event_type for event in report.dead_lettered] == ["UserCreated"]
        assert [event.event_type for event in report.published] == ["UserStatusChanged"]
        assert len(store.entries) == 1
        assert "broker unavailable" in store.entries[0].error

    def test_dead_letter_store_failure_propagates(self):
        dispatcher = EventDispatcher(
            FlakySink(failures=10),
            BrokenDeadLetterStore(),
            RetryPolicy(max_attempts=1),
            sleep=lambda _s: None,
        )
        with pytest.raises(RuntimeError, match="dead letter table missing"):
            dispatcher.dispatch(_user())

    def test_nothing_to_dispatch(self):
        sink = InMemoryEventSink()
        user = _user()
        user.drain_events()
        report = EventDispatcher(sink, InMemoryDeadLetterStore()).dispatch(user)
        assert report.total == 0
        assert sink.events == []
