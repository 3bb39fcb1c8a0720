"""Tests for the outbox sink, the dead-letter stores and SQL-backed dispatching."""

import pytest
from sqlalchemy import select

from edtech import models
from edtech.application.common.event_dispatcher import EventDispatcher, RetryPolicy
from edtech.application.common.exceptions import PublishError
from edtech.domain.identity.entities.user import User
from edtech.infrastructure.events import (
    InMemoryDeadLetterStore,
    LoggingEventSink,
    OutboxEventSink,
    SqlDeadLetterStore,
)


class RejectingSink:
    def publish(self, event):
        raise PublishError(event.event_type, "queue full")


def _user_with_events() -> User:
    user = User.create("ada@example.com", "Ada", "Lovelace")
    user.activate("admin-1")
    return user


class TestOutboxEventSink:
    def test_writes_one_row_per_event(self, db_session):
        user = _user_with_events()
        dispatcher = EventDispatcher(OutboxEventSink(db_session), SqlDeadLetterStore(db_session))

        dispatcher.dispatch(user)

        rows = db_session.execute(select(models.OutboxEvent)).scalars().all()
        by_type = {row.event_type: row for row in rows}
        assert set(by_type) == {"UserCreated", "UserStatusChanged"}
        assert all(row.aggregate_id == str(user.id) for row in rows)
        assert by_type["UserCreated"].payload["email"] == "ada@example.com"
        assert by_type["UserStatusChanged"].payload["to_status"] == "ACTIVE"
        assert by_type["UserCreated"].published_at is None

    def test_duplicate_event_id_is_a_publish_error(self, db_session):
        event = _user_with_events().drain_events()[0]
        sink = OutboxEventSink(db_session)
        sink.publish(event)

        with pytest.raises(PublishError):
            sink.publish(event)


class TestDeadLetterStores:
    def test_sql_store_keeps_failed_events(self, db_session):
        dispatcher = EventDispatcher(
            RejectingSink(),
            SqlDeadLetterStore(db_session),
            RetryPolicy(max_attempts=2, initial_delay=0.0, max_delay=0.0),
            sleep=lambda _seconds: None,
        )
        user = _user_with_events()

        report = dispatcher.dispatch(user)

        rows = db_session.execute(select(models.DeadLetterEvent)).scalars().all()
        assert len(report.dead_lettered) == 2
        assert {row.event_type for row in rows} == {"UserCreated", "UserStatusChanged"}
        assert all("queue full" in row.error for row in rows)

    def test_in_memory_store(self):
        store = InMemoryDeadLetterStore()
        event = _user_with_events().drain_events()[0]

        store.add(event, "boom")

        assert [(entry.event, entry.error) for entry in store.entries] == [(event, "boom")]


class TestLoggingEventSink:
    def test_publish_does_not_raise(self):
        LoggingEventSink().publish(_user_with_events().drain_events()[0])
