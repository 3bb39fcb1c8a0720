"""Pytest configuration and fixtures."""

import os
from collections.abc import Callable, Generator
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("EVENT_SINK", "outbox")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from edtech import models  # noqa: E402
from edtech.application.common.event_dispatcher import EventDispatcher, RetryPolicy  # noqa: E402
from edtech.database import Base, get_db  # noqa: E402
from edtech.domain.identity.entities.user import User  # noqa: E402
from edtech.domain.identity.value_objects import UserStatus  # noqa: E402
from edtech.domain.matching.entities.tutor import Tutor  # noqa: E402
from edtech.domain.matching.value_objects import TutorStatus  # noqa: E402
from edtech.infrastructure.events import InMemoryDeadLetterStore, InMemoryEventSink  # noqa: E402
from edtech.infrastructure.identity.repositories import InMemoryUserRepository  # noqa: E402
from edtech.infrastructure.matching.repositories import (  # noqa: E402
    InMemoryMatchingRequestRepository,
    InMemoryTutorRepository,
)
from edtech.main import app  # noqa: E402

# Test database URL (in-memory SQLite shared across threads)
TEST_DATABASE_URL = "sqlite:///:memory:"

test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

ACTOR = {"X-Actor-Id": "admin-1"}


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, Any, None]:
    """Create a test client with database session."""

    def override_get_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def actor_headers() -> dict[str, str]:
    return dict(ACTOR)


@pytest.fixture
def backdate_user(db_session: Session) -> Callable[[str, int], None]:
    """Move a stored user's creation date ``days`` into the past."""

    def backdate(user_id: str, days: int) -> None:
        row = db_session.get(models.User, UUID(user_id))
        assert row is not None
        row.created_at = datetime.now(UTC) - timedelta(days=days)
        db_session.commit()

    return backdate


# In-memory wiring for use case tests


@pytest.fixture
def event_sink() -> InMemoryEventSink:
    return InMemoryEventSink()


@pytest.fixture
def dead_letter_store() -> InMemoryDeadLetterStore:
    return InMemoryDeadLetterStore()


@pytest.fixture
def dispatcher(
    event_sink: InMemoryEventSink, dead_letter_store: InMemoryDeadLetterStore
) -> EventDispatcher:
    return EventDispatcher(
        event_sink,
        dead_letter_store,
        RetryPolicy(max_attempts=3, initial_delay=0.0, max_delay=0.0),
        sleep=lambda _seconds: None,
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def tutor_repository() -> InMemoryTutorRepository:
    return InMemoryTutorRepository()


@pytest.fixture
def matching_request_repository() -> InMemoryMatchingRequestRepository:
    return InMemoryMatchingRequestRepository()


@pytest.fixture
def make_user() -> Callable[..., User]:
    """Build a user; ``age_days`` backdates creation, ``active`` activates it."""

    def build(
        email: str = "ada@example.com",
        role: str | None = None,
        active: bool = True,
        age_days: int = 0,
    ) -> User:
        created = datetime.now(UTC) - timedelta(days=age_days)
        user = User.create(email, "Ada", "Lovelace", role=role, now=created)
        if active:
            user.transition(UserStatus.ACTIVE, "admin-1", now=created)
        user.drain_events()
        return user

    return build


@pytest.fixture
def make_tutor() -> Callable[..., Tutor]:
    def build(
        user_id: Any,
        subjects: tuple[str, ...] = ("MATHEMATICS",),
        experience_level: str = "ADVANCED",
        hourly_rate: str = "40",
        languages: tuple[str, ...] = ("English",),
        active: bool = True,
    ) -> Tutor:
        tutor = Tutor.create(
            user_id=user_id,
            bio="Patient maths tutor",
            subjects=list(subjects),
            experience_level=experience_level,
            hourly_rate=hourly_rate,
            languages=list(languages),
            education="MSc Mathematics",
        )
        if active:
            tutor.transition(TutorStatus.ACTIVE, "admin-1")
        tutor.drain_events()
        return tutor

    return build


# API helpers


@pytest.fixture
def register_user(client: TestClient) -> Callable[..., dict[str, Any]]:
    """Create a user through the API, activated unless ``active`` is False."""

    def register(
        email: str = "ada@example.com", role: str | None = None, active: bool = True
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {"email": email, "first_name": "Ada", "last_name": "Lovelace"}
        if role is not None:
            payload["role"] = role
        response = client.post("/api/v1/users", json=payload)
        assert response.status_code == 201, response.text
        user = response.json()
        if active:
            response = client.post(
                f"/api/v1/users/{user['id']}/status", json={"status": "ACTIVE"}, headers=ACTOR
            )
            assert response.status_code == 200, response.text
            user = response.json()
        return user

    return register


@pytest.fixture
def register_tutor(
    client: TestClient, register_user: Callable[..., dict[str, Any]]
) -> Callable[..., dict[str, Any]]:
    """Create a TUTOR user plus a tutor profile, approved unless ``approve`` is False."""

    def register(
        email: str = "tutor@example.com", approve: bool = True, **profile: Any
    ) -> dict[str, Any]:
        owner = register_user(email=email, role="TUTOR")
        payload = {
            "user_id": owner["id"],
            "bio": "Patient maths tutor",
            "subjects": ["MATHEMATICS"],
            "experience_level": "ADVANCED",
            "hourly_rate": "40",
            "languages": ["English"],
            "education": "MSc Mathematics",
            **profile,
        }
        response = client.post("/api/v1/tutors", json=payload)
        assert response.status_code == 201, response.text
        tutor = response.json()
        if approve:
            response = client.post(
                f"/api/v1/tutors/{tutor['id']}/status", json={"status": "ACTIVE"}, headers=ACTOR
            )
            assert response.status_code == 200, response.text
            tutor = response.json()
        return tutor

    return register
