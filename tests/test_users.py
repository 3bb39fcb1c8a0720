"""Tests for user API endpoints."""

from collections.abc import Callable
from typing import Any

from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy import select
from sqlalchemy.orm import Session

from edtech import models

MISSING_ID = "00000000-0000-0000-0000-000000000000"


class TestCreateUser:
    """Test suite for POST /users."""

    def test_create_user_success(self, client: TestClient, db_session: Session) -> None:
        response = client.post(
            "/api/v1/users",
            json={"email": "Ada@Example.com", "first_name": "ada", "last_name": "lovelace"},
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["email"] == "ada@example.com"
        assert data["full_name"] == "Ada Lovelace"
        assert data["role"] == "STUDENT"
        assert data["status"] == "PENDING_VERIFICATION"
        assert data["failed_login_attempts"] == 0

        # Verify the created event reached the outbox
        events = db_session.execute(select(models.OutboxEvent)).scalars().all()
        assert [event.event_type for event in events] == ["UserCreated"]
        assert events[0].aggregate_id == data["id"]

    def test_create_user_duplicate_email(
        self, client: TestClient, register_user: Callable[..., dict[str, Any]]
    ) -> None:
        register_user()

        response = client.post(
            "/api/v1/users",
            json={"email": "ADA@example.com", "first_name": "Other", "last_name": "Person"},
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert "already exists" in response.json()["detail"]

    def test_create_user_reports_every_invalid_field(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/users",
            json={"email": "nope", "first_name": "", "last_name": "", "role": "wizard"},
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
        fields = [error["field"] for error in response.json()["errors"]]
        assert fields == ["email", "first_name", "last_name", "role"]


class TestReadUsers:
    def test_get_user(
        self, client: TestClient, register_user: Callable[..., dict[str, Any]]
    ) -> None:
        user = register_user()

        response = client.get(f"/api/v1/users/{user['id']}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "ACTIVE"

    def test_get_missing_user(self, client: TestClient) -> None:
        response = client.get(f"/api/v1/users/{MISSING_ID}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {
            "detail": f"User with id {MISSING_ID} not found",
            "errors": [],
        }

    def test_malformed_id(self, client: TestClient) -> None:
        response = client.get("/api/v1/users/not-a-uuid")
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT

    def test_list_users_paginates(
        self, client: TestClient, register_user: Callable[..., dict[str, Any]]
    ) -> None:
        for index in range(3):
            register_user(email=f"user{index}@example.com")

        response = client.get("/api/v1/users", params={"page": 2, "page_size": 2})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["total"] == 3
        assert data["page"] == 2
        assert data["total_pages"] == 2
        assert len(data["items"]) == 1

    def test_list_users_rejects_oversized_page(self, client: TestClient) -> None:
        response = client.get("/api/v1/users", params={"page_size": 500})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
        assert response.json()["errors"][0]["field"] == "page_size"


class TestUpdateUser:
    def test_update_profile(
        self,
        client: TestClient,
        register_user: Callable[..., dict[str, Any]],
        actor_headers: dict[str, str],
    ) -> None:
        user = register_user()

        response = client.patch(
            f"/api/v1/users/{user['id']}",
            json={"bio": "Analyst", "skills": ["algebra"]},
            headers=actor_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["bio"] == "Analyst"
        assert data["skills"] == ["algebra"]

    def test_second_email_change_within_cooldown_is_refused(
        self,
        client: TestClient,
        register_user: Callable[..., dict[str, Any]],
        actor_headers: dict[str, str],
    ) -> None:
        user = register_user()
        url = f"/api/v1/users/{user['id']}"

        first = client.patch(url, json={"email": "augusta@example.com"}, headers=actor_headers)
        assert first.status_code == status.HTTP_200_OK
        assert first.json()["email_changed_at"] is not None

        second = client.patch(url, json={"email": "ada.b@example.com"}, headers=actor_headers)

        assert second.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
        assert client.get(url).json()["email"] == "augusta@example.com"

    def test_update_requires_actor(
        self, client: TestClient, register_user: Callable[..., dict[str, Any]]
    ) -> None:
        user = register_user()

        response = client.patch(f"/api/v1/users/{user['id']}", json={"bio": "Analyst"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "X-Actor-Id header is required"

    def test_update_rejects_unknown_status_transition(
        self,
        client: TestClient,
        register_user: Callable[..., dict[str, Any]],
        actor_headers: dict[str, str],
    ) -> None:
        user = register_user(active=False)

        response = client.post(
            f"/api/v1/users/{user['id']}/status",
            json={"status": "SUSPENDED"},
            headers=actor_headers,
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
        assert response.json()["errors"][0]["field"] == "status"


class TestRoles:
    def test_become_tutor_after_waiting_period(
        self,
        client: TestClient,
        register_user: Callable[..., dict[str, Any]],
        backdate_user: Callable[[str, int], None],
        actor_headers: dict[str, str],
    ) -> None:
        user = register_user()
        backdate_user(user["id"], 8)

        eligibility = client.get(f"/api/v1/users/{user['id']}/tutor-eligibility").json()
        response = client.post(f"/api/v1/users/{user['id']}/become-tutor", headers=actor_headers)

        assert eligibility["eligible"] is True
        assert eligibility["account_age_days"] == 8
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["role"] == "TUTOR"

    def test_become_tutor_too_early(
        self,
        client: TestClient,
        register_user: Callable[..., dict[str, Any]],
        actor_headers: dict[str, str],
    ) -> None:
        user = register_user()

        eligibility = client.get(f"/api/v1/users/{user['id']}/tutor-eligibility").json()
        response = client.post(f"/api/v1/users/{user['id']}/become-tutor", headers=actor_headers)

        assert eligibility["eligible"] is False
        assert eligibility["reasons"] == ["account must be at least 7 days old"]
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
        assert "7 days old" in response.json()["detail"]

    def test_privileged_role_refused(
        self,
        client: TestClient,
        register_user: Callable[..., dict[str, Any]],
        actor_headers: dict[str, str],
    ) -> None:
        user = register_user()

        response = client.post(
            f"/api/v1/users/{user['id']}/role", json={"role": "ADMIN"}, headers=actor_headers
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT


class TestLogins:
    def test_repeated_failures_lock_the_account(
        self, client: TestClient, register_user: Callable[..., dict[str, Any]]
    ) -> None:
        user = register_user()
        url = f"/api/v1/users/{user['id']}/logins"

        results = [client.post(url, json={"successful": False}).json() for _ in range(3)]
        rejected = client.post(url, json={"successful": True})

        assert [result["locked"] for result in results] == [False, False, True]
        assert results[-1]["user"]["status"] == "SUSPENDED"
        assert rejected.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT

    def test_success_resets_failures(
        self, client: TestClient, register_user: Callable[..., dict[str, Any]]
    ) -> None:
        user = register_user()
        url = f"/api/v1/users/{user['id']}/logins"
        client.post(url, json={"successful": False})

        response = client.post(url, json={"successful": True})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["failed_attempts"] == 0
        assert data["user"]["last_login_at"] is not None


class TestDeleteUser:
    def test_delete_user(
        self,
        client: TestClient,
        register_user: Callable[..., dict[str, Any]],
        actor_headers: dict[str, str],
    ) -> None:
        user = register_user()

        response = client.delete(f"/api/v1/users/{user['id']}", headers=actor_headers)
        missing = client.get(f"/api/v1/users/{user['id']}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"success": True, "message": "User deleted successfully"}
        assert missing.status_code == status.HTTP_404_NOT_FOUND
