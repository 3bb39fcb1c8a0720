"""Tests for tutor API endpoints."""

from collections.abc import Callable
from decimal import Decimal
from typing import Any

from fastapi import status
from fastapi.testclient import TestClient

MISSING_ID = "00000000-0000-0000-0000-000000000000"

PROFILE = {
    "bio": "Patient maths tutor",
    "subjects": ["mathematics"],
    "experience_level": "advanced",
    "hourly_rate": "40",
    "languages": ["English"],
    "education": "MSc Mathematics",
}


class TestCreateTutor:
    """Test suite for POST /tutors."""

    def test_create_tutor_success(
        self, client: TestClient, register_user: Callable[..., dict[str, Any]]
    ) -> None:
        owner = register_user(email="tutor@example.com", role="TUTOR")

        response = client.post("/api/v1/tutors", json={"user_id": owner["id"], **PROFILE})

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["user_id"] == owner["id"]
        assert data["status"] == "PENDING_APPROVAL"
        assert data["subjects"] == ["MATHEMATICS"]
        assert data["experience_level"] == "ADVANCED"
        assert Decimal(data["hourly_rate"]) == Decimal("40")
        assert data["currency"] == "USD"

    def test_student_cannot_create_profile(
        self, client: TestClient, register_user: Callable[..., dict[str, Any]]
    ) -> None:
        student = register_user()

        response = client.post("/api/v1/tutors", json={"user_id": student["id"], **PROFILE})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
        assert "cannot have a tutor profile" in response.json()["detail"]

    def test_second_profile_conflicts(
        self, client: TestClient, register_tutor: Callable[..., dict[str, Any]]
    ) -> None:
        tutor = register_tutor()

        response = client.post("/api/v1/tutors", json={"user_id": tutor["user_id"], **PROFILE})

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_unknown_owner(self, client: TestClient) -> None:
        response = client.post("/api/v1/tutors", json={"user_id": MISSING_ID, **PROFILE})
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_invalid_profile_lists_fields(
        self, client: TestClient, register_user: Callable[..., dict[str, Any]]
    ) -> None:
        owner = register_user(email="tutor@example.com", role="TUTOR")

        response = client.post(
            "/api/v1/tutors",
            json={
                "user_id": owner["id"],
                **PROFILE,
                "subjects": ["ASTROLOGY"],
                "currency": "dollars",
            },
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
        fields = {error["field"] for error in response.json()["errors"]}
        assert {"subjects", "currency"} <= fields


class TestTutorLifecycle:
    def test_approve_and_suspend(
        self,
        client: TestClient,
        register_tutor: Callable[..., dict[str, Any]],
        actor_headers: dict[str, str],
    ) -> None:
        tutor = register_tutor()

        response = client.post(
            f"/api/v1/tutors/{tutor['id']}/status",
            json={"status": "suspended"},
            headers=actor_headers,
        )

        assert tutor["status"] == "ACTIVE"
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "SUSPENDED"

    def test_status_change_requires_actor(
        self, client: TestClient, register_tutor: Callable[..., dict[str, Any]]
    ) -> None:
        tutor = register_tutor(approve=False)

        response = client.post(f"/api/v1/tutors/{tutor['id']}/status", json={"status": "ACTIVE"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_update_profile(
        self,
        client: TestClient,
        register_tutor: Callable[..., dict[str, Any]],
        actor_headers: dict[str, str],
    ) -> None:
        tutor = register_tutor()

        response = client.patch(
            f"/api/v1/tutors/{tutor['id']}",
            json={"hourly_rate": "55", "languages": ["English", "Spanish"]},
            headers=actor_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert Decimal(data["hourly_rate"]) == Decimal("55")
        assert data["languages"] == ["English", "Spanish"]


class TestTutorActivity:
    def test_rating_and_sessions_feed_standing(
        self, client: TestClient, register_tutor: Callable[..., dict[str, Any]]
    ) -> None:
        tutor = register_tutor()
        base = f"/api/v1/tutors/{tutor['id']}"

        rating = client.post(f"{base}/rating", json={"rating": "4.2", "total_reviews": 12})
        for completed in (True, True, True, False):
            client.post(f"{base}/sessions", json={"completed": completed})
        standing = client.get(f"{base}/standing")

        assert rating.status_code == status.HTTP_200_OK
        assert Decimal(rating.json()["rating"]) == Decimal("4.2")
        assert standing.status_code == status.HTTP_200_OK
        data = standing.json()
        assert data["completed_sessions"] == 3
        assert data["cancellation_rate"] == 0.25
        assert data["reputation_score"] == 84.0
        assert data["tier"] == "JUNIOR"
        assert data["premium_access"] is True

    def test_rating_out_of_range(
        self, client: TestClient, register_tutor: Callable[..., dict[str, Any]]
    ) -> None:
        tutor = register_tutor()

        response = client.post(
            f"/api/v1/tutors/{tutor['id']}/rating", json={"rating": "7", "total_reviews": 1}
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
        assert response.json()["errors"][0]["field"] == "rating"


class TestReadTutors:
    def test_lookup_by_user_and_list(
        self, client: TestClient, register_tutor: Callable[..., dict[str, Any]]
    ) -> None:
        tutor = register_tutor()

        by_user = client.get(f"/api/v1/tutors/by-user/{tutor['user_id']}")
        listing = client.get("/api/v1/tutors")

        assert by_user.json()["id"] == tutor["id"]
        assert listing.json()["total"] == 1

    def test_missing_tutor(self, client: TestClient) -> None:
        assert client.get(f"/api/v1/tutors/{MISSING_ID}").status_code == 404
        assert client.get(f"/api/v1/tutors/by-user/{MISSING_ID}").status_code == 404

    def test_delete_tutor(
        self,
        client: TestClient,
        register_tutor: Callable[..., dict[str, Any]],
        actor_headers: dict[str, str],
    ) -> None:
        tutor = register_tutor()

        response = client.delete(f"/api/v1/tutors/{tutor['id']}", headers=actor_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["message"] == "Tutor deleted successfully"
        assert client.get(f"/api/v1/tutors/{tutor['id']}").status_code == 404
