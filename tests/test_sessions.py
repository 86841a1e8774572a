"""Tests for practice session API endpoints."""

from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from chatterly import models

from tests.conftest import OTHER_USER_ID, TEST_USER_ID


def _create_session(client: TestClient, **overrides: object) -> dict:
    payload = {"target_language": "es", "difficulty_level": "beginner", **overrides}
    response = client.post("/api/v1/sessions", json=payload)
    assert response.status_code == status.HTTP_201_CREATED
    return response.json()


def _add_turn(client: TestClient, session_id: int, turn_number: int = 1) -> dict:
    response = client.post(
        f"/api/v1/sessions/{session_id}/turns",
        json={"turn_number": turn_number, "target_sentence": f"Frase {turn_number}"},
    )
    assert response.status_code == status.HTTP_201_CREATED
    return response.json()


class TestCreateSession:
    """Test suite for POST /sessions endpoint."""

    def test_create_session_success(self, client: TestClient, db_session: Session) -> None:
        data = _create_session(client, persona_id="friendly-tutor")

        assert data["user_id"] == TEST_USER_ID
        assert data["target_language"] == "es"
        assert data["difficulty_level"] == "beginner"
        assert data["persona_id"] == "friendly-tutor"
        assert data["status"] == "in_progress"
        assert data["started_at"] is not None
        assert data["ended_at"] is None
        assert data["total_turns"] == 0
        assert data["completed_turns"] == 0

        db_row = db_session.get(models.PracticeSession, data["id"])
        assert db_row is not None
        assert db_row.user_id == TEST_USER_ID

    def test_first_session_awards_badge(self, client: TestClient, db_session: Session) -> None:
        _create_session(client)

        badges = db_session.query(models.Badge).filter_by(user_id=TEST_USER_ID).all()
        assert [badge.badge_type for badge in badges] == ["first_session"]

    def test_invalid_difficulty(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/sessions",
            json={"target_language": "es", "difficulty_level": "expert"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_language_too_short(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/sessions",
            json={"target_language": "e", "difficulty_level": "beginner"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_missing_user_header(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/sessions",
            json={"target_language": "es", "difficulty_level": "beginner"},
            headers={"X-User-Id": ""},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["error"]["code"] == "UNAUTHORIZED"


class TestGetSessions:
    """Test suite for GET /sessions and GET /sessions/:id endpoints."""

    def test_list_newest_first(self, client: TestClient) -> None:
        first = _create_session(client)
        second = _create_session(client, target_language="fr")

        response = client.get("/api/v1/sessions")

        assert response.status_code == status.HTTP_200_OK
        assert [s["id"] for s in response.json()] == [second["id"], first["id"]]

    def test_list_pagination_and_status(self, client: TestClient) -> None:
        ids = [_create_session(client)["id"] for _ in range(3)]
        _add_turn(client, ids[0])
        client.post(f"/api/v1/sessions/{ids[0]}/complete")

        page = client.get("/api/v1/sessions", params={"limit": 1, "offset": 1}).json()
        completed = client.get("/api/v1/sessions", params={"status": "completed"}).json()
        in_progress = client.get("/api/v1/sessions", params={"status": "in_progress"}).json()

        assert [s["id"] for s in page] == [ids[1]]
        assert [s["id"] for s in completed] == [ids[0]]
        assert {s["id"] for s in in_progress} == {ids[1], ids[2]}

    def test_list_limit_out_of_range(self, client: TestClient) -> None:
        response = client.get("/api/v1/sessions", params={"limit": 101})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_list_only_own_sessions(self, client: TestClient) -> None:
        _create_session(client)

        response = client.get("/api/v1/sessions", headers={"X-User-Id": OTHER_USER_ID})

        assert response.json() == []

    def test_get_session(self, client: TestClient) -> None:
        created = _create_session(client)

        response = client.get(f"/api/v1/sessions/{created['id']}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["id"] == created["id"]

    def test_get_session_of_other_user(self, client: TestClient) -> None:
        created = _create_session(client)

        response = client.get(
            f"/api/v1/sessions/{created['id']}", headers={"X-User-Id": OTHER_USER_ID}
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error"]["code"] == "NOT_FOUND"


class TestCompleteSession:
    """Test suite for POST /sessions/:id/complete endpoint."""

    def test_complete_session_success(self, client: TestClient) -> None:
        session = _create_session(client)
        first = _add_turn(client, session["id"], 1)
        _add_turn(client, session["id"], 2)
        client.patch(
            f"/api/v1/sessions/{session['id']}/turns/{first['id']}",
            json={
                "turn_completed": True,
                "pronunciation_feedback_json": {"overall_score": 84},
                "grammar_feedback_json": {"overall_score": 76},
            },
        )

        response = client.post(f"/api/v1/sessions/{session['id']}/complete")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["session"]["status"] == "completed"
        assert data["session"]["ended_at"] is not None
        assert data["session"]["completed_turns"] == 1
        assert data["summary"]["completion_rate"] == 50
        assert data["summary"]["average_pronunciation_score"] == 84
        assert data["summary"]["average_grammar_score"] == 76
        assert data["summary"]["message"] == (
            "Session completed! You completed 1 out of 2 turns."
        )

    def test_background_refresh_writes_detailed_snapshot(self, client: TestClient) -> None:
        session = _create_session(client)
        _add_turn(client, session["id"])

        client.post(f"/api/v1/sessions/{session['id']}/complete")
        snapshot = client.get(f"/api/v1/sessions/{session['id']}").json()[
            "overall_progress_json"
        ]

        assert snapshot["completion_rate"] == 0
        assert snapshot["session_metrics"]["turns_total"] == 1
        assert snapshot["performance_scores"]["overall_average"] == 0
        assert "first_session" in snapshot["badge_progress"]["badges_earned_this_session"]

    def test_complete_without_turns(self, client: TestClient) -> None:
        session = _create_session(client)

        response = client.post(f"/api/v1/sessions/{session['id']}/complete")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"]["code"] == "INVALID_STATE"

    def test_complete_twice(self, client: TestClient) -> None:
        session = _create_session(client)
        _add_turn(client, session["id"])
        first = client.post(f"/api/v1/sessions/{session['id']}/complete").json()
        before = client.get(f"/api/v1/sessions/{session['id']}").json()

        response = client.post(f"/api/v1/sessions/{session['id']}/complete")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"]["code"] == "INVALID_STATE"
        current = client.get(f"/api/v1/sessions/{session['id']}").json()
        assert current["ended_at"] == first["session"]["ended_at"]
        for field in ("completed_turns", "total_turns", "overall_progress_json"):
            assert current[field] == before[field]
        assert current["overall_progress_json"]["completed_at"] == (
            first["session"]["overall_progress_json"]["completed_at"]
        )

    def test_complete_unknown_session(self, client: TestClient) -> None:
        response = client.post("/api/v1/sessions/9999/complete")

        assert response.status_code == status.HTTP_404_NOT_FOUND
