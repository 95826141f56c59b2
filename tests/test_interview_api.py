"""
Integration tests for the interview HTTP endpoints.
"""
import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.core.auth_dependency import get_db
from app.core.rate_limit import reset_rate_limits
from app.core.security import create_access_token
from app.core.service_dependency import get_interview_service
from app.services.interview_service import InterviewSessionService
from tests.conftest import FakeProvider, SteppingClock, TestSessionLocal

ANSWER = "I would profile the query first and then add a covering index."


def override_get_db():
    """Override get_db dependency for testing."""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(db):
    service = InterviewSessionService(provider=FakeProvider(scores=[8, 6, 7]), clock=SteppingClock())
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_interview_service] = lambda: service
    reset_rate_limits()
    yield TestClient(app)
    app.dependency_overrides.clear()
    reset_rate_limits()


def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token({'sub': user.email})}"}


@pytest.fixture
def headers(test_user):
    return auth_headers(test_user)


@pytest.fixture
def session_id(client, headers, role_profile):
    response = client.post(
        "/interview/start",
        json={"mode": "role", "role_profile_id": role_profile.id, "enabled_rounds": ["technical", "hr"]},
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()["session_id"]


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200


def test_requires_authentication(client, role_profile):
    response = client.post("/interview/start", json={"mode": "role", "role_profile_id": role_profile.id})
    assert response.status_code == 401


def test_start_interview(client, headers, role_profile):
    response = client.post(
        "/interview/start",
        json={"mode": "role", "role_profile_id": role_profile.id, "enabled_rounds": ["technical", "hr"]},
        headers=headers,
    )

    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "active"
    assert data["role_profile"]["name"] == "Backend Developer"
    assert [r["round_type"] for r in data["rounds_metadata"]] == ["technical", "hr"]


def test_start_interview_invalid_mode(client, headers, role_profile):
    response = client.post(
        "/interview/start",
        json={"mode": "panel", "role_profile_id": role_profile.id},
        headers=headers,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


def test_start_interview_unknown_role(client, headers):
    response = client.post("/interview/start", json={"mode": "role", "role_profile_id": 999}, headers=headers)
    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


def test_full_interview_flow(client, headers, session_id):
    for expected_id in ["technical-q1", "technical-q2", "hr-q1"]:
        nxt = client.get(f"/interview/{session_id}/next", headers=headers).json()
        assert nxt["question_id"] == expected_id
        response = client.post(
            f"/interview/{session_id}/answer",
            json={"question_id": expected_id, "answer_text": ANSWER, "time_spent_seconds": 60},
            headers=headers,
        )
        assert response.status_code == 200

    nxt = client.get(f"/interview/{session_id}/next", headers=headers).json()
    assert nxt["all_questions_answered"] is True

    response = client.post(f"/interview/{session_id}/complete", headers=headers)
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Interview completed successfully"
    assert data["summary"]["overall_score"] == 7.0
    assert data["summary"]["is_hireable"] is True


def test_duplicate_answer_returns_already_answered(client, headers, session_id):
    payload = {"question_id": "technical-q1", "answer_text": ANSWER, "time_spent_seconds": 30}
    first = client.post(f"/interview/{session_id}/answer", json=payload, headers=headers)
    second = client.post(f"/interview/{session_id}/answer", json=payload, headers=headers)

    assert first.status_code == 200
    assert second.status_code == 400
    body = second.json()
    assert body["error"] == "already_answered"
    assert body["data"]["question_id"] == "technical-q1"


def test_short_answer_rejected(client, headers, session_id):
    response = client.post(
        f"/interview/{session_id}/answer",
        json={"question_id": "technical-q1", "answer_text": "   too short  "},
        headers=headers,
    )
    assert response.status_code == 422


def test_other_user_forbidden(client, db, session_id):
    from tests.conftest import make_user

    intruder = make_user(db, email="intruder@example.com")
    response = client.get(f"/interview/{session_id}/summary", headers=auth_headers(intruder))

    assert response.status_code == 403
    assert response.json()["error"] == "forbidden"


def test_summary_completes_session(client, headers, session_id):
    client.post(
        f"/interview/{session_id}/answer",
        json={"question_id": "technical-q1", "answer_text": ANSWER, "time_spent_seconds": 30},
        headers=headers,
    )

    summary = client.get(f"/interview/{session_id}/summary", headers=headers).json()
    assert summary["status"] == "completed"
    assert summary["completion_percentage"] == 33

    nxt = client.get(f"/interview/{session_id}/next", headers=headers)
    assert nxt.status_code == 400
    assert nxt.json()["error"] == "invalid_state"


def test_download_report(client, headers, session_id):
    response = client.get(f"/interview/{session_id}/report", headers=headers)

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert f"mock-interview-{session_id}.pdf" in response.headers["content-disposition"]
    assert response.content.startswith(b"%PDF")


def test_list_sessions(client, headers, session_id):
    response = client.get("/interview/sessions", params={"limit": 5}, headers=headers)

    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 1
    assert data["sessions"][0]["session_id"] == session_id
    assert data["sessions"][0]["status"] == "active"


def test_start_is_rate_limited(client, headers, role_profile):
    from app.core import rate_limit

    payload = {"mode": "role", "role_profile_id": role_profile.id, "enabled_rounds": ["hr"]}
    statuses = [
        client.post("/interview/start", json=payload, headers=headers).status_code
        for _ in range(rate_limit.RATE_LIMIT_MAX_REQUESTS + 1)
    ]
    assert statuses[-1] == 429
    assert set(statuses[:-1]) == {201}
