"""
Integration tests for the admin endpoints.
"""
import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.core.auth_dependency import get_db
from app.core.security import create_access_token
from app.schemas.interview import StartInterviewRequest
from app.services.interview_service import InterviewSessionService
from tests.conftest import FakeProvider, SteppingClock, TestSessionLocal


def override_get_db():
    """Override get_db dependency for testing."""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token({'sub': user.email})}"}


@pytest.fixture
def sessions(db, test_user, other_user, role_profile):
    """Three sessions: two for test_user (the first completed), one for other_user."""
    service = InterviewSessionService(provider=FakeProvider(), clock=SteppingClock())
    request = StartInterviewRequest(mode="role", role_profile_id=role_profile.id, enabled_rounds=["technical"])

    first = service.create_session(db, test_user, request)
    service.complete_session(db, first.session_id, test_user.id)
    second = service.create_session(db, test_user, request)
    third = service.create_session(db, other_user, request)
    return [first.session_id, second.session_id, third.session_id]


def test_admin_endpoints_require_admin_role(client, test_user):
    headers = auth_headers(test_user)
    assert client.get("/admin/sessions", headers=headers).status_code == 403
    assert client.get("/admin/stats", headers=headers).status_code == 403


def test_admin_endpoints_require_token(client):
    assert client.get("/admin/stats").status_code == 401


def test_list_sessions_newest_first_with_candidate(client, admin_user, sessions, test_user, other_user):
    response = client.get("/admin/sessions", headers=auth_headers(admin_user))

    assert response.status_code == 200
    data = response.json()
    assert [s["session_id"] for s in data["sessions"]] == list(reversed(sessions))
    assert data["sessions"][0]["student_email"] == other_user.email
    assert data["sessions"][0]["student_name"] == "Other Candidate"
    assert data["sessions"][2]["user_id"] == test_user.id
    assert data["sessions"][2]["status"] == "completed"
    assert data["pagination"] == {"page": 1, "limit": 10, "total": 3, "pages": 1}


def test_list_sessions_paginates(client, admin_user, sessions):
    response = client.get("/admin/sessions?page=2&limit=2", headers=auth_headers(admin_user))

    data = response.json()
    assert [s["session_id"] for s in data["sessions"]] == [sessions[0]]
    assert data["pagination"] == {"page": 2, "limit": 2, "total": 3, "pages": 2}


def test_list_sessions_filters(client, admin_user, sessions, test_user, role_profile):
    headers = auth_headers(admin_user)

    completed = client.get("/admin/sessions?status=completed", headers=headers).json()
    assert [s["session_id"] for s in completed["sessions"]] == [sessions[0]]

    by_user = client.get(f"/admin/sessions?user_id={test_user.id}", headers=headers).json()
    assert by_user["pagination"]["total"] == 2

    by_role = client.get(f"/admin/sessions?role_profile_id={role_profile.id}", headers=headers).json()
    assert by_role["pagination"]["total"] == 3

    other_role = client.get(f"/admin/sessions?role_profile_id={role_profile.id + 1}", headers=headers).json()
    assert other_role["sessions"] == []
    assert other_role["pagination"]["pages"] == 0


def test_list_sessions_rejects_unknown_status(client, admin_user):
    response = client.get("/admin/sessions?status=archived", headers=auth_headers(admin_user))

    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


def test_list_sessions_rejects_oversized_page(client, admin_user):
    response = client.get("/admin/sessions?limit=500", headers=auth_headers(admin_user))
    assert response.status_code == 422


def test_stats(client, admin_user, sessions):
    response = client.get("/admin/stats", headers=auth_headers(admin_user))

    assert response.status_code == 200
    assert response.json() == {
        "total_users": 3,
        "total_sessions": 3,
        "active_sessions": 2,
        "completed_sessions": 1,
    }
