"""
Integration tests for signup, login, role profile and resume endpoints.
"""
import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.core.auth_dependency import get_db
from app.core.security import create_access_token
from app.db.models import RoleProfile, User
from scripts.make_admin import make_admin
from scripts.seed_roles import DEFAULT_ROLES, seed_roles
from tests.conftest import TestSessionLocal


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


@pytest.fixture
def headers(test_user):
    return {"Authorization": f"Bearer {create_access_token({'sub': test_user.email})}"}


@pytest.fixture
def admin_headers(admin_user):
    return {"Authorization": f"Bearer {create_access_token({'sub': admin_user.email})}"}


def test_signup_and_login(client, db):
    response = client.post(
        "/auth/signup",
        json={
            "full_name": "New Candidate",
            "email": "New.Candidate@example.com",
            "password": "testpass123",
            "experience_level": "Experienced",
            "experience_years": 2,
            "domains": ["Data"],
        },
    )
    assert response.status_code == 201
    assert response.json()["message"] == "User created successfully"

    user = db.query(User).filter(User.email == "new.candidate@example.com").first()
    assert user.experience_level == "experienced"
    assert user.experience_years == 2
    assert user.role == "student"

    login = client.post(
        "/auth/login",
        data={"username": "new.candidate@example.com", "password": "testpass123"},
    )
    assert login.status_code == 200
    assert login.json()["token_type"] == "bearer"
    assert login.json()["access_token"]


def test_signup_duplicate_email(client, test_user):
    response = client.post(
        "/auth/signup",
        json={"full_name": "Again", "email": test_user.email, "password": "testpass123"},
    )
    assert response.status_code == 400


def test_login_wrong_password(client, test_user):
    response = client.post("/auth/login", data={"username": test_user.email, "password": "wrongpass123"})
    assert response.status_code == 401


def test_create_role_with_default_structure(client, admin_headers):
    response = client.post("/roles", json={"role_name": "  Data Analyst  ", "skill_expectations": ["SQL"]}, headers=admin_headers)

    assert response.status_code == 201
    data = response.json()
    assert data["role_name"] == "Data Analyst"
    assert data["interview_structures"]["technical"]["question_count"] == 5
    assert set(data["interview_structures"]) == {"technical", "hr", "manager", "cto", "case"}


def test_create_role_duplicate_name(client, admin_headers, role_profile):
    response = client.post("/roles", json={"role_name": role_profile.role_name}, headers=admin_headers)
    assert response.status_code == 400


def test_create_role_rejects_unknown_round(client, admin_headers):
    response = client.post(
        "/roles",
        json={"role_name": "QA Engineer", "interview_structures": {"lunch": {"question_count": 2}}},
        headers=admin_headers,
    )
    assert response.status_code == 422


def test_list_roles_sorted(client, headers, db):
    seed_roles(db)
    response = client.get("/roles", headers=headers)

    assert response.status_code == 200
    names = [role["role_name"] for role in response.json()["roles"]]
    assert names == sorted(names)
    assert response.json()["count"] == len(DEFAULT_ROLES)


def test_seed_roles_is_idempotent(db):
    assert seed_roles(db) == len(DEFAULT_ROLES)
    assert seed_roles(db) == 0
    assert db.query(RoleProfile).count() == len(DEFAULT_ROLES)


def test_get_role_not_found(client, headers):
    assert client.get("/roles/999", headers=headers).status_code == 404


def test_resume_profiles_are_per_user(client, headers, db):
    response = client.post("/resume", json={"filename": "cv.pdf", "skills": ["Python"]}, headers=headers)
    assert response.status_code == 201

    listed = client.get("/resume", headers=headers).json()
    assert listed["count"] == 1
    assert listed["resumes"][0]["skills"] == ["Python"]

    from tests.conftest import make_user
    other = make_user(db, email="other@example.com")
    other_headers = {"Authorization": f"Bearer {create_access_token({'sub': other.email})}"}
    assert client.get("/resume", headers=other_headers).json()["count"] == 0


def test_create_role_requires_admin(client, headers, db):
    response = client.post("/roles", json={"role_name": "Data Analyst"}, headers=headers)

    assert response.status_code == 403
    assert db.query(RoleProfile).count() == 0


def test_profile_returns_current_account(client, headers, test_user):
    response = client.get("/auth/profile", headers=headers)

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == test_user.id
    assert data["email"] == test_user.email
    assert data["role"] == "student"
    assert data["domains"] == ["Backend"]
    assert "password_hash" not in data


def test_profile_requires_token(client):
    assert client.get("/auth/profile").status_code == 401


def test_make_admin_promotes_existing_user(db, test_user):
    assert make_admin(db, "Candidate@Example.com") is True

    db.refresh(test_user)
    assert test_user.role == "admin"


def test_make_admin_creates_account_with_password(db):
    assert make_admin(db, "ops@example.com") is False
    assert make_admin(db, "ops@example.com", "adminpass123") is True

    user = db.query(User).filter(User.email == "ops@example.com").first()
    assert user.role == "admin"
