"""
Shared fixtures: in-memory SQLite database and a scripted content provider.
"""
from datetime import datetime, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.errors import ProviderError
from app.core.security import hash_password
from app.db.base import Base
from app.db.models import Resume, RoleProfile, User
from app.llm.interview_provider import Evaluation, GeneratedQuestion, InterviewContentProvider


# Setup in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


class FakeProvider(InterviewContentProvider):
    """
    Deterministic provider.
    
    Rounds listed in failing_rounds raise ProviderError; scores are handed out
    in order from `scores` (repeating the last one).
    """

    def __init__(self, scores=None, failing_rounds=(), fail_evaluation=False):
        self.scores = list(scores or [8])
        self.failing_rounds = set(failing_rounds)
        self.fail_evaluation = fail_evaluation
        self.generated = []
        self.evaluated = []

    def generate_questions(self, round_type, context):
        self.generated.append((round_type, context))
        if round_type in self.failing_rounds:
            raise ProviderError("Request timed out")
        return [
            GeneratedQuestion(
                question_id=f"{round_type}-q{n}",
                text=f"{round_type} question {n}",
                difficulty=context.difficulty,
                expected_keywords=["design"],
                time_minutes=5,
            )
            for n in range(1, context.question_count + 1)
        ]

    def evaluate_answer(self, question, answer_text):
        self.evaluated.append((question.question_id, answer_text))
        if self.fail_evaluation:
            raise ProviderError("Evaluation service unavailable")
        index = min(len(self.evaluated) - 1, len(self.scores) - 1)
        score = self.scores[index]
        return Evaluation(
            score=score,
            feedback_text=f"Feedback for {question.question_id}",
            strengths=["Clear structure"],
            weaknesses=["Missing examples"],
            improvement_tips=[f"Tip for {question.question_id}"],
        )


class SteppingClock:
    """Clock advancing a fixed step on every call."""

    def __init__(self, start=datetime(2026, 1, 1, 9, 0, 0), step_seconds=60):
        self.current = start
        self.step = timedelta(seconds=step_seconds)

    def __call__(self):
        value = self.current
        self.current = self.current + self.step
        return value


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=test_engine)
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=test_engine)


def make_user(db, email="candidate@example.com", full_name="Test Candidate", role="student"):
    user = User(
        full_name=full_name,
        email=email,
        role=role,
        password_hash=hash_password("testpass123"),
        experience_level="fresher",
        experience_years=0,
        domains=["Backend"],
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def test_user(db):
    return make_user(db)


@pytest.fixture
def other_user(db):
    return make_user(db, email="someone.else@example.com", full_name="Other Candidate")


@pytest.fixture
def admin_user(db):
    return make_user(db, email="admin@example.com", full_name="Platform Admin", role="admin")


@pytest.fixture
def role_profile(db):
    role = RoleProfile(
        role_name="Backend Developer",
        company_name="Acme",
        domain_tags=["Backend"],
        skill_expectations=["Python", "SQL"],
        interview_structures={
            "technical": {"question_count": 2, "difficulty": "full-time-fresher"},
            "hr": {"question_count": 1},
        },
    )
    db.add(role)
    db.commit()
    db.refresh(role)
    return role


@pytest.fixture
def resume(db, test_user):
    resume = Resume(
        user_id=test_user.id,
        filename="resume.pdf",
        skills=["Python", "FastAPI"],
        projects=["Inventory service"],
        education=["B.Tech"],
        keywords=["backend"],
        experience_years=0,
    )
    db.add(resume)
    db.commit()
    db.refresh(resume)
    return resume
