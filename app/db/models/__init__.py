"""
Database models module.

This module imports all database models to ensure they are registered with SQLAlchemy's Base.metadata
before table creation.

All models must be imported here to be included in database migrations and table creation.
"""
from app.db.models.user import User
from app.db.models.role_profile import RoleProfile
from app.db.models.resume import Resume
from app.db.models.interview_session import InterviewSession
from app.db.models.interview_round import InterviewRound
from app.db.models.interview_question import InterviewQuestion
from app.db.models.interview_answer import InterviewAnswer

# Explicitly export all models for clarity
__all__ = [
    "User",
    "RoleProfile",
    "Resume",
    "InterviewSession",
    "InterviewRound",
    "InterviewQuestion",
    "InterviewAnswer",
]
