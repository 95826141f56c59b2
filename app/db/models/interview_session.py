"""
InterviewSession model - one mock interview attempt by one candidate.
"""
from datetime import datetime
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Boolean, Index
from sqlalchemy.orm import relationship
from app.db.base import Base

SESSION_MODES = ("resume", "role", "mixed")
SESSION_STATUSES = ("pending", "active", "completed")


class InterviewSession(Base):
    """
    Interview session owning its rounds, questions and answers.
    
    updated_at tracks the last mutation and doubles as the completion
    timestamp once status is "completed".
    """
    __tablename__ = "interview_sessions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    role_profile_id = Column(Integer, ForeignKey("role_profiles.id"), nullable=False, index=True)
    resume_id = Column(Integer, ForeignKey("resumes.id"), nullable=True)
    mode = Column(String, nullable=False)  # resume / role / mixed
    status = Column(String, nullable=False, default="pending", index=True)  # pending / active / completed
    proctored = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    rounds = relationship(
        "InterviewRound",
        back_populates="session",
        order_by="InterviewRound.position",
        cascade="all, delete-orphan",
    )
    user = relationship("User")
    role_profile = relationship("RoleProfile")
    resume = relationship("Resume")

    __table_args__ = (
        Index('idx_session_user_created', 'user_id', 'created_at'),
    )

    @property
    def rounds_by_type(self) -> dict:
        return {round_.round_type: round_ for round_ in self.rounds}

    @property
    def question_index(self) -> dict:
        """Map of question_id -> (round, question) across the whole session."""
        index = {}
        for round_ in self.rounds:
            for question in round_.questions:
                index.setdefault(question.question_id, (round_, question))
        return index

    @property
    def total_questions(self) -> int:
        return sum(len(round_.questions) for round_ in self.rounds)

    @property
    def is_completed(self) -> bool:
        return self.status == "completed"

    def __repr__(self):
        return f"<InterviewSession(id={self.id}, user_id={self.user_id}, status='{self.status}')>"
