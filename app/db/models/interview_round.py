from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from app.db.base import Base

class InterviewRound(Base):
    """One interview phase. Questions are fixed at creation, answers are append-only."""
    __tablename__ = "interview_rounds"

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(Integer, ForeignKey("interview_sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    round_type = Column(String, nullable=False)
    difficulty = Column(String, nullable=True)

    session = relationship("InterviewSession", back_populates="rounds")
    questions = relationship(
        "InterviewQuestion",
        back_populates="round",
        order_by="InterviewQuestion.position",
        cascade="all, delete-orphan",
    )
    answers = relationship(
        "InterviewAnswer",
        back_populates="round",
        order_by="InterviewAnswer.id",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        UniqueConstraint('session_id', 'round_type', name='uq_round_session_type'),
    )

    @property
    def answers_by_question(self) -> dict:
        return {answer.question_id: answer for answer in self.answers}

    @property
    def completed(self) -> bool:
        answered = self.answers_by_question
        return bool(self.questions) and all(q.question_id in answered for q in self.questions)

    def __repr__(self):
        return f"<InterviewRound(id={self.id}, round_type='{self.round_type}')>"
