"""
InterviewAnswer model - one submission together with its evaluation.
"""
from sqlalchemy import Column, Integer, String, ForeignKey, Text, DateTime, JSON, Boolean, UniqueConstraint
from sqlalchemy.orm import relationship
from app.db.base import Base


class InterviewAnswer(Base):
    """
    Answer to one question, immutable once stored.
    
    The (session_id, round_type, question_id) unique constraint is what makes
    answering exactly-once: a second concurrent insert fails at commit.
    """
    __tablename__ = "interview_answers"

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(Integer, ForeignKey("interview_sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    round_id = Column(Integer, ForeignKey("interview_rounds.id", ondelete="CASCADE"), nullable=False, index=True)
    round_type = Column(String, nullable=False)
    question_id = Column(String, nullable=False)

    answer_text = Column(Text, nullable=False)
    started_at = Column(DateTime, nullable=True)
    submitted_at = Column(DateTime, nullable=False)
    time_spent_seconds = Column(Integer, nullable=False, default=0)

    # Evaluation payload
    score = Column(Integer, nullable=True)  # 0-10
    feedback_text = Column(Text, nullable=False, default="")
    strengths = Column(JSON, nullable=False, default=list)
    weaknesses = Column(JSON, nullable=False, default=list)
    improvement_tips = Column(JSON, nullable=False, default=list)
    score_breakdown = Column(JSON, nullable=True)
    is_placeholder = Column(Boolean, nullable=False, default=False)

    round = relationship("InterviewRound", back_populates="answers")

    __table_args__ = (
        UniqueConstraint('session_id', 'round_type', 'question_id', name='uq_answer_session_round_question'),
    )

    @property
    def is_evaluated(self) -> bool:
        return self.score is not None

    def __repr__(self):
        return f"<InterviewAnswer(question_id='{self.question_id}', score={self.score})>"
