from sqlalchemy import Column, Integer, String, ForeignKey, Text, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from app.db.base import Base


class InterviewQuestion(Base):
    """
    Immutable interview prompt.
    
    question_id has the form "{round_type}-q{n}" and is unique within a session.
    """
    __tablename__ = "interview_questions"

    id = Column(Integer, primary_key=True, index=True)
    round_id = Column(Integer, ForeignKey("interview_rounds.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    question_id = Column(String, nullable=False)
    text = Column(Text, nullable=False)
    difficulty = Column(String, nullable=True)
    expected_keywords = Column(JSON, nullable=False, default=list)
    time_minutes = Column(Integer, nullable=False, default=5)

    round = relationship("InterviewRound", back_populates="questions")

    __table_args__ = (
        UniqueConstraint('round_id', 'question_id', name='uq_question_round_qid'),
    )

    def __repr__(self):
        return f"<InterviewQuestion(question_id='{self.question_id}')>"
