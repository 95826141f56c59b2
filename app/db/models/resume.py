from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, JSON, Index
from sqlalchemy.sql import func
from app.db.base import Base

class Resume(Base):
    """Already-parsed resume profile. Text extraction happens outside this service."""
    __tablename__ = "resumes"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    filename = Column(String, nullable=True)
    skills = Column(JSON, nullable=False, default=list)
    projects = Column(JSON, nullable=False, default=list)
    education = Column(JSON, nullable=False, default=list)
    keywords = Column(JSON, nullable=False, default=list)
    experience_years = Column(Integer, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        Index('idx_resume_user_created', 'user_id', 'created_at'),
    )

    def to_context(self) -> dict:
        return {
            "skills": list(self.skills or []),
            "projects": list(self.projects or []),
            "education": list(self.education or []),
            "experience_years": self.experience_years or 0,
        }
