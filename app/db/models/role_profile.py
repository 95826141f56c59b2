"""
RoleProfile model - the job role a mock interview is built for.
"""
from sqlalchemy import Column, Integer, String, DateTime, JSON
from sqlalchemy.sql import func
from app.db.base import Base


class RoleProfile(Base):
    """
    Role profile with skill expectations and per-round interview structure.
    
    interview_structures maps round type to {"question_count": int, "difficulty": str?}.
    """
    __tablename__ = "role_profiles"

    id = Column(Integer, primary_key=True, index=True)
    role_name = Column(String, unique=True, nullable=False, index=True)
    company_name = Column(String, nullable=True)
    domain_tags = Column(JSON, nullable=False, default=list)
    skill_expectations = Column(JSON, nullable=False, default=list)
    interview_structures = Column(JSON, nullable=False, default=dict)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def to_context(self) -> dict:
        return {
            "role_name": self.role_name,
            "company_name": self.company_name or "",
            "domain_tags": list(self.domain_tags or []),
            "skill_expectations": list(self.skill_expectations or []),
        }

    def __repr__(self):
        return f"<RoleProfile(id={self.id}, role_name='{self.role_name}')>"
