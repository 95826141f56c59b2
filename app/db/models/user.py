from sqlalchemy import Column, Integer, String, DateTime, JSON
from sqlalchemy.sql import func
from app.db.base import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True)
    password_hash = Column(String)
    role = Column(String, nullable=False, default="student", server_default="student", index=True)  # student / admin

    # Candidate profile (question generation context only)
    experience_level = Column(String, default="fresher")  # fresher / experienced
    experience_years = Column(Integer, default=0)
    education_degree = Column(String, nullable=True)
    college = Column(String, nullable=True)
    domains = Column(JSON, default=list)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def to_candidate_profile(self) -> dict:
        return {
            "full_name": self.full_name,
            "experience_level": self.experience_level or "fresher",
            "experience_years": self.experience_years or 0,
            "education_degree": self.education_degree or "",
            "college": self.college or "",
            "domains": list(self.domains or []),
        }
