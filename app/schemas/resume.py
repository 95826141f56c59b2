"""
Pydantic schemas for resume profile endpoints.
"""
from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field


class ResumeProfileCreate(BaseModel):
    """Already-parsed resume profile used as question-generation context."""
    filename: Optional[str] = Field(None, max_length=255)
    skills: List[str] = Field(default_factory=list)
    projects: List[str] = Field(default_factory=list)
    education: List[str] = Field(default_factory=list)
    keywords: List[str] = Field(default_factory=list)
    experience_years: int = Field(0, ge=0, le=60)

    class Config:
        json_schema_extra = {
            "example": {
                "filename": "resume.pdf",
                "skills": ["Python", "FastAPI", "PostgreSQL"],
                "projects": ["Inventory service", "Chat bot"],
                "experience_years": 1
            }
        }


class ResumeProfileResponse(BaseModel):
    id: int
    filename: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    projects: List[str] = Field(default_factory=list)
    education: List[str] = Field(default_factory=list)
    keywords: List[str] = Field(default_factory=list)
    experience_years: int = 0
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ResumeListResponse(BaseModel):
    resumes: List[ResumeProfileResponse]
    count: int
