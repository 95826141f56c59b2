"""
Pydantic schemas for role profile endpoints.
"""
from typing import Any, Dict, List, Optional
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

from app.core.interview_structures import (
    DIFFICULTY_LEVELS,
    MAX_QUESTIONS_PER_ROUND,
    ROUND_TYPES,
)


class RoundStructure(BaseModel):
    """Question count and optional difficulty of one round type."""
    question_count: int = Field(..., ge=1, le=20)
    difficulty: Optional[str] = Field(None, description="Experience level tag")

    @field_validator("difficulty")
    @classmethod
    def validate_difficulty(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v not in DIFFICULTY_LEVELS:
            raise ValueError(f"Difficulty must be one of: {', '.join(DIFFICULTY_LEVELS)}")
        return v


class RoleProfileCreate(BaseModel):
    """Request schema for creating a role profile."""
    role_name: str = Field(..., min_length=1, max_length=200)
    company_name: Optional[str] = Field(None, max_length=200)
    domain_tags: List[str] = Field(default_factory=list)
    skill_expectations: List[str] = Field(default_factory=list)
    interview_structures: Optional[Dict[str, RoundStructure]] = Field(
        None, description="Per-round structure; defaults are used when omitted"
    )

    @field_validator("role_name")
    @classmethod
    def strip_role_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Role name is required")
        return v

    @field_validator("interview_structures")
    @classmethod
    def validate_structures(cls, v: Optional[Dict[str, RoundStructure]]) -> Optional[Dict[str, RoundStructure]]:
        if v is None:
            return v
        for round_type, structure in v.items():
            if round_type not in ROUND_TYPES:
                raise ValueError(f"Unknown round type: {round_type}")
            if structure.question_count > MAX_QUESTIONS_PER_ROUND[round_type]:
                raise ValueError(
                    f"{round_type} rounds allow at most {MAX_QUESTIONS_PER_ROUND[round_type]} questions"
                )
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "role_name": "Backend Developer",
                "domain_tags": ["Backend", "APIs"],
                "skill_expectations": ["Python", "SQL", "REST APIs"],
                "interview_structures": {
                    "technical": {"question_count": 6, "difficulty": "full-time-fresher"},
                    "hr": {"question_count": 4}
                }
            }
        }


class RoleProfileResponse(BaseModel):
    id: int
    role_name: str
    company_name: Optional[str] = None
    domain_tags: List[str] = Field(default_factory=list)
    skill_expectations: List[str] = Field(default_factory=list)
    interview_structures: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class RoleProfileListResponse(BaseModel):
    roles: List[RoleProfileResponse]
    count: int
