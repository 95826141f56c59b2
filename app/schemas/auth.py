"""
Pydantic schemas for authentication endpoints.
"""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, EmailStr, Field, field_validator


class SignupRequest(BaseModel):
    """Request schema for candidate signup."""
    full_name: str = Field(..., min_length=1, max_length=200, description="Candidate's full name")
    email: EmailStr = Field(..., description="Candidate's email address")
    password: str = Field(..., min_length=8, description="Password (min 8 characters)")
    experience_level: str = Field("fresher", description="fresher or experienced")
    experience_years: int = Field(0, ge=0, le=60, description="Years of professional experience")
    education_degree: Optional[str] = Field(None, max_length=100, description="Highest degree")
    college: Optional[str] = Field(None, max_length=200, description="College name")
    domains: List[str] = Field(default_factory=list, description="Domains of interest")
    
    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        """Validate password length in bytes (bcrypt limit is 72 bytes)."""
        password_bytes = v.encode("utf-8")
        if len(password_bytes) > 72:
            raise ValueError("Password too long (bcrypt limit 72 bytes)")
        if len(password_bytes) < 8:
            raise ValueError("Password must be at least 8 characters")
        return v

    @field_validator("experience_level")
    @classmethod
    def validate_experience_level(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in ("fresher", "experienced"):
            raise ValueError("Experience level must be fresher or experienced")
        return v
    
    class Config:
        json_schema_extra = {
            "example": {
                "full_name": "Asha Rao",
                "email": "asha.rao@example.com",
                "password": "SecurePass123",
                "experience_level": "fresher",
                "experience_years": 0,
                "education_degree": "B.Tech",
                "domains": ["Backend"]
            }
        }


class SignupResponse(BaseModel):
    message: str
    user_id: int


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class ProfileResponse(BaseModel):
    """Authenticated account, without credentials."""
    id: int
    full_name: str
    email: str
    role: str
    experience_level: Optional[str] = None
    experience_years: Optional[int] = None
    education_degree: Optional[str] = None
    college: Optional[str] = None
    domains: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None

    @field_validator("domains", mode="before")
    @classmethod
    def default_domains(cls, v):
        return v or []

    class Config:
        from_attributes = True
