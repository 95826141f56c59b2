"""
Pydantic schemas for the administrative endpoints.
"""
from typing import List, Optional
from pydantic import BaseModel

from app.schemas.interview import SessionSnapshot


class AdminSessionItem(SessionSnapshot):
    """Session snapshot with the candidate it belongs to."""
    user_id: int
    student_name: Optional[str] = None
    student_email: Optional[str] = None
    role_profile_id: int


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class AdminSessionListResponse(BaseModel):
    sessions: List[AdminSessionItem]
    pagination: Pagination


class AdminStatsResponse(BaseModel):
    total_users: int
    total_sessions: int
    active_sessions: int
    completed_sessions: int
