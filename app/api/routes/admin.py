"""
Admin endpoints: every candidate's sessions and platform counters.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.auth_dependency import get_db, require_admin
from app.db.models.user import User
from app.schemas.admin import AdminSessionListResponse, AdminStatsResponse
from app.services import admin_service

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/sessions", response_model=AdminSessionListResponse)
def list_sessions(
    page: int = Query(1, ge=1, description="Page number (1-based)"),
    limit: int = Query(10, ge=1, le=100, description="Sessions per page"),
    status: Optional[str] = Query(None, description="Filter by status: pending, active or completed"),
    user_id: Optional[int] = Query(None, description="Filter by candidate"),
    role_profile_id: Optional[int] = Query(None, description="Filter by role profile"),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Paginated sessions across all candidates, newest first."""
    return admin_service.list_all_sessions(
        db,
        page=page,
        limit=limit,
        status=status,
        user_id=user_id,
        role_profile_id=role_profile_id,
    )


@router.get("/stats", response_model=AdminStatsResponse)
def get_stats(
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return admin_service.get_stats(db)
