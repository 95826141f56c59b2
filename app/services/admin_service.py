"""
Administrative read-only views over every candidate's sessions.
"""
import logging
import math
from typing import Optional

from sqlalchemy.orm import Session

from app.core.errors import ValidationError
from app.db.models import InterviewSession, User
from app.db.models.interview_session import SESSION_STATUSES
from app.schemas.admin import (
    AdminSessionItem,
    AdminSessionListResponse,
    AdminStatsResponse,
    Pagination,
)
from app.services.summary_service import build_session_snapshot

logger = logging.getLogger(__name__)

MAX_ADMIN_PAGE_SIZE = 100


def list_all_sessions(
    db: Session,
    page: int = 1,
    limit: int = 10,
    status: Optional[str] = None,
    user_id: Optional[int] = None,
    role_profile_id: Optional[int] = None,
) -> AdminSessionListResponse:
    """
    One page of sessions across all candidates, newest first.

    Raises:
        ValidationError: if status is not a known session status
    """
    page = max(1, int(page))
    limit = max(1, min(MAX_ADMIN_PAGE_SIZE, int(limit)))

    query = db.query(InterviewSession)
    if status:
        status = status.strip().lower()
        if status not in SESSION_STATUSES:
            raise ValidationError(
                f"Invalid status. Must be one of: {', '.join(SESSION_STATUSES)}",
                {"status": status},
            )
        query = query.filter(InterviewSession.status == status)
    if user_id is not None:
        query = query.filter(InterviewSession.user_id == user_id)
    if role_profile_id is not None:
        query = query.filter(InterviewSession.role_profile_id == role_profile_id)

    total = query.count()
    sessions = (
        query.order_by(InterviewSession.created_at.desc(), InterviewSession.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )

    items = []
    for session in sessions:
        snapshot = build_session_snapshot(session)
        items.append(AdminSessionItem(
            **snapshot.model_dump(),
            user_id=session.user_id,
            student_name=session.user.full_name if session.user else None,
            student_email=session.user.email if session.user else None,
            role_profile_id=session.role_profile_id,
        ))

    return AdminSessionListResponse(
        sessions=items,
        pagination=Pagination(
            page=page,
            limit=limit,
            total=total,
            pages=math.ceil(total / limit),
        ),
    )


def get_stats(db: Session) -> AdminStatsResponse:
    return AdminStatsResponse(
        total_users=db.query(User).count(),
        total_sessions=db.query(InterviewSession).count(),
        active_sessions=db.query(InterviewSession).filter(InterviewSession.status == "active").count(),
        completed_sessions=db.query(InterviewSession).filter(InterviewSession.status == "completed").count(),
    )
