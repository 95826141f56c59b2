"""
Interview session endpoints.

Thin HTTP layer over InterviewSessionService; domain errors propagate to the
InterviewError handler registered in app.main.
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.core.auth_dependency import get_current_user_obj, get_db
from app.core.rate_limit import interview_rate_limit
from app.core.service_dependency import get_interview_service
from app.db.models.user import User
from app.schemas.interview import (
    CompleteInterviewResponse,
    NextQuestionResponse,
    SessionListResponse,
    SessionSummary,
    StartInterviewRequest,
    StartInterviewResponse,
    SubmitAnswerRequest,
    SubmitAnswerResponse,
)
from app.services.interview_service import InterviewSessionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/interview", tags=["Interview"])


@router.post(
    "/start",
    status_code=status.HTTP_201_CREATED,
    response_model=StartInterviewResponse,
    dependencies=[Depends(interview_rate_limit)],
)
def start_interview(
    request: StartInterviewRequest,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db),
    service: InterviewSessionService = Depends(get_interview_service),
):
    """
    Start a mock interview session.
    
    Questions for every enabled round are generated up front; a round whose
    generation fails gets a single placeholder question instead.
    """
    return service.create_session(db, user, request)


@router.get("/sessions", response_model=SessionListResponse)
def list_sessions(
    limit: Optional[int] = Query(20, description="Max sessions to return (clamped to 1-50)"),
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db),
    service: InterviewSessionService = Depends(get_interview_service),
):
    """List the caller's sessions, newest first."""
    return service.list_sessions(db, user.id, limit)


@router.get("/{session_id}/next", response_model=NextQuestionResponse)
def get_next_question(
    session_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db),
    service: InterviewSessionService = Depends(get_interview_service),
):
    """Get the first unanswered question of the session."""
    return service.get_next_question(db, session_id, user.id)


@router.post(
    "/{session_id}/answer",
    response_model=SubmitAnswerResponse,
    dependencies=[Depends(interview_rate_limit)],
)
def submit_answer(
    session_id: int,
    request: SubmitAnswerRequest,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db),
    service: InterviewSessionService = Depends(get_interview_service),
):
    """
    Submit the answer to one question and get its evaluation.
    
    Each question accepts exactly one answer; resubmission returns 400
    with error "already_answered".
    """
    return service.submit_answer(
        db,
        session_id,
        user.id,
        request.question_id,
        request.answer_text,
        request.time_spent_seconds,
    )


@router.post("/{session_id}/complete", response_model=CompleteInterviewResponse)
def complete_interview(
    session_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db),
    service: InterviewSessionService = Depends(get_interview_service),
):
    """Finish the session (early completion allowed) and return its summary."""
    return service.complete_session(db, session_id, user.id)


@router.get("/{session_id}/summary", response_model=SessionSummary)
def get_summary(
    session_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db),
    service: InterviewSessionService = Depends(get_interview_service),
):
    """Get the session summary. Viewing it completes an active session."""
    return service.get_summary(db, session_id, user.id)


@router.get("/{session_id}/report")
def download_report(
    session_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db),
    service: InterviewSessionService = Depends(get_interview_service),
):
    """Download the session report as a PDF."""
    filename, content = service.build_report(db, session_id, user.id)
    logger.info(f"Report generated: session_id={session_id}, bytes={len(content)}")
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
