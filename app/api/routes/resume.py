"""
Resume profile endpoints.

Resumes are stored as already-parsed profiles; the interview service uses the
latest one as question-generation context in resume and mixed modes.
"""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.auth_dependency import get_current_user_obj, get_db
from app.db.models.resume import Resume
from app.db.models.user import User
from app.schemas.resume import (
    ResumeListResponse,
    ResumeProfileCreate,
    ResumeProfileResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/resume", tags=["Resume"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ResumeProfileResponse)
def create_resume(
    request: ResumeProfileCreate,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    resume = Resume(
        user_id=user.id,
        filename=request.filename,
        skills=list(request.skills),
        projects=list(request.projects),
        education=list(request.education),
        keywords=list(request.keywords),
        experience_years=request.experience_years,
    )
    db.add(resume)
    db.commit()
    db.refresh(resume)

    logger.info(f"Resume profile stored: resume_id={resume.id}, user_id={user.id}")
    return resume


@router.get("", response_model=ResumeListResponse)
def list_resumes(
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """List the caller's resume profiles, newest first."""
    resumes = (
        db.query(Resume)
        .filter(Resume.user_id == user.id)
        .order_by(Resume.created_at.desc(), Resume.id.desc())
        .all()
    )
    return ResumeListResponse(
        resumes=[ResumeProfileResponse.model_validate(resume) for resume in resumes],
        count=len(resumes),
    )
