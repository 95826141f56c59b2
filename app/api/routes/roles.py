"""
Role profile endpoints.

Role profiles carry the skill expectations and per-round structure used to
plan an interview session.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.auth_dependency import get_current_user_obj, get_db, require_admin
from app.core.interview_structures import DEFAULT_ROLE_STRUCTURE
from app.db.models.role_profile import RoleProfile
from app.db.models.user import User
from app.schemas.role_profile import (
    RoleProfileCreate,
    RoleProfileListResponse,
    RoleProfileResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/roles", tags=["Roles"])


@router.get("", response_model=RoleProfileListResponse)
def list_roles(
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """List every role profile, sorted by name."""
    roles = db.query(RoleProfile).order_by(RoleProfile.role_name.asc()).all()
    return RoleProfileListResponse(
        roles=[RoleProfileResponse.model_validate(role) for role in roles],
        count=len(roles),
    )


@router.get("/{role_id}", response_model=RoleProfileResponse)
def get_role(
    role_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    role = db.query(RoleProfile).filter(RoleProfile.id == role_id).first()
    if not role:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Role profile not found")
    return role


@router.post("", status_code=status.HTTP_201_CREATED, response_model=RoleProfileResponse)
def create_role(
    request: RoleProfileCreate,
    user: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """
    Create a role profile.
    
    When interview_structures is omitted the default structure is stored.
    """
    if db.query(RoleProfile).filter(RoleProfile.role_name == request.role_name).first():
        raise HTTPException(status_code=400, detail="Role profile with this name already exists")

    if request.interview_structures:
        structures = {
            round_type: structure.model_dump(exclude_none=True)
            for round_type, structure in request.interview_structures.items()
        }
    else:
        structures = {round_type: dict(value) for round_type, value in DEFAULT_ROLE_STRUCTURE.items()}

    role = RoleProfile(
        role_name=request.role_name,
        company_name=request.company_name,
        domain_tags=list(request.domain_tags),
        skill_expectations=list(request.skill_expectations),
        interview_structures=structures,
    )
    db.add(role)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Role profile with this name already exists")
    db.refresh(role)

    logger.info(f"Role profile created: role_id={role.id}, role_name={role.role_name}, by user_id={user.id}")
    return role
