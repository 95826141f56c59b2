import logging
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from app.db.models.user import User
from app.core.auth_dependency import get_current_user_obj, get_db
from app.core.security import hash_password, verify_password, create_access_token
from app.schemas.auth import ProfileResponse, SignupRequest, SignupResponse, TokenResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


# ✅ CANDIDATE SIGNUP
@router.post("/signup", status_code=status.HTTP_201_CREATED, response_model=SignupResponse)
def signup(request: SignupRequest, db: Session = Depends(get_db)):
    email = request.email.lower()
    existing_user = db.query(User).filter(User.email == email).first()
    if existing_user:
        raise HTTPException(status_code=400, detail="Email already registered")

    user = User(
        full_name=request.full_name.strip(),
        email=email,
        password_hash=hash_password(request.password),
        experience_level=request.experience_level,
        experience_years=request.experience_years,
        education_degree=request.education_degree,
        college=request.college,
        domains=list(request.domains),
        role="student",
    )

    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info(f"User signed up: user_id={user.id}")
    return SignupResponse(message="User created successfully", user_id=user.id)


# ✅ OAUTH2 LOGIN FOR SWAGGER + JWT
@router.post("/login", response_model=TokenResponse)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    # Swagger sends "username", but we treat it as email
    user = db.query(User).filter(User.email == form_data.username.lower()).first()

    if not user or not verify_password(form_data.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = create_access_token({"sub": user.email})

    return TokenResponse(access_token=token)


@router.get("/profile", response_model=ProfileResponse)
def get_profile(user: User = Depends(get_current_user_obj)):
    """Current account profile."""
    return user
