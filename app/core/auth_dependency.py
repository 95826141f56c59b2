"""
Request dependencies for authentication and authorization.

Bearer tokens carry the account email in `sub`. Candidate endpoints use
get_current_user_obj; administrative endpoints use require_admin.
"""
import logging
from fastapi import Depends, HTTPException
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from sqlalchemy.orm import Session
from app.core.config import SECRET_KEY, ALGORITHM
from app.db.session import SessionLocal
from app.db.models.user import User

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


def get_db():
    """Database session dependency."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def decode_token_subject(token: str) -> str:
    """Return the email stored in a bearer token, 401 when unreadable."""
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid token")

    email = payload.get("sub")
    if not email:
        raise HTTPException(status_code=401, detail="Invalid token")
    return email


def get_current_user(token: str = Depends(oauth2_scheme)) -> str:
    """Get current user email from JWT token."""
    return decode_token_subject(token)


def get_current_user_obj(
    email: str = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> User:
    """Load the authenticated account; a token for a deleted account is a 401."""
    user = db.query(User).filter(User.email == email).first()
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    return user


def require_admin(user: User = Depends(get_current_user_obj)) -> User:
    """Authenticated account with the admin role, otherwise 403."""
    if not user.is_admin:
        logger.warning(f"Admin access denied: user_id={user.id}, role={user.role}")
        raise HTTPException(status_code=403, detail="Admin access required")
    return user
