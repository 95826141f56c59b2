"""
Script to grant the admin role to an account, creating it when a password is given.
Run: python -m scripts.make_admin <email> [password]
"""
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.db.session import SessionLocal
from app.db.init_db import init_db
from app.db.models.user import User
from app.core.security import hash_password
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def make_admin(db, email: str, password: str = None) -> bool:
    """Promote (or create) the account. Returns False when it cannot be found or created."""
    email = email.strip().lower()
    user = db.query(User).filter(User.email == email).first()

    if not user:
        if not password:
            logger.error(f"User {email} not found and no password provided. Cannot create user.")
            return False
        logger.info(f"Creating new admin user: {email}")
        user = User(
            email=email,
            full_name="Administrator",
            password_hash=hash_password(password),
        )
        db.add(user)
    else:
        logger.info(f"Found existing user: {email} (ID: {user.id})")

    user.role = "admin"
    db.commit()
    logger.info(f"User {email} is now an admin")
    return True


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python -m scripts.make_admin <email> [password]")
        sys.exit(1)

    init_db()
    db = SessionLocal()
    try:
        if not make_admin(db, sys.argv[1], sys.argv[2] if len(sys.argv) > 2 else None):
            sys.exit(1)
        print(f"\n[SUCCESS] {sys.argv[1]} has admin access")
    except Exception as e:
        db.rollback()
        logger.error(f"Error updating user: {e}", exc_info=True)
        sys.exit(1)
    finally:
        db.close()
