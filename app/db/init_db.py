import logging

from app.db.session import engine
from app.db.base import Base
import app.db.models  # noqa: F401  registers every model on Base.metadata

logger = logging.getLogger(__name__)


def init_db() -> None:
    """Create any missing tables (development / SQLite convenience)."""
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ensured")
