import logging

from chefdhundo.db.session import engine
from chefdhundo.db.base import Base

logger = logging.getLogger(__name__)


def init_db():
    """Create any missing tables. Used when migrations are not run on startup."""
    # Registers every model on Base.metadata
    import chefdhundo.db.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ensured")
