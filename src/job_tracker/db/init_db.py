# job-tracker-backend\src\job_tracker\db\init_db.py

import logging

from job_tracker.core.config import settings
from job_tracker.db.database import engine
from job_tracker.db.models import Base

logger = logging.getLogger(__name__)


def init_database() -> None:
    """Creates missing tables and the upload root directory."""
    settings.UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(bind=engine)
    logger.info(f"Database initialised; uploads stored under '{settings.UPLOAD_DIR}'.")
