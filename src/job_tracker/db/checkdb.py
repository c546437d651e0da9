# job-tracker-backend\src\job_tracker\db\checkdb.py

import logging
import sys

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError, SQLAlchemyError  # Import specific exceptions

logger = logging.getLogger(__name__)


def mask_database_url(db_url: str) -> str:
    """Hides the password part of a user:password@host URL."""
    if "@" not in db_url:
        return db_url
    credentials_part = db_url.split('@')[0].split('://')[-1]
    if ':' not in credentials_part: # no password present
        return db_url
    return db_url.replace(credentials_part.split(':', 1)[1], "****", 1)


def verify_database_connection(engine: Engine) -> bool:
    """
    Opens a connection on the given engine and runs ``SELECT 1``.
    Returns True when the database answered, False otherwise; failures are
    logged rather than raised so callers can report health.
    """
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1")).scalar()
        return True

    except OperationalError as op_e:
        # Common connection errors (wrong host, port, DB name, server down, firewall)
        logger.error(f"Could not connect to the database (OperationalError): {op_e}")
        return False

    except SQLAlchemyError as e:
        # Other SQLAlchemy errors (authentication, URL format)
        logger.error(f"An SQLAlchemy error occurred during connection check: {e}")
        return False


if __name__ == "__main__":
    from job_tracker.core.logging_config import configure_logging
    from job_tracker.db.database import SQLALCHEMY_DATABASE_URL, engine

    configure_logging()
    logger.info(f"Using Database URL: {mask_database_url(SQLALCHEMY_DATABASE_URL)}")
    if verify_database_connection(engine):
        logger.info("Database connection appears to be working.")
        sys.exit(0) # Exit with success status
    logger.error("Database connection verification failed.")
    sys.exit(1) # Exit with error status
