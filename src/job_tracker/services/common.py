# job-tracker-backend\src\job_tracker\services\common.py

import logging
from typing import Any, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from job_tracker.core.exceptions import ConflictError

logger = logging.getLogger(__name__)


def paginate(query: Query, page: int, page_size: int) -> Tuple[list[Any], int]:
    """Returns one 1-based page of an ordered query plus the unpaged total."""
    total = query.order_by(None).count()
    rows = query.offset((page - 1) * page_size).limit(page_size).all()
    return rows, total


def commit_or_conflict(db: Session, conflict_message: str) -> None:
    """
    Commits the session. A unique index violation, which means a concurrent
    request won a check-then-insert race, is reported as a ConflictError.
    """
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Integrity error on commit, reporting conflict: {e.orig}")
        raise ConflictError(conflict_message) from e


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()
