# job-tracker-backend\src\job_tracker\services\dashboard.py

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from job_tracker.db.models import ApplicationStatus, JobApplication, User, utcnow
from job_tracker.schemas.dashboard import DashboardResponse, RecentApplication

logger = logging.getLogger(__name__)

RECENT_APPLICATIONS_LIMIT = 5


def _month_start(now: datetime) -> datetime:
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def _next_month_start(now: datetime) -> datetime:
    start = _month_start(now)
    if start.month == 12:
        return start.replace(year=start.year + 1, month=1)
    return start.replace(month=start.month + 1)


def get_dashboard(db: Session, user: User, now: Optional[datetime] = None) -> DashboardResponse:
    """
    Summarizes the user's applications.

    Args:
        db: Database session.
        user: The authenticated user.
        now: Reference time (naive UTC) for the monthly count. Defaults to the current time.
    """
    now = now or utcnow()
    owned = db.query(JobApplication).filter(JobApplication.user_id == user.id)

    total = owned.count()

    status_rows = (
        db.query(JobApplication.status, func.count(JobApplication.id))
        .filter(JobApplication.user_id == user.id)
        .group_by(JobApplication.status)
        .all()
    )
    breakdown = {
        (status.value if isinstance(status, ApplicationStatus) else str(status)): count
        for status, count in status_rows
    }

    recent = (
        owned.options(joinedload(JobApplication.company))
        .order_by(JobApplication.date_applied.desc(), JobApplication.id.desc())
        .limit(RECENT_APPLICATIONS_LIMIT)
        .all()
    )

    this_month = owned.filter(
        JobApplication.date_applied >= _month_start(now),
        JobApplication.date_applied < _next_month_start(now),
    ).count()

    logger.debug(f"Dashboard for user {user.id}: {total} applications, {this_month} this month.")
    return DashboardResponse(
        total_applications=total,
        status_breakdown=breakdown,
        recent_applications=[
            RecentApplication(
                id=application.id,
                job_title=application.job_title,
                company_name=application.company.name,
                status=application.status,
                date_applied=application.date_applied,
            )
            for application in recent
        ],
        applications_this_month=this_month,
    )
