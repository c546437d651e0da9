# job-tracker-backend\src\job_tracker\schemas\dashboard.py

from pydantic import BaseModel
from datetime import datetime

from job_tracker.db.models import ApplicationStatus


class RecentApplication(BaseModel):
    id: int
    job_title: str
    company_name: str
    status: ApplicationStatus
    date_applied: datetime

class DashboardResponse(BaseModel):
    total_applications: int
    status_breakdown: dict[str, int] # keyed by status name, e.g. "Applied"
    recent_applications: list[RecentApplication]
    applications_this_month: int
