# job-tracker-backend\src\job_tracker\schemas\__init__.py

from .user import UserCreate, UserResponse, Token
from .company import (
    CompanyCreate, CompanyUpdate, CompanyResponse, CompanyContactCreate, CompanyContactResponse
)
from .job_application import (
    JobApplicationCreate, JobApplicationUpdate, JobApplicationResponse, AuditLogResponse
)
from .resume import ResumeUpdate, ResumeResponse, ResumeVersionResponse
from .feedback import FeedbackCreate, FeedbackUpdate, FeedbackResponse, PendingFollowUpResponse
from .dashboard import DashboardResponse, RecentApplication
