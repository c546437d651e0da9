# job-tracker-backend\src\job_tracker\schemas\feedback.py

from pydantic import BaseModel, Field, field_validator
from datetime import datetime

from job_tracker.db.models import ApplicationStatus, FeedbackType, to_naive_utc


class FeedbackCreate(BaseModel):
    job_application_id: int
    type: FeedbackType
    title: str = Field(max_length=200)
    content: str
    scheduled_follow_up_date: datetime | None = None
    interviewer_name: str | None = Field(default=None, max_length=100)
    interview_type: str | None = Field(default=None, max_length=100) # Phone, Video, In-person
    rating: int | None = Field(default=None, ge=1, le=5)
    attachment_paths: list[str] = []

    @field_validator("scheduled_follow_up_date")
    @classmethod
    def normalize_follow_up(cls, value):
        # Stored as naive UTC
        return to_naive_utc(value)

# Partial update; the owning job application cannot be changed
class FeedbackUpdate(BaseModel):
    type: FeedbackType | None = None
    title: str | None = Field(default=None, max_length=200)
    content: str | None = None
    scheduled_follow_up_date: datetime | None = None
    is_follow_up_completed: bool | None = None
    interviewer_name: str | None = Field(default=None, max_length=100)
    interview_type: str | None = Field(default=None, max_length=100)
    rating: int | None = Field(default=None, ge=1, le=5)
    attachment_paths: list[str] | None = None

    @field_validator("scheduled_follow_up_date")
    @classmethod
    def normalize_follow_up(cls, value):
        return to_naive_utc(value)

class FeedbackResponse(BaseModel):
    id: int
    job_application_id: int
    job_application_title: str | None = None
    type: FeedbackType
    title: str
    content: str
    scheduled_follow_up_date: datetime | None = None
    is_follow_up_completed: bool
    interviewer_name: str | None = None
    interview_type: str | None = None
    rating: int | None = None
    attachment_paths: list[str] = []
    created_at: datetime
    updated_at: datetime


class FollowUpApplication(BaseModel):
    id: int
    job_title: str
    company_name: str
    status: ApplicationStatus

class PendingFollowUpResponse(BaseModel):
    id: int
    title: str
    type: FeedbackType
    scheduled_follow_up_date: datetime
    job_application: FollowUpApplication
