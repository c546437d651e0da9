# job-tracker-backend\src\job_tracker\schemas\job_application.py

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from datetime import datetime

from job_tracker.db.models import ApplicationStatus, AuditAction, to_naive_utc

# Schema for creating a job application
class JobApplicationCreate(BaseModel):
    job_title: str = Field(max_length=200)
    company_id: int
    location: str | None = Field(default=None, max_length=100)
    job_url: str | None = None
    status: ApplicationStatus = ApplicationStatus.APPLIED
    date_applied: datetime | None = None # defaults to now
    source: str | None = Field(default=None, max_length=100) # LinkedIn, referral, etc.
    tags: list[str] = []
    contact_person_name: str | None = Field(default=None, max_length=100)
    contact_person_email: EmailStr | None = None
    contact_person_phone: str | None = None
    notes: str | None = None
    resume_id: int | None = None
    attachment_paths: list[str] = []

    @field_validator("date_applied")
    @classmethod
    def normalize_date_applied(cls, value):
        # Stored as naive UTC
        return to_naive_utc(value)

# Schema for partial updates. Fields left out of the request body keep their
# stored value; resume_id null (or 0) detaches the resume.
class JobApplicationUpdate(BaseModel):
    job_title: str | None = Field(default=None, max_length=200)
    company_id: int | None = None
    location: str | None = Field(default=None, max_length=100)
    job_url: str | None = None
    status: ApplicationStatus | None = None
    date_applied: datetime | None = None
    source: str | None = Field(default=None, max_length=100)
    tags: list[str] | None = None
    contact_person_name: str | None = Field(default=None, max_length=100)
    contact_person_email: EmailStr | None = None
    contact_person_phone: str | None = None
    notes: str | None = None
    resume_id: int | None = None
    attachment_paths: list[str] | None = None

    @field_validator("date_applied")
    @classmethod
    def normalize_date_applied(cls, value):
        return to_naive_utc(value)

class JobApplicationResponse(BaseModel):
    id: int
    job_title: str
    company_id: int
    company_name: str
    location: str | None = None
    job_url: str | None = None
    status: ApplicationStatus
    date_applied: datetime
    source: str | None = None
    tags: list[str] = []
    contact_person_name: str | None = None
    contact_person_email: str | None = None
    contact_person_phone: str | None = None
    notes: str | None = None
    resume_id: int | None = None
    resume_title: str | None = None
    attachment_paths: list[str] = []
    created_at: datetime
    updated_at: datetime


class AuditLogResponse(BaseModel):
    id: int
    entity_type: str
    entity_id: int
    action: AuditAction
    property_name: str | None = None
    old_value: str | None = None
    new_value: str | None = None
    user_id: int
    job_application_id: int | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
