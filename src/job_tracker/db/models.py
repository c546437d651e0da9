# job-tracker-backend\src\job_tracker\db\models.py

import enum
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean, Column, DateTime, Enum, ForeignKey, Index, Integer, BigInteger,
    String, Text, UniqueConstraint, func
)
from sqlalchemy.orm import relationship, declarative_base

# Base class for declarative models
Base = declarative_base()


def utcnow() -> datetime:
    """Naive UTC timestamp, the form every DateTime column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime | None) -> datetime | None:
    """Converts an offset-aware datetime to naive UTC. Naive values are taken as UTC already."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _enum_values(enum_cls) -> list[str]:
    return [member.value for member in enum_cls]


class ApplicationStatus(str, enum.Enum):
    APPLIED = "Applied"
    INTERVIEWING = "Interviewing"
    OFFER = "Offer"
    REJECTED = "Rejected"
    ACCEPTED = "Accepted"
    WITHDRAWN = "Withdrawn"


class FeedbackType(str, enum.Enum):
    GENERAL = "General"
    INTERVIEW = "Interview"
    PHONE_SCREEN = "PhoneScreen"
    TECHNICAL_INTERVIEW = "TechnicalInterview"
    ON_SITE = "OnSite"
    REJECTION = "Rejection"
    OFFER = "Offer"
    FOLLOW_UP = "FollowUp"
    REFERENCE = "Reference"


class AuditAction(str, enum.Enum):
    CREATE = "Create"
    UPDATE = "Update"
    DELETE = "Delete"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    roles = Column(Text, nullable=True) # list-codec encoded role labels
    created_at = Column(DateTime, default=utcnow)
    last_login_at = Column(DateTime, nullable=True)

    companies = relationship("Company", back_populates="owner")
    resumes = relationship("Resume", back_populates="owner")
    job_applications = relationship("JobApplication", back_populates="owner")


class Company(Base):
    __tablename__ = "companies"
    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_companies_user_name"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    location = Column(String(100), nullable=True)
    website = Column(String, nullable=True)
    industry = Column(String(50), nullable=True)
    size = Column(String(20), nullable=True) # e.g. "1-10", "11-50", "51-200"
    description = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    owner = relationship("User", back_populates="companies")
    contacts = relationship(
        "CompanyContact", back_populates="company", cascade="all, delete-orphan",
        order_by="CompanyContact.name",
    )
    # No cascade: a company with applications cannot be deleted.
    job_applications = relationship("JobApplication", back_populates="company")


class CompanyContact(Base):
    __tablename__ = "company_contacts"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    position = Column(String(100), nullable=True)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    linkedin = Column(String(100), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    company = relationship("Company", back_populates="contacts")


class Resume(Base):
    __tablename__ = "resumes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(String(500), nullable=True)
    file_path = Column(String(500), nullable=False)
    file_type = Column(String(10), nullable=False) # PDF, DOCX, MD
    file_size_bytes = Column(BigInteger, nullable=False)
    tags = Column(Text, nullable=True) # list-codec encoded
    is_default = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    owner = relationship("User", back_populates="resumes")
    versions = relationship(
        "ResumeVersion", back_populates="resume", cascade="all, delete-orphan",
        order_by="ResumeVersion.created_at.desc()",
    )
    job_applications = relationship("JobApplication", back_populates="resume")


# At most one default resume per user.
Index(
    "uq_resumes_user_default",
    Resume.user_id,
    unique=True,
    sqlite_where=Resume.is_default.is_(True),
    postgresql_where=Resume.is_default.is_(True),
)


class ResumeVersion(Base):
    __tablename__ = "resume_versions"

    id = Column(Integer, primary_key=True, index=True)
    resume_id = Column(Integer, ForeignKey("resumes.id", ondelete="CASCADE"), nullable=False, index=True)
    version_name = Column(String(100), nullable=False)
    file_path = Column(String(500), nullable=False)
    changes = Column(Text, nullable=True)
    job_description = Column(Text, nullable=True) # job description the version was tailored to
    ai_prompt = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    resume = relationship("Resume", back_populates="versions")


class JobApplication(Base):
    __tablename__ = "job_applications"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    job_title = Column(String(200), nullable=False)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="RESTRICT"), nullable=False)
    location = Column(String(100), nullable=True)
    job_url = Column(String, nullable=True)
    status = Column(
        Enum(ApplicationStatus, native_enum=False, length=20, values_callable=_enum_values),
        default=ApplicationStatus.APPLIED, nullable=False, index=True,
    )
    date_applied = Column(DateTime, default=utcnow, nullable=False, index=True)
    source = Column(String(100), nullable=True) # LinkedIn, referral, etc.
    tags = Column(Text, nullable=True) # list-codec encoded
    contact_person_name = Column(String(100), nullable=True)
    contact_person_email = Column(String, nullable=True)
    contact_person_phone = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
    resume_id = Column(Integer, ForeignKey("resumes.id", ondelete="SET NULL"), nullable=True)
    attachment_paths = Column(Text, nullable=True) # list-codec encoded
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    owner = relationship("User", back_populates="job_applications")
    company = relationship("Company", back_populates="job_applications")
    resume = relationship("Resume", back_populates="job_applications")
    feedbacks = relationship("Feedback", back_populates="job_application", cascade="all, delete-orphan")
    audit_logs = relationship("AuditLog", back_populates="job_application", cascade="all, delete-orphan")


# Job titles are unique per company and user, ignoring case.
Index(
    "uq_job_applications_user_company_title",
    JobApplication.user_id,
    JobApplication.company_id,
    func.lower(JobApplication.job_title),
    unique=True,
)


class Feedback(Base):
    __tablename__ = "feedbacks"

    id = Column(Integer, primary_key=True, index=True)
    job_application_id = Column(
        Integer, ForeignKey("job_applications.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    type = Column(Enum(FeedbackType, native_enum=False, length=30, values_callable=_enum_values), nullable=False)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    scheduled_follow_up_date = Column(DateTime, nullable=True)
    is_follow_up_completed = Column(Boolean, default=False, nullable=False)
    interviewer_name = Column(String(100), nullable=True)
    interview_type = Column(String(100), nullable=True) # Phone, Video, In-person, etc.
    rating = Column(Integer, nullable=True) # 1-5
    attachment_paths = Column(Text, nullable=True) # list-codec encoded
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    job_application = relationship("JobApplication", back_populates="feedbacks")


class AuditLog(Base):
    """
    Append-only record of a single change to a tracked entity.
    Rows are written by services.audit and never updated.
    """
    __tablename__ = "audit_logs"
    __table_args__ = (
        Index("ix_audit_logs_entity", "entity_type", "entity_id"),
    )

    id = Column(Integer, primary_key=True, index=True)
    entity_type = Column(String(50), nullable=False) # JobApplication, Company, Resume, etc.
    entity_id = Column(Integer, nullable=False)
    action = Column(Enum(AuditAction, native_enum=False, length=20, values_callable=_enum_values), nullable=False)
    property_name = Column(String(100), nullable=True)
    old_value = Column(Text, nullable=True)
    new_value = Column(Text, nullable=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    job_application_id = Column(
        Integer, ForeignKey("job_applications.id", ondelete="CASCADE"), nullable=True
    )
    created_at = Column(DateTime, default=utcnow, nullable=False)

    job_application = relationship("JobApplication", back_populates="audit_logs")
