# job-tracker-backend\src\job_tracker\services\crud_job_applications.py

import logging
from typing import Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from job_tracker.core.exceptions import ConflictError, InputError, NotFoundError
from job_tracker.core.list_codec import contains_item, decode_list, encode_list
from job_tracker.db.models import (
    ApplicationStatus, AuditAction, AuditLog, Company, JobApplication, Resume, User, utcnow
)
from job_tracker.schemas.job_application import (
    JobApplicationCreate, JobApplicationResponse, JobApplicationUpdate
)
from job_tracker.services import audit
from job_tracker.services.common import commit_or_conflict, is_blank, paginate

logger = logging.getLogger(__name__)


def duplicate_title_message(job_title: str) -> str:
    return (
        f"You already have a job application for '{job_title}' at this company. "
        "Please use a different job title or update the existing application."
    )


def parse_tag_filter(tags: Optional[str]) -> list[str]:
    """Splits a comma-separated tag filter, dropping empty entries."""
    if not tags:
        return []
    return [tag.strip() for tag in tags.split(",") if tag.strip()]


def to_job_application_response(application: JobApplication) -> JobApplicationResponse:
    return JobApplicationResponse(
        id=application.id,
        job_title=application.job_title,
        company_id=application.company_id,
        company_name=application.company.name,
        location=application.location,
        job_url=application.job_url,
        status=application.status,
        date_applied=application.date_applied,
        source=application.source,
        tags=decode_list(application.tags),
        contact_person_name=application.contact_person_name,
        contact_person_email=application.contact_person_email,
        contact_person_phone=application.contact_person_phone,
        notes=application.notes,
        resume_id=application.resume_id,
        resume_title=application.resume.title if application.resume else None,
        attachment_paths=decode_list(application.attachment_paths),
        created_at=application.created_at,
        updated_at=application.updated_at,
    )


# --- Reusable Getters with Permission Checks ---

def get_job_application_by_id(db: Session, application_id: int, user: User) -> Optional[JobApplication]:
    """Fetches a job application by its ID, ensuring it belongs to the user."""
    return db.query(JobApplication).options(
        joinedload(JobApplication.company),
        joinedload(JobApplication.resume),
    ).filter(
        JobApplication.id == application_id,
        JobApplication.user_id == user.id
    ).first()


def get_owned_job_application(db: Session, application_id: int, user: User) -> JobApplication:
    application = get_job_application_by_id(db, application_id, user)
    if application is None:
        logger.warning(f"Job application {application_id} not found for user {user.id}.")
        raise NotFoundError("Job application not found")
    return application


def _require_company(db: Session, company_id: int, user: User) -> Company:
    company = db.query(Company).filter(Company.id == company_id, Company.user_id == user.id).first()
    if company is None:
        raise InputError("Company not found or access denied")
    return company


def _require_resume(db: Session, resume_id: int, user: User) -> Resume:
    resume = db.query(Resume).filter(Resume.id == resume_id, Resume.user_id == user.id).first()
    if resume is None:
        raise InputError("Resume not found or access denied")
    return resume


def _title_taken(
    db: Session, user: User, company_id: int, job_title: str, exclude_id: Optional[int] = None
) -> bool:
    query = db.query(JobApplication.id).filter(
        JobApplication.user_id == user.id,
        JobApplication.company_id == company_id,
        func.lower(JobApplication.job_title) == job_title.lower(),
    )
    if exclude_id is not None:
        query = query.filter(JobApplication.id != exclude_id)
    return db.query(query.exists()).scalar()


# --- CRUD ---

def list_job_applications(
    db: Session,
    user: User,
    status: Optional[ApplicationStatus],
    search: Optional[str],
    tags: Optional[str],
    page: int,
    page_size: int,
) -> Tuple[list[JobApplicationResponse], int]:
    """
    Lists the user's applications, newest application date first.

    ``search`` matches job title, company name or notes; ``tags`` is a
    comma-separated list and an application matches if it carries any of them.
    """
    query = (
        db.query(JobApplication)
        .join(JobApplication.company)
        .options(joinedload(JobApplication.company), joinedload(JobApplication.resume))
        .filter(JobApplication.user_id == user.id)
    )

    if status is not None:
        query = query.filter(JobApplication.status == status)

    if not is_blank(search):
        query = query.filter(or_(
            JobApplication.job_title.icontains(search, autoescape=True),
            Company.name.icontains(search, autoescape=True),
            JobApplication.notes.icontains(search, autoescape=True),
        ))

    tag_list = parse_tag_filter(tags)
    if tag_list:
        # Whole items only, so "java" does not match "javascript"
        query = query.filter(or_(*[contains_item(JobApplication.tags, tag) for tag in tag_list]))

    rows, total = paginate(
        query.order_by(JobApplication.date_applied.desc(), JobApplication.id.desc()), page, page_size
    )
    return [to_job_application_response(row) for row in rows], total


def get_job_application(db: Session, application_id: int, user: User) -> JobApplicationResponse:
    return to_job_application_response(get_owned_job_application(db, application_id, user))


def create_job_application(
    db: Session, user: User, payload: JobApplicationCreate
) -> JobApplicationResponse:
    """Creates an application at one of the user's companies and logs a Create audit row."""
    if is_blank(payload.job_title):
        raise InputError("Job title is required")
    if payload.company_id <= 0:
        raise InputError("Valid company ID is required")

    company = _require_company(db, payload.company_id, user)
    resume = _require_resume(db, payload.resume_id, user) if payload.resume_id else None

    if _title_taken(db, user, company.id, payload.job_title):
        raise ConflictError(duplicate_title_message(payload.job_title))

    now = utcnow()
    application = JobApplication(
        user_id=user.id,
        job_title=payload.job_title,
        company=company,
        location=payload.location,
        job_url=payload.job_url,
        status=payload.status,
        date_applied=payload.date_applied or now,
        source=payload.source,
        tags=encode_list(payload.tags),
        contact_person_name=payload.contact_person_name,
        contact_person_email=payload.contact_person_email,
        contact_person_phone=payload.contact_person_phone,
        notes=payload.notes,
        resume=resume,
        attachment_paths=encode_list(payload.attachment_paths),
        created_at=now,
        updated_at=now,
    )
    db.add(application)
    db.flush() # assigns the id used by the audit row

    audit.add_audit_log(
        db, user, AuditAction.CREATE,
        entity_id=application.id,
        job_application_id=application.id,
    )
    commit_or_conflict(db, duplicate_title_message(payload.job_title))
    db.refresh(application)

    logger.info(f"Created job application {application.id} ('{application.job_title}') for user {user.id}.")
    return to_job_application_response(application)


def update_job_application(
    db: Session, application_id: int, user: User, payload: JobApplicationUpdate
) -> list[audit.FieldChange]:
    """
    Applies the fields present in ``payload`` and records an Update audit row
    for each tracked field (title, status, location, notes) that changed.
    """
    application = get_owned_job_application(db, application_id, user)
    before = audit.JobApplicationSnapshot.capture(application)
    changes = payload.model_dump(exclude_unset=True)

    # Lookups below must not flush half-applied changes into the unique index
    with db.no_autoflush:
        _apply_changes(db, application, user, changes)

    application.updated_at = utcnow()
    field_changes = audit.record_update(db, user, application, before)
    commit_or_conflict(db, duplicate_title_message(application.job_title))
    return field_changes


def _apply_changes(db: Session, application: JobApplication, user: User, changes: dict) -> None:
    if "job_title" in changes:
        job_title = changes.pop("job_title")
        if is_blank(job_title):
            raise InputError("Job title cannot be empty")
        application.job_title = job_title

    if "company_id" in changes:
        company_id = changes.pop("company_id")
        if company_id is None:
            raise InputError("Valid company ID is required")
        application.company = _require_company(db, company_id, user)

    if "status" in changes:
        new_status = changes.pop("status")
        if new_status is None:
            raise InputError("Status cannot be empty")
        application.status = new_status

    if "date_applied" in changes:
        date_applied = changes.pop("date_applied")
        if date_applied is not None:
            application.date_applied = date_applied

    if "resume_id" in changes:
        resume_id = changes.pop("resume_id")
        application.resume = _require_resume(db, resume_id, user) if resume_id else None

    for list_field in ("tags", "attachment_paths"):
        if list_field in changes:
            setattr(application, list_field, encode_list(changes.pop(list_field)))

    for key, value in changes.items():
        setattr(application, key, value)

    if _title_taken(db, user, application.company.id, application.job_title, exclude_id=application.id):
        raise ConflictError(duplicate_title_message(application.job_title))


def delete_job_application(db: Session, application_id: int, user: User) -> None:
    """Deletes an application with its feedback and history, leaving one Delete audit row."""
    application = get_owned_job_application(db, application_id, user)
    job_title = application.job_title

    db.delete(application)
    # Not linked to the application row, which is gone after this commit
    audit.add_audit_log(
        db, user, AuditAction.DELETE,
        entity_id=application_id,
        job_application_id=None,
        old_value=job_title,
    )
    db.commit()
    logger.info(f"Deleted job application {application_id} for user {user.id}.")


def list_job_application_history(db: Session, application_id: int, user: User) -> list[AuditLog]:
    application = get_owned_job_application(db, application_id, user)
    return audit.list_history(db, application)
