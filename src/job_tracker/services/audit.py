# job-tracker-backend\src\job_tracker\services\audit.py

"""Field-level audit trail for job applications.

Only a fixed set of fields is tracked. Each change is captured as an explicit
snapshot before and after the update, and every differing field becomes one
AuditLog row.
"""

import logging
from dataclasses import dataclass, fields
from typing import Optional

from sqlalchemy.orm import Session

from job_tracker.db.models import AuditAction, AuditLog, JobApplication, User, utcnow

logger = logging.getLogger(__name__)

JOB_APPLICATION_ENTITY = "JobApplication"

# Snapshot attribute -> property name recorded in the log
TRACKED_PROPERTY_NAMES = {
    "job_title": "JobTitle",
    "status": "Status",
    "location": "Location",
    "notes": "Notes",
}


@dataclass(frozen=True)
class JobApplicationSnapshot:
    job_title: Optional[str]
    status: Optional[str]
    location: Optional[str]
    notes: Optional[str]

    @classmethod
    def capture(cls, application: JobApplication) -> "JobApplicationSnapshot":
        status = application.status.value if application.status is not None else None
        return cls(
            job_title=application.job_title,
            status=status,
            location=application.location,
            notes=application.notes,
        )


@dataclass(frozen=True)
class FieldChange:
    property_name: str
    old_value: Optional[str]
    new_value: Optional[str]


def diff_snapshots(
    before: JobApplicationSnapshot, after: JobApplicationSnapshot
) -> list[FieldChange]:
    changes = []
    for field in fields(JobApplicationSnapshot):
        old_value = getattr(before, field.name)
        new_value = getattr(after, field.name)
        if old_value != new_value:
            changes.append(FieldChange(TRACKED_PROPERTY_NAMES[field.name], old_value, new_value))
    return changes


def add_audit_log(
    db: Session,
    user: User,
    action: AuditAction,
    entity_id: int,
    job_application_id: Optional[int],
    property_name: Optional[str] = None,
    old_value: Optional[str] = None,
    new_value: Optional[str] = None,
    entity_type: str = JOB_APPLICATION_ENTITY,
) -> AuditLog:
    """Stages an audit row in the caller's transaction; the caller commits."""
    entry = AuditLog(
        entity_type=entity_type,
        entity_id=entity_id,
        action=action,
        property_name=property_name,
        old_value=old_value,
        new_value=new_value,
        user_id=user.id,
        job_application_id=job_application_id,
        created_at=utcnow(),
    )
    db.add(entry)
    return entry


def record_update(
    db: Session,
    user: User,
    application: JobApplication,
    before: JobApplicationSnapshot,
) -> list[FieldChange]:
    """Adds one Update row per tracked field that differs from ``before``."""
    changes = diff_snapshots(before, JobApplicationSnapshot.capture(application))
    for change in changes:
        add_audit_log(
            db, user, AuditAction.UPDATE,
            entity_id=application.id,
            job_application_id=application.id,
            property_name=change.property_name,
            old_value=change.old_value,
            new_value=change.new_value,
        )
    if changes:
        logger.info(
            f"AUDIT: job application {application.id} changed "
            f"{', '.join(c.property_name for c in changes)} (user {user.id})."
        )
    return changes


def list_history(db: Session, application: JobApplication) -> list[AuditLog]:
    return (
        db.query(AuditLog)
        .filter(AuditLog.job_application_id == application.id)
        .order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
        .all()
    )
