# job-tracker-backend\src\job_tracker\services\crud_feedback.py

import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from job_tracker.core.config import settings
from job_tracker.core.exceptions import InputError, NotFoundError
from job_tracker.core.list_codec import decode_list, encode_list
from job_tracker.db.models import Feedback, JobApplication, User, utcnow
from job_tracker.schemas.feedback import (
    FeedbackCreate, FeedbackResponse, FeedbackUpdate, FollowUpApplication, PendingFollowUpResponse
)
from job_tracker.services.common import is_blank

logger = logging.getLogger(__name__)


def to_feedback_response(feedback: Feedback) -> FeedbackResponse:
    return FeedbackResponse(
        id=feedback.id,
        job_application_id=feedback.job_application_id,
        job_application_title=feedback.job_application.job_title if feedback.job_application else None,
        type=feedback.type,
        title=feedback.title,
        content=feedback.content,
        scheduled_follow_up_date=feedback.scheduled_follow_up_date,
        is_follow_up_completed=feedback.is_follow_up_completed,
        interviewer_name=feedback.interviewer_name,
        interview_type=feedback.interview_type,
        rating=feedback.rating,
        attachment_paths=decode_list(feedback.attachment_paths),
        created_at=feedback.created_at,
        updated_at=feedback.updated_at,
    )


# --- Reusable Getters with Permission Checks ---

def get_feedback_by_id(db: Session, feedback_id: int, user: User) -> Optional[Feedback]:
    """Fetches feedback by its ID, ensuring it belongs to the user."""
    return db.query(Feedback).options(
        joinedload(Feedback.job_application)
    ).filter(
        Feedback.id == feedback_id,
        Feedback.user_id == user.id
    ).first()


def _get_owned_feedback(db: Session, feedback_id: int, user: User) -> Feedback:
    feedback = get_feedback_by_id(db, feedback_id, user)
    if feedback is None:
        logger.warning(f"Feedback {feedback_id} not found for user {user.id}.")
        raise NotFoundError("Feedback not found")
    return feedback


def _owned_application(db: Session, application_id: int, user: User) -> Optional[JobApplication]:
    return db.query(JobApplication).filter(
        JobApplication.id == application_id,
        JobApplication.user_id == user.id
    ).first()


# --- CRUD ---

def list_feedback_for_application(db: Session, application_id: int, user: User) -> list[FeedbackResponse]:
    application = _owned_application(db, application_id, user)
    if application is None:
        raise NotFoundError("Job application not found")

    rows = (
        db.query(Feedback)
        .options(joinedload(Feedback.job_application))
        .filter(Feedback.job_application_id == application.id, Feedback.user_id == user.id)
        .order_by(Feedback.created_at.desc(), Feedback.id.desc())
        .all()
    )
    return [to_feedback_response(row) for row in rows]


def get_feedback(db: Session, feedback_id: int, user: User) -> FeedbackResponse:
    return to_feedback_response(_get_owned_feedback(db, feedback_id, user))


def create_feedback(db: Session, user: User, payload: FeedbackCreate) -> FeedbackResponse:
    application = _owned_application(db, payload.job_application_id, user)
    if application is None:
        raise InputError("Job application not found or access denied")
    if is_blank(payload.title):
        raise InputError("Feedback title is required")
    if is_blank(payload.content):
        raise InputError("Feedback content is required")

    now = utcnow()
    feedback = Feedback(
        job_application=application,
        user_id=user.id,
        type=payload.type,
        title=payload.title,
        content=payload.content,
        scheduled_follow_up_date=payload.scheduled_follow_up_date,
        is_follow_up_completed=False,
        interviewer_name=payload.interviewer_name,
        interview_type=payload.interview_type,
        rating=payload.rating,
        attachment_paths=encode_list(payload.attachment_paths),
        created_at=now,
        updated_at=now,
    )
    db.add(feedback)
    db.commit()
    db.refresh(feedback)

    logger.info(f"Created feedback {feedback.id} on job application {application.id} for user {user.id}.")
    return to_feedback_response(feedback)


def update_feedback(db: Session, feedback_id: int, user: User, payload: FeedbackUpdate) -> None:
    feedback = _get_owned_feedback(db, feedback_id, user)
    changes = payload.model_dump(exclude_unset=True)

    for required in ("title", "content"):
        if required in changes and is_blank(changes[required]):
            raise InputError(f"Feedback {required} cannot be empty")
    if "type" in changes and changes["type"] is None:
        raise InputError("Feedback type cannot be empty")
    if "is_follow_up_completed" in changes:
        changes["is_follow_up_completed"] = bool(changes["is_follow_up_completed"])
    if "attachment_paths" in changes:
        changes["attachment_paths"] = encode_list(changes["attachment_paths"])

    for key, value in changes.items():
        setattr(feedback, key, value)

    feedback.updated_at = utcnow()
    db.commit()


def delete_feedback(db: Session, feedback_id: int, user: User) -> None:
    feedback = _get_owned_feedback(db, feedback_id, user)
    db.delete(feedback)
    db.commit()
    logger.info(f"Deleted feedback {feedback_id} for user {user.id}.")


# --- Follow-ups ---

def list_pending_follow_ups(
    db: Session, user: User, now: Optional[datetime] = None
) -> list[PendingFollowUpResponse]:
    """
    Open follow-ups due within the next FOLLOW_UP_WINDOW_DAYS, soonest first.
    Overdue ones are included.
    """
    now = now or utcnow()
    horizon = now + timedelta(days=settings.FOLLOW_UP_WINDOW_DAYS)

    rows = (
        db.query(Feedback)
        .options(joinedload(Feedback.job_application).joinedload(JobApplication.company))
        .filter(
            Feedback.user_id == user.id,
            Feedback.scheduled_follow_up_date.isnot(None),
            Feedback.scheduled_follow_up_date <= horizon,
            Feedback.is_follow_up_completed.is_(False),
        )
        .order_by(Feedback.scheduled_follow_up_date.asc(), Feedback.id.asc())
        .all()
    )
    return [
        PendingFollowUpResponse(
            id=feedback.id,
            title=feedback.title,
            type=feedback.type,
            scheduled_follow_up_date=feedback.scheduled_follow_up_date,
            job_application=FollowUpApplication(
                id=feedback.job_application.id,
                job_title=feedback.job_application.job_title,
                company_name=feedback.job_application.company.name,
                status=feedback.job_application.status,
            ),
        )
        for feedback in rows
    ]


def complete_follow_up(db: Session, feedback_id: int, user: User) -> None:
    feedback = _get_owned_feedback(db, feedback_id, user)
    feedback.is_follow_up_completed = True
    feedback.updated_at = utcnow()
    db.commit()
    logger.info(f"Follow-up on feedback {feedback_id} marked complete by user {user.id}.")
