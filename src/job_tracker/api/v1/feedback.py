# job-tracker-backend\src\job_tracker\api\v1\feedback.py

from typing import List

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from job_tracker.db.database import get_db
from job_tracker.db.models import User
from job_tracker.schemas.feedback import (
    FeedbackCreate, FeedbackResponse, FeedbackUpdate, PendingFollowUpResponse
)
from job_tracker.security.dependencies import get_current_user
from job_tracker.services import crud_feedback

router = APIRouter(prefix="/feedback", tags=["feedback"])


@router.post("/", response_model=FeedbackResponse, status_code=status.HTTP_201_CREATED)
def create_feedback_endpoint(
    feedback: FeedbackCreate,
    request: Request,
    response: Response,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Records feedback on one of the user's job applications."""
    created = crud_feedback.create_feedback(db, current_user, feedback)
    response.headers["Location"] = str(request.url_for("get_feedback_endpoint", feedback_id=created.id))
    return created

@router.get("/application/{application_id}", response_model=List[FeedbackResponse])
def list_application_feedback_endpoint(
    application_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)
):
    """Lists the feedback of a job application, newest first."""
    return crud_feedback.list_feedback_for_application(db, application_id, current_user)

# Declared before /{feedback_id} so "follow-ups" is not parsed as an ID
@router.get("/follow-ups", response_model=List[PendingFollowUpResponse])
def list_follow_ups_endpoint(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Open follow-ups due within the next week, including overdue ones."""
    return crud_feedback.list_pending_follow_ups(db, current_user)

@router.get("/{feedback_id}", response_model=FeedbackResponse)
def get_feedback_endpoint(feedback_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Retrieves a specific feedback entry by ID."""
    return crud_feedback.get_feedback(db, feedback_id, current_user)

@router.put("/{feedback_id}", status_code=status.HTTP_204_NO_CONTENT)
@router.patch("/{feedback_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_feedback_endpoint(
    feedback_id: int,
    feedback: FeedbackUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    crud_feedback.update_feedback(db, feedback_id, current_user, feedback)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.delete("/{feedback_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_feedback_endpoint(feedback_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    crud_feedback.delete_feedback(db, feedback_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.post("/{feedback_id}/complete-followup", status_code=status.HTTP_204_NO_CONTENT)
def complete_follow_up_endpoint(
    feedback_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)
):
    """Marks the follow-up of a feedback entry as done."""
    crud_feedback.complete_follow_up(db, feedback_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
