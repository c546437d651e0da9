# job-tracker-backend\src\job_tracker\api\v1\job_applications.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from job_tracker.api.v1.paging import PageParams, set_pagination_headers
from job_tracker.db.database import get_db
from job_tracker.db.models import ApplicationStatus, User
from job_tracker.schemas.dashboard import DashboardResponse
from job_tracker.schemas.job_application import (
    AuditLogResponse, JobApplicationCreate, JobApplicationResponse, JobApplicationUpdate
)
from job_tracker.security.dependencies import get_current_user
from job_tracker.services import crud_job_applications, dashboard

router = APIRouter(prefix="/job-applications", tags=["job-applications"])


@router.get("/", response_model=List[JobApplicationResponse])
def list_job_applications_endpoint(
    response: Response,
    status_filter: Optional[ApplicationStatus] = Query(None, alias="status"),
    search: Optional[str] = None,
    tags: Optional[str] = None, # comma-separated, matches any
    paging: PageParams = Depends(),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Lists the current user's job applications, most recently applied first."""
    applications, total = crud_job_applications.list_job_applications(
        db, current_user, status_filter, search, tags, paging.page, paging.page_size
    )
    set_pagination_headers(response, total, paging)
    return applications

# Declared before /{application_id} so "dashboard" is not parsed as an ID
@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard_endpoint(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Summary counts and the five most recent applications."""
    return dashboard.get_dashboard(db, current_user)

@router.get("/{application_id}", response_model=JobApplicationResponse)
def get_job_application_endpoint(
    application_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)
):
    """Retrieves a specific job application by ID."""
    return crud_job_applications.get_job_application(db, application_id, current_user)

@router.post("/", response_model=JobApplicationResponse, status_code=status.HTTP_201_CREATED)
def create_job_application_endpoint(
    job_application: JobApplicationCreate,
    request: Request,
    response: Response,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Creates a job application at one of the user's companies."""
    created = crud_job_applications.create_job_application(db, current_user, job_application)
    response.headers["Location"] = str(
        request.url_for("get_job_application_endpoint", application_id=created.id)
    )
    return created

@router.put("/{application_id}", status_code=status.HTTP_204_NO_CONTENT)
@router.patch("/{application_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_job_application_endpoint(
    application_id: int,
    job_application: JobApplicationUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Updates the fields present in the request body and records changes in the history."""
    crud_job_applications.update_job_application(db, application_id, current_user, job_application)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.delete("/{application_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_job_application_endpoint(
    application_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)
):
    """Deletes a job application together with its feedback."""
    crud_job_applications.delete_job_application(db, application_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/{application_id}/history", response_model=List[AuditLogResponse])
def get_job_application_history_endpoint(
    application_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)
):
    """Audit trail of a job application, newest first."""
    return crud_job_applications.list_job_application_history(db, application_id, current_user)
