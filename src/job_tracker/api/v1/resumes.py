# job-tracker-backend\src\job_tracker\api\v1\resumes.py

import io
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Request, Response, UploadFile, status
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from job_tracker.api.v1.paging import PageParams, set_pagination_headers
from job_tracker.db.database import get_db
from job_tracker.db.models import User
from job_tracker.schemas.resume import ResumeResponse, ResumeUpdate, ResumeVersionResponse
from job_tracker.security.dependencies import get_current_user
from job_tracker.services import crud_resumes

router = APIRouter(prefix="/resumes", tags=["resumes"])


def _split_tags(raw_tags: List[str]) -> List[str]:
    # Accepts repeated fields as well as one comma-separated field
    return [tag.strip() for value in raw_tags for tag in value.split(",") if tag.strip()]

async def _read_upload(file: Optional[UploadFile]) -> tuple[bytes, Optional[str]]:
    if file is None:
        return b"", None
    return await file.read(), file.filename

def _download_response(download: crud_resumes.FileDownload) -> StreamingResponse:
    return StreamingResponse(
        io.BytesIO(download.content),
        media_type=download.content_type,
        headers={"Content-Disposition": f"attachment; filename=\"{download.filename}\""}
    )


@router.get("/", response_model=List[ResumeResponse])
def list_resumes_endpoint(
    response: Response,
    search: Optional[str] = None,
    paging: PageParams = Depends(),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Lists the current user's resumes, default first."""
    resumes, total = crud_resumes.list_resumes(db, current_user, search, paging.page, paging.page_size)
    set_pagination_headers(response, total, paging)
    return resumes

@router.get("/{resume_id}", response_model=ResumeResponse)
def get_resume_endpoint(resume_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Retrieves a specific resume by ID."""
    return crud_resumes.get_resume(db, resume_id, current_user)

@router.post("/", response_model=ResumeResponse, status_code=status.HTTP_201_CREATED)
async def upload_resume_endpoint(
    request: Request,
    response: Response,
    title: str = Form(...),
    description: Optional[str] = Form(None),
    tags: List[str] = Form([]),
    is_default: bool = Form(False),
    file: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Uploads a resume file (PDF, DOCX or MD, at most 10MB) with its metadata."""
    content, filename = await _read_upload(file)
    created = await crud_resumes.create_resume(
        db, current_user, title, description, _split_tags(tags), is_default, content, filename
    )
    response.headers["Location"] = str(request.url_for("get_resume_endpoint", resume_id=created.id))
    return created

@router.put("/{resume_id}", status_code=status.HTTP_204_NO_CONTENT)
@router.patch("/{resume_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_resume_endpoint(
    resume_id: int,
    resume: ResumeUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Updates resume metadata. Marking it default clears the previous default."""
    crud_resumes.update_resume(db, resume_id, current_user, resume)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.delete("/{resume_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_resume_endpoint(resume_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Deletes a resume with its versions and stored files."""
    crud_resumes.delete_resume(db, resume_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/{resume_id}/download")
async def download_resume_endpoint(
    resume_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)
):
    """Downloads the stored resume file."""
    return _download_response(await crud_resumes.download_resume(db, resume_id, current_user))


# --- Version Endpoints ---
@router.get("/{resume_id}/versions", response_model=List[ResumeVersionResponse])
def list_versions_endpoint(resume_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Lists the versions of a resume, newest first."""
    return crud_resumes.list_versions(db, resume_id, current_user)

@router.post("/{resume_id}/versions", response_model=ResumeVersionResponse, status_code=status.HTTP_201_CREATED)
async def create_version_endpoint(
    resume_id: int,
    version_name: str = Form(...),
    changes: Optional[str] = Form(None),
    job_description: Optional[str] = Form(None),
    ai_prompt: Optional[str] = Form(None),
    file: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Uploads a new version; the file must have the same type as the resume."""
    content, filename = await _read_upload(file)
    return await crud_resumes.create_version(
        db, resume_id, current_user, version_name, changes, job_description, ai_prompt, content, filename
    )

@router.get("/{resume_id}/versions/{version_id}/download")
async def download_version_endpoint(
    resume_id: int,
    version_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Downloads the file of one resume version."""
    return _download_response(await crud_resumes.download_version(db, resume_id, version_id, current_user))
