# job-tracker-backend\src\job_tracker\schemas\resume.py

from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional

# Resume creation arrives as multipart form data: the metadata fields are
# read with Form(...) next to the UploadFile in the endpoint, so there is no
# JSON create schema.

# Schema for updating resume metadata; the stored file never changes
class ResumeUpdate(BaseModel):
    title: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = Field(default=None, max_length=500)
    tags: Optional[list[str]] = None
    is_default: Optional[bool] = None

# --- The main response schema ---
class ResumeResponse(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    file_path: str
    file_type: str # PDF, DOCX, MD
    file_size_bytes: int
    tags: list[str] = []
    is_default: bool
    created_at: datetime
    updated_at: datetime

    # How many job applications reference this resume
    usage_count: int = 0


class ResumeVersionResponse(BaseModel):
    id: int
    resume_id: int
    version_name: str
    file_path: str
    changes: Optional[str] = None
    job_description: Optional[str] = None
    ai_prompt: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
