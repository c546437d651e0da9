# job-tracker-backend\src\job_tracker\schemas\company.py

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from datetime import datetime

# Schema for creating a company (POST body)
class CompanyCreate(BaseModel):
    name: str = Field(max_length=200)
    location: str | None = Field(default=None, max_length=100)
    website: str | None = None
    industry: str | None = Field(default=None, max_length=50)
    size: str | None = Field(default=None, max_length=20) # e.g. "1-10", "11-50"
    description: str | None = None
    notes: str | None = None

# Schema for updating a company; only fields sent by the client are applied
class CompanyUpdate(BaseModel):
    name: str | None = Field(default=None, max_length=200)
    location: str | None = Field(default=None, max_length=100)
    website: str | None = None
    industry: str | None = Field(default=None, max_length=50)
    size: str | None = Field(default=None, max_length=20)
    description: str | None = None
    notes: str | None = None

class CompanyResponse(BaseModel):
    id: int
    name: str
    location: str | None = None
    website: str | None = None
    industry: str | None = None
    size: str | None = None
    description: str | None = None
    notes: str | None = None
    created_at: datetime
    updated_at: datetime
    job_applications_count: int = 0


class CompanyContactCreate(BaseModel):
    name: str = Field(max_length=100)
    position: str | None = Field(default=None, max_length=100)
    email: EmailStr | None = None
    phone: str | None = None
    linkedin: str | None = Field(default=None, max_length=100)
    notes: str | None = None

class CompanyContactResponse(BaseModel):
    id: int
    company_id: int
    name: str
    position: str | None = None
    email: str | None = None
    phone: str | None = None
    linkedin: str | None = None
    notes: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
