# job-tracker-backend\src\job_tracker\api\v1\companies.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from job_tracker.api.v1.paging import PageParams, set_pagination_headers
from job_tracker.db.database import get_db
from job_tracker.db.models import User
from job_tracker.schemas.company import (
    CompanyContactCreate, CompanyContactResponse, CompanyCreate, CompanyResponse, CompanyUpdate
)
from job_tracker.security.dependencies import get_current_user
from job_tracker.services import crud_companies

router = APIRouter(prefix="/companies", tags=["companies"])


@router.get("/", response_model=List[CompanyResponse])
def list_companies_endpoint(
    response: Response,
    search: Optional[str] = None,
    paging: PageParams = Depends(),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Lists the current user's companies, ordered by name."""
    companies, total = crud_companies.list_companies(db, current_user, search, paging.page, paging.page_size)
    set_pagination_headers(response, total, paging)
    return companies

@router.get("/{company_id}", response_model=CompanyResponse)
def get_company_endpoint(company_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Retrieves a specific company by ID."""
    return crud_companies.get_company(db, company_id, current_user)

@router.post("/", response_model=CompanyResponse, status_code=status.HTTP_201_CREATED)
def create_company_endpoint(
    company: CompanyCreate,
    request: Request,
    response: Response,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Creates a new company."""
    created = crud_companies.create_company(db, current_user, company)
    response.headers["Location"] = str(request.url_for("get_company_endpoint", company_id=created.id))
    return created

@router.put("/{company_id}", status_code=status.HTTP_204_NO_CONTENT)
@router.patch("/{company_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_company_endpoint(
    company_id: int,
    company: CompanyUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Updates the fields present in the request body."""
    crud_companies.update_company(db, company_id, current_user, company)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.delete("/{company_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_company_endpoint(company_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Deletes a company and its contacts. Refused while job applications reference it."""
    crud_companies.delete_company(db, company_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# --- Contact Endpoints ---
@router.get("/{company_id}/contacts", response_model=List[CompanyContactResponse])
def list_contacts_endpoint(company_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Lists the contacts of a company."""
    return crud_companies.list_contacts(db, company_id, current_user)

@router.post("/{company_id}/contacts", response_model=CompanyContactResponse, status_code=status.HTTP_201_CREATED)
def create_contact_endpoint(
    company_id: int,
    contact: CompanyContactCreate,
    request: Request,
    response: Response,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Adds a contact to a company."""
    created = crud_companies.create_contact(db, company_id, current_user, contact)
    response.headers["Location"] = str(
        request.url_for("get_contact_endpoint", company_id=company_id, contact_id=created.id)
    )
    return created

@router.get("/{company_id}/contacts/{contact_id}", response_model=CompanyContactResponse)
def get_contact_endpoint(
    company_id: int,
    contact_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Retrieves one contact of a company."""
    return crud_companies.get_contact(db, company_id, contact_id, current_user)

@router.delete("/{company_id}/contacts/{contact_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_contact_endpoint(
    company_id: int,
    contact_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Removes a contact from a company."""
    crud_companies.delete_contact(db, company_id, contact_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
