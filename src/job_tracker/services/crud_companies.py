# job-tracker-backend\src\job_tracker\services\crud_companies.py

import logging
from typing import Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from job_tracker.core.exceptions import ConflictError, InputError, NotFoundError
from job_tracker.db.models import Company, CompanyContact, JobApplication, User, utcnow
from job_tracker.schemas.company import (
    CompanyContactCreate, CompanyContactResponse, CompanyCreate, CompanyResponse, CompanyUpdate
)
from job_tracker.services.common import commit_or_conflict, is_blank, paginate

logger = logging.getLogger(__name__)

DUPLICATE_NAME_MESSAGE = "A company with this name already exists"


def _application_count(db: Session, company_id: int) -> int:
    return db.query(func.count(JobApplication.id)).filter(JobApplication.company_id == company_id).scalar()


def to_company_response(company: Company, job_applications_count: int) -> CompanyResponse:
    return CompanyResponse(
        id=company.id,
        name=company.name,
        location=company.location,
        website=company.website,
        industry=company.industry,
        size=company.size,
        description=company.description,
        notes=company.notes,
        created_at=company.created_at,
        updated_at=company.updated_at,
        job_applications_count=job_applications_count,
    )


# --- Reusable Getter with Permission Check ---

def get_company_by_id(db: Session, company_id: int, user: User) -> Optional[Company]:
    """Fetches a company by its ID, ensuring it belongs to the specified user."""
    return db.query(Company).filter(
        Company.id == company_id,
        Company.user_id == user.id
    ).first()


def _get_owned_company(db: Session, company_id: int, user: User) -> Company:
    company = get_company_by_id(db, company_id, user)
    if company is None:
        logger.warning(f"Company {company_id} not found for user {user.id}.")
        raise NotFoundError("Company not found")
    return company


def _name_taken(db: Session, user: User, name: str, exclude_id: Optional[int] = None) -> bool:
    query = db.query(Company.id).filter(Company.user_id == user.id, Company.name == name)
    if exclude_id is not None:
        query = query.filter(Company.id != exclude_id)
    return db.query(query.exists()).scalar()


# --- CRUD ---

def list_companies(
    db: Session, user: User, search: Optional[str], page: int, page_size: int
) -> Tuple[list[CompanyResponse], int]:
    """Lists the user's companies by name, optionally filtered by a search term."""
    counts = (
        db.query(JobApplication.company_id, func.count(JobApplication.id).label("n"))
        .group_by(JobApplication.company_id)
        .subquery()
    )
    query = (
        db.query(Company, func.coalesce(counts.c.n, 0))
        .outerjoin(counts, counts.c.company_id == Company.id)
        .filter(Company.user_id == user.id)
    )
    if not is_blank(search):
        query = query.filter(or_(
            Company.name.icontains(search, autoescape=True),
            Company.industry.icontains(search, autoescape=True),
            Company.location.icontains(search, autoescape=True),
        ))

    rows, total = paginate(query.order_by(Company.name.asc()), page, page_size)
    return [to_company_response(company, count) for company, count in rows], total


def get_company(db: Session, company_id: int, user: User) -> CompanyResponse:
    company = _get_owned_company(db, company_id, user)
    return to_company_response(company, _application_count(db, company.id))


def create_company(db: Session, user: User, payload: CompanyCreate) -> CompanyResponse:
    """Creates a company; names are unique per user."""
    if is_blank(payload.name):
        raise InputError("Company name is required")
    if _name_taken(db, user, payload.name):
        raise ConflictError(DUPLICATE_NAME_MESSAGE)

    now = utcnow()
    company = Company(
        user_id=user.id,
        **payload.model_dump(),
        created_at=now,
        updated_at=now,
    )
    db.add(company)
    commit_or_conflict(db, DUPLICATE_NAME_MESSAGE)
    db.refresh(company)

    logger.info(f"Created company {company.id} ('{company.name}') for user {user.id}.")
    return to_company_response(company, 0)


def update_company(db: Session, company_id: int, user: User, payload: CompanyUpdate) -> None:
    company = _get_owned_company(db, company_id, user)
    changes = payload.model_dump(exclude_unset=True)

    if "name" in changes:
        new_name = changes.pop("name")
        if is_blank(new_name):
            raise InputError("Company name cannot be empty")
        if new_name != company.name and _name_taken(db, user, new_name, exclude_id=company.id):
            raise ConflictError(DUPLICATE_NAME_MESSAGE)
        company.name = new_name

    for key, value in changes.items():
        setattr(company, key, value)

    company.updated_at = utcnow()
    commit_or_conflict(db, DUPLICATE_NAME_MESSAGE)


def delete_company(db: Session, company_id: int, user: User) -> None:
    """Deletes a company and its contacts, unless applications still reference it."""
    company = _get_owned_company(db, company_id, user)
    if _application_count(db, company.id) > 0:
        raise ConflictError("Cannot delete company with associated job applications")

    db.delete(company)
    db.commit()
    logger.info(f"Deleted company {company_id} for user {user.id}.")


# --- Contacts ---

def list_contacts(db: Session, company_id: int, user: User) -> list[CompanyContact]:
    company = _get_owned_company(db, company_id, user)
    return (
        db.query(CompanyContact)
        .filter(CompanyContact.company_id == company.id)
        .order_by(CompanyContact.name.asc())
        .all()
    )


def create_contact(
    db: Session, company_id: int, user: User, payload: CompanyContactCreate
) -> CompanyContactResponse:
    company = _get_owned_company(db, company_id, user)
    if is_blank(payload.name):
        raise InputError("Contact name is required")

    contact = CompanyContact(company_id=company.id, **payload.model_dump(), created_at=utcnow())
    db.add(contact)
    db.commit()
    db.refresh(contact)
    return CompanyContactResponse.model_validate(contact)


def get_contact(db: Session, company_id: int, contact_id: int, user: User) -> CompanyContact:
    company = _get_owned_company(db, company_id, user)
    contact = db.query(CompanyContact).filter(
        CompanyContact.id == contact_id,
        CompanyContact.company_id == company.id,
    ).first()
    if contact is None:
        raise NotFoundError("Company contact not found")
    return contact


def delete_contact(db: Session, company_id: int, contact_id: int, user: User) -> None:
    contact = get_contact(db, company_id, contact_id, user)

    db.delete(contact)
    db.commit()
