# job-tracker-backend\src\job_tracker\services\crud_resumes.py

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from job_tracker.core.exceptions import ConflictError, InputError, NotFoundError
from job_tracker.core.list_codec import any_item_contains, decode_list, encode_list
from job_tracker.db.models import JobApplication, Resume, ResumeVersion, User, utcnow
from job_tracker.schemas.resume import ResumeResponse, ResumeUpdate
from job_tracker.services.common import commit_or_conflict, is_blank, paginate
from job_tracker.storage import local_files

logger = logging.getLogger(__name__)

DEFAULT_CONFLICT_MESSAGE = "Another resume was marked as default at the same time; please retry"


@dataclass(frozen=True)
class FileDownload:
    content: bytes
    content_type: str
    filename: str


def _usage_count(db: Session, resume_id: int) -> int:
    return db.query(func.count(JobApplication.id)).filter(JobApplication.resume_id == resume_id).scalar()


def to_resume_response(resume: Resume, usage_count: int) -> ResumeResponse:
    return ResumeResponse(
        id=resume.id,
        title=resume.title,
        description=resume.description,
        file_path=resume.file_path,
        file_type=resume.file_type,
        file_size_bytes=resume.file_size_bytes,
        tags=decode_list(resume.tags),
        is_default=resume.is_default,
        created_at=resume.created_at,
        updated_at=resume.updated_at,
        usage_count=usage_count,
    )


def _clear_default(db: Session, user: User, keep_id: Optional[int] = None) -> None:
    query = db.query(Resume).filter(Resume.user_id == user.id, Resume.is_default.is_(True))
    if keep_id is not None:
        query = query.filter(Resume.id != keep_id)
    query.update({Resume.is_default: False}, synchronize_session="fetch")


def _ids_with_matching_tag(db: Session, user: User, search: str) -> list[int]:
    # Matched on decoded tags so the JSON quoting and separators never match
    rows = db.query(Resume.id, Resume.tags).filter(Resume.user_id == user.id, Resume.tags.isnot(None)).all()
    return [resume_id for resume_id, raw_tags in rows if any_item_contains(raw_tags, search)]


# --- Reusable Getters with Permission Checks ---

def get_resume_by_id(db: Session, resume_id: int, user: User) -> Optional[Resume]:
    """Fetches a resume by its ID, ensuring it belongs to the specified user."""
    return db.query(Resume).filter(
        Resume.id == resume_id,
        Resume.user_id == user.id
    ).first()


def get_owned_resume(db: Session, resume_id: int, user: User) -> Resume:
    resume = get_resume_by_id(db, resume_id, user)
    if resume is None:
        logger.warning(f"Resume {resume_id} not found for user {user.id}.")
        raise NotFoundError("Resume not found")
    return resume


# --- CRUD ---

def list_resumes(
    db: Session, user: User, search: Optional[str], page: int, page_size: int
) -> Tuple[list[ResumeResponse], int]:
    """Lists the user's resumes, the default first and then most recently updated."""
    counts = (
        db.query(JobApplication.resume_id, func.count(JobApplication.id).label("n"))
        .filter(JobApplication.resume_id.isnot(None))
        .group_by(JobApplication.resume_id)
        .subquery()
    )
    query = (
        db.query(Resume, func.coalesce(counts.c.n, 0))
        .outerjoin(counts, counts.c.resume_id == Resume.id)
        .filter(Resume.user_id == user.id)
    )
    if not is_blank(search):
        query = query.filter(or_(
            Resume.title.icontains(search, autoescape=True),
            Resume.description.icontains(search, autoescape=True),
            Resume.id.in_(_ids_with_matching_tag(db, user, search)),
        ))

    ordered = query.order_by(Resume.is_default.desc(), Resume.updated_at.desc(), Resume.id.desc())
    rows, total = paginate(ordered, page, page_size)
    return [to_resume_response(resume, count) for resume, count in rows], total


def get_resume(db: Session, resume_id: int, user: User) -> ResumeResponse:
    resume = get_owned_resume(db, resume_id, user)
    return to_resume_response(resume, _usage_count(db, resume.id))


async def create_resume(
    db: Session,
    user: User,
    title: str,
    description: Optional[str],
    tags: list[str],
    is_default: bool,
    content: bytes,
    filename: Optional[str],
) -> ResumeResponse:
    """
    Stores the uploaded file and creates the resume record.

    When ``is_default`` is set, every other default of the user is cleared in
    the same transaction as the insert.
    """
    if is_blank(title):
        raise InputError("Resume title is required")
    if len(title) > 200:
        raise InputError("Resume title cannot exceed 200 characters")
    if description is not None and len(description) > 500:
        raise InputError("Resume description cannot exceed 500 characters")

    stored = await local_files.store_file(user.id, local_files.RESUME_CATEGORY, content, filename)

    now = utcnow()
    resume = Resume(
        user_id=user.id,
        title=title,
        description=description,
        file_path=stored.path,
        file_type=stored.file_type,
        file_size_bytes=stored.size,
        tags=encode_list(tags),
        is_default=is_default,
        created_at=now,
        updated_at=now,
    )
    try:
        if is_default:
            _clear_default(db, user)
        db.add(resume)
        commit_or_conflict(db, DEFAULT_CONFLICT_MESSAGE)
    except ConflictError:
        local_files.delete_file(stored.path)
        raise
    db.refresh(resume)

    logger.info(f"Created resume {resume.id} ('{resume.title}', {resume.file_type}) for user {user.id}.")
    return to_resume_response(resume, 0)


def update_resume(db: Session, resume_id: int, user: User, payload: ResumeUpdate) -> None:
    """Updates resume metadata; the stored file is never replaced."""
    resume = get_owned_resume(db, resume_id, user)
    changes = payload.model_dump(exclude_unset=True)

    if "title" in changes:
        title = changes.pop("title")
        if is_blank(title):
            raise InputError("Resume title cannot be empty")
        resume.title = title

    if "tags" in changes:
        resume.tags = encode_list(changes.pop("tags"))

    if "is_default" in changes:
        is_default = bool(changes.pop("is_default"))
        if is_default and not resume.is_default:
            _clear_default(db, user, keep_id=resume.id)
        resume.is_default = is_default

    for key, value in changes.items():
        setattr(resume, key, value)

    resume.updated_at = utcnow()
    commit_or_conflict(db, DEFAULT_CONFLICT_MESSAGE)


def delete_resume(db: Session, resume_id: int, user: User) -> None:
    """Deletes a resume, its versions and their files, unless applications still use it."""
    resume = get_owned_resume(db, resume_id, user)
    if _usage_count(db, resume.id) > 0:
        raise ConflictError("Cannot delete resume that is being used by job applications")

    paths = [resume.file_path] + [version.file_path for version in resume.versions]

    db.delete(resume)
    db.commit()
    logger.info(f"Deleted resume {resume_id} with {len(paths) - 1} version(s) for user {user.id}.")

    for path in paths:
        local_files.delete_file(path)


async def download_resume(db: Session, resume_id: int, user: User) -> FileDownload:
    resume = get_owned_resume(db, resume_id, user)
    content = await local_files.read_file(resume.file_path)
    return FileDownload(
        content=content,
        content_type=local_files.content_type_for(resume.file_type),
        filename=f"{resume.title}.{resume.file_type.lower()}",
    )


# --- Versions ---

def list_versions(db: Session, resume_id: int, user: User) -> list[ResumeVersion]:
    resume = get_owned_resume(db, resume_id, user)
    return (
        db.query(ResumeVersion)
        .filter(ResumeVersion.resume_id == resume.id)
        .order_by(ResumeVersion.created_at.desc(), ResumeVersion.id.desc())
        .all()
    )


async def create_version(
    db: Session,
    resume_id: int,
    user: User,
    version_name: str,
    changes: Optional[str],
    job_description: Optional[str],
    ai_prompt: Optional[str],
    content: bytes,
    filename: Optional[str],
) -> ResumeVersion:
    """Stores a new version file, which must have the parent resume's file type."""
    resume = get_owned_resume(db, resume_id, user)
    if is_blank(version_name):
        raise InputError("Version name is required")
    if len(version_name) > 100:
        raise InputError("Version name cannot exceed 100 characters")

    stored = await local_files.store_file(
        user.id, local_files.RESUME_VERSION_CATEGORY, content, filename,
        expected_type=resume.file_type,
    )

    version = ResumeVersion(
        resume_id=resume.id,
        version_name=version_name,
        file_path=stored.path,
        changes=changes,
        job_description=job_description,
        ai_prompt=ai_prompt,
        created_at=utcnow(),
    )
    db.add(version)
    resume.updated_at = utcnow()
    db.commit()
    db.refresh(version)

    logger.info(f"Created version {version.id} ('{version_name}') of resume {resume.id} for user {user.id}.")
    return version


async def download_version(db: Session, resume_id: int, version_id: int, user: User) -> FileDownload:
    resume = get_owned_resume(db, resume_id, user)
    version = db.query(ResumeVersion).filter(
        ResumeVersion.id == version_id,
        ResumeVersion.resume_id == resume.id,
    ).first()
    if version is None:
        raise NotFoundError("Resume version not found")

    content = await local_files.read_file(version.file_path)
    return FileDownload(
        content=content,
        content_type=local_files.content_type_for(resume.file_type),
        filename=f"{resume.title}_{version.version_name}.{resume.file_type.lower()}",
    )
