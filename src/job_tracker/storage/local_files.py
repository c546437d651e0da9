# job-tracker-backend\src\job_tracker\storage\local_files.py

"""Filesystem storage for uploaded resume files.

Files live under ``UPLOAD_DIR/<category>/<owner_id>/`` with a random name, and
the database keeps the resulting path. The client's filename only contributes
its extension.
"""

import logging
import os
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import aiofiles

from job_tracker.core.config import settings
from job_tracker.core.exceptions import InputError, NotFoundError

logger = logging.getLogger(__name__)

RESUME_CATEGORY = "resumes"
RESUME_VERSION_CATEGORY = "resume_versions"

CONTENT_TYPES = {
    "pdf": "application/pdf",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "md": "text/markdown",
}


@dataclass(frozen=True)
class StoredFile:
    path: str
    size: int
    file_type: str # normalized, e.g. "PDF"


def normalize_file_type(filename: Optional[str]) -> str:
    """Maps 'CV.Final.PDF' to 'PDF'. Returns '' when there is no extension."""
    extension = os.path.splitext(filename or "")[1].lower()
    return extension[1:].upper()


def content_type_for(file_type: str) -> str:
    return CONTENT_TYPES.get(file_type.lower(), "application/octet-stream")


def validate_upload(
    content: bytes, filename: Optional[str], expected_type: Optional[str] = None
) -> str:
    """Checks extension, emptiness and size; returns the normalized file type."""
    if not content:
        raise InputError("File is required")

    file_type = normalize_file_type(filename)
    allowed = [ext.lstrip(".").upper() for ext in settings.ALLOWED_FILE_EXTENSIONS]
    if file_type not in allowed:
        readable = ", ".join(allowed)
        raise InputError(f"Only {readable} files are allowed")

    if len(content) > settings.MAX_FILE_SIZE:
        limit_mb = settings.MAX_FILE_SIZE // (1024 * 1024)
        raise InputError(f"File size cannot exceed {limit_mb}MB")

    if expected_type is not None and file_type != expected_type.upper():
        raise InputError(f"File type must match original resume type ({expected_type.upper()})")
    return file_type


async def store_file(
    owner_id: int,
    category: str,
    content: bytes,
    filename_hint: Optional[str],
    expected_type: Optional[str] = None,
) -> StoredFile:
    """
    Validates and writes an upload to disk.

    Args:
        owner_id: ID of the user the file belongs to.
        category: Sub-tree to store under, e.g. RESUME_CATEGORY.
        content: Raw bytes of the upload.
        filename_hint: Client-supplied name; only its extension is used.
        expected_type: When set, the upload must have this file type.

    Returns:
        The stored path, size and normalized file type.

    Raises:
        InputError: If the file is empty, too large or of a disallowed type.
    """
    file_type = validate_upload(content, filename_hint, expected_type)

    directory = Path(settings.UPLOAD_DIR) / category / str(owner_id)
    directory.mkdir(parents=True, exist_ok=True)
    target = directory / f"{uuid.uuid4().hex}.{file_type.lower()}"

    async with aiofiles.open(target, "wb") as out:
        await out.write(content)

    logger.info(f"FILE-STORAGE: Wrote {len(content)} bytes to '{target}' for user {owner_id}.")
    return StoredFile(path=str(target), size=len(content), file_type=file_type)


async def read_file(path: str) -> bytes:
    """Reads a stored file. A missing file raises NotFoundError."""
    if not os.path.isfile(path):
        logger.warning(f"FILE-STORAGE: '{path}' is referenced in the database but missing on disk.")
        raise NotFoundError("File not found")

    async with aiofiles.open(path, "rb") as stored:
        return await stored.read()


def delete_file(path: Optional[str]) -> None:
    """Removes a stored file. A file that is already gone is not an error."""
    if not path:
        return
    try:
        os.remove(path)
        logger.info(f"FILE-STORAGE: Deleted '{path}'.")
    except FileNotFoundError:
        logger.debug(f"FILE-STORAGE: '{path}' was already removed.")
    except OSError as e:
        logger.error(f"FILE-STORAGE: Failed to delete '{path}': {e}", exc_info=True)
