import asyncio
from pathlib import Path

import pytest

from job_tracker.core.exceptions import InputError, NotFoundError
from job_tracker.storage import local_files


def test_normalize_file_type_uses_last_extension() -> None:
    assert local_files.normalize_file_type("CV.Final.PDF") == "PDF"
    assert local_files.normalize_file_type("notes") == ""


def test_content_type_for_known_and_unknown_types() -> None:
    assert local_files.content_type_for("PDF") == "application/pdf"
    assert local_files.content_type_for("md") == "text/markdown"
    assert local_files.content_type_for("TXT") == "application/octet-stream"


@pytest.mark.parametrize(
    "content, filename, message",
    [
        (b"", "cv.pdf", "File is required"),
        (b"data", "cv.exe", "Only PDF, DOCX, MD files are allowed"),
        (b"x" * (10 * 1024 * 1024 + 1), "cv.pdf", "File size cannot exceed 10MB"),
    ],
)
def test_validate_upload_rejects_bad_files(content, filename, message) -> None:
    with pytest.raises(InputError) as exc_info:
        local_files.validate_upload(content, filename)
    assert exc_info.value.message == message


def test_validate_upload_requires_an_extension() -> None:
    with pytest.raises(InputError) as exc_info:
        local_files.validate_upload(b"data", "resume")
    assert exc_info.value.message == "Only PDF, DOCX, MD files are allowed"
    assert local_files.validate_upload(b"data", "CV.Final.Pdf") == "PDF"


def test_validate_upload_enforces_expected_type() -> None:
    with pytest.raises(InputError) as exc_info:
        local_files.validate_upload(b"# cv", "cv.md", expected_type="PDF")
    assert exc_info.value.message == "File type must match original resume type (PDF)"


def test_store_ignores_client_filename_and_reads_back() -> None:
    stored = asyncio.run(
        local_files.store_file(7, local_files.RESUME_CATEGORY, b"%PDF-1.4", "../../etc/passwd.pdf")
    )
    path = Path(stored.path)
    assert stored.file_type == "PDF"
    assert stored.size == 8
    assert path.parent.name == "7"
    assert path.parent.parent.name == local_files.RESUME_CATEGORY
    assert "passwd" not in path.name
    assert asyncio.run(local_files.read_file(stored.path)) == b"%PDF-1.4"

    local_files.delete_file(stored.path)
    local_files.delete_file(stored.path) # already gone
    with pytest.raises(NotFoundError):
        asyncio.run(local_files.read_file(stored.path))
