# job-tracker-backend\src\job_tracker\core\exceptions.py

"""Error types raised by the service layer.

Each class carries the HTTP status the API surface answers with, so the
exception handlers in ``main.py`` stay a single mapping.
"""

from fastapi import status


class TrackerError(Exception):
    """Base exception for job tracker errors."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InputError(TrackerError):
    """Raised for missing or malformed input, bad references and rejected files."""
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(TrackerError):
    """Raised when a record is absent or owned by someone else."""
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(TrackerError):
    """Raised for duplicates and for deletes blocked by dependent records."""
    status_code = status.HTTP_409_CONFLICT
