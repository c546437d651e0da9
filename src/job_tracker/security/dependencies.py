# job-tracker-backend\src\job_tracker\security\dependencies.py

import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer # For Bearer token scheme
from sqlalchemy.orm import Session

from job_tracker.db.database import get_db
from job_tracker.db.models import User
from job_tracker.security.auth import verify_token

logger = logging.getLogger(__name__)

# tokenUrl tells the client (like Swagger UI) where to get a token
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")


def get_current_user(
    token: str = Depends(oauth2_scheme), # Reads the Authorization: Bearer header
    db: Session = Depends(get_db)
) -> User:
    """Retrieves the current user based on the JWT token."""

    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"}, # Standard header for OAuth2 challenges
    )

    payload = verify_token(token)
    if payload is None:
        raise credentials_exception

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise credentials_exception

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        # Token was valid but the user no longer exists
        raise credentials_exception
    if not user.is_active:
        logger.warning(f"Rejected token for deactivated user {user.id}.")
        raise credentials_exception

    return user
