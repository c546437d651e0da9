# job-tracker-backend\src\job_tracker\security\auth.py

import uuid
from datetime import datetime, timedelta, timezone
from typing import Iterable

from jose import jwt, JWTError

from job_tracker.core.config import settings


def create_access_token(
    user_id: int,
    email: str,
    roles: Iterable[str] = (),
    expires_delta: timedelta | None = None,
) -> str:
    """Creates a signed JWT carrying the user's id, email and roles."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    expire = datetime.now(timezone.utc) + expires_delta

    # 'sub' is the user id; 'jti' makes every issued token distinct
    to_encode = {
        "sub": str(user_id),
        "email": email,
        "roles": list(roles),
        "exp": expire,
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY_FOR_AUTH, algorithm=settings.ALGORITHM)


def verify_token(token: str) -> dict | None:
    """Verifies a JWT token and returns its payload, or None if invalid/expired."""
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY_FOR_AUTH,
            algorithms=[settings.ALGORITHM]
        )
    except JWTError:
        # Invalid signature, expired token, malformed input
        return None

    if not payload.get("sub"):
        return None
    return payload
