# job-tracker-backend\src\job_tracker\api\v1\auth.py

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm # Required for login form data
from sqlalchemy.orm import Session

from job_tracker.core.config import settings
from job_tracker.core.list_codec import decode_list, encode_list
from job_tracker.db.database import get_db
from job_tracker.db.models import User, utcnow
from job_tracker.schemas.user import UserCreate, UserResponse, Token
from job_tracker.security.auth import create_access_token
from job_tracker.security.dependencies import get_current_user
from job_tracker.security.passwords import hash_password, verify_password

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
)


def _issue_token(user: User) -> Token:
    access_token = create_access_token(
        user_id=user.id,
        email=user.email,
        roles=decode_list(user.roles),
    )
    return Token(access_token=access_token, token_type="bearer")


# Endpoint for user registration
@router.post(
    "/register",
    response_model=Token,
    status_code=status.HTTP_201_CREATED
)
def register_user(
    user: UserCreate, # Pydantic model for request body validation
    db: Session = Depends(get_db)
):
    """
    Register a new user and log them in.
    Checks if email exists, hashes password, and saves user to the database.
    """
    db_user = db.query(User).filter(User.email == user.email).first()
    if db_user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    try:
        hashed_password = hash_password(user.password)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    new_user = User(
        email=user.email,
        password_hash=hashed_password,
        first_name=user.first_name,
        last_name=user.last_name,
        is_active=True,
        roles=encode_list([settings.DEFAULT_USER_ROLE]),
        created_at=utcnow(),
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user) # Load the generated ID

    logger.info(f"Registered user {new_user.id} ({new_user.email}).")
    return _issue_token(new_user)


# Uses OAuth2PasswordRequestForm to expect 'username' and 'password' form data
@router.post(
    "/login",
    response_model=Token
)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    """
    Authenticate a user and return an access token.
    Expects 'username' (email) and 'password' in form data.
    """
    user = db.query(User).filter(User.email == form_data.username).first()

    if not user or not verify_password(form_data.password, user.password_hash):
        logger.info(f"Failed login attempt for '{form_data.username}'.")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"}, # Standard header for OAuth2 challenges
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account is deactivated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user.last_login_at = utcnow()
    db.commit()

    return _issue_token(user)


# Requires a valid JWT access token in the Authorization header
@router.get(
    "/me",
    response_model=UserResponse
)
def read_users_me(
    current_user: User = Depends(get_current_user)
):
    """Retrieve information about the current authenticated user."""
    return current_user
