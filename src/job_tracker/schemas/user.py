# job-tracker-backend\src\job_tracker\schemas\user.py

from pydantic import BaseModel, EmailStr, ConfigDict, Field, field_validator
from datetime import datetime

from job_tracker.core.list_codec import decode_list

# Base schema for user, reusable
class UserBase(BaseModel):
    email: EmailStr # Pydantic validates this as an email format


# Schema for registering a user
class UserCreate(UserBase):
    password: str = Field(min_length=6, max_length=72)
    first_name: str | None = None
    last_name: str | None = None


# Schema for returning user data (excluding password_hash)
class UserResponse(UserBase):
    id: int
    first_name: str | None = None
    last_name: str | None = None
    is_active: bool
    roles: list[str] = []
    created_at: datetime | None = None
    last_login_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("roles", mode="before")
    @classmethod
    def decode_roles(cls, value):
        # The ORM column holds the encoded text
        if value is None or isinstance(value, str):
            return decode_list(value)
        return value


# Schema for authentication responses (register and login)
class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
