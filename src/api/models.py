"""Pydantic models for API request/response."""

from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from domain.model.errors import InvalidBirthdayError
from domain.model.user import UserProfile


class RegisterRequest(BaseModel):
    """Request model for user registration."""
    email: EmailStr
    password: str = Field(..., min_length=1)
    firstname: str = Field(..., min_length=1)
    lastname: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    birthday: str = Field(..., min_length=1, description="YYYY-MM-DD")


class LoginRequest(BaseModel):
    """Request model for user login."""
    email: EmailStr
    password: str = Field(..., min_length=1)


class UpdateUserRequest(BaseModel):
    """Request model for partial profile update. Omitted or empty fields are left unchanged."""
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    phone: Optional[str] = None
    birthday: Optional[str] = Field(None, description="YYYY-MM-DD")


class UserResponse(BaseModel):
    """User data returned to the client. Never carries the password hash."""
    id: int
    email: str
    firstname: str
    lastname: str
    phone: str
    birthday: Optional[date] = None
    created_at: datetime
    updated_at: datetime


class LoginResponse(BaseModel):
    token: str
    user: UserResponse


class APIResponse(BaseModel):
    message: str
    data: Optional[UserResponse] = None


class ErrorResponse(BaseModel):
    error: str
    code: Optional[str] = None


def parse_birthday(value: str | None) -> date | None:
    """Parse a YYYY-MM-DD string. Empty means "not given"."""
    if not value:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise InvalidBirthdayError() from None


def to_user_response(profile: UserProfile) -> UserResponse:
    """Convert domain UserProfile to API UserResponse."""
    return UserResponse(
        id=profile.id,
        email=profile.email,
        firstname=profile.first_name,
        lastname=profile.last_name,
        phone=profile.phone,
        birthday=profile.birthday,
        created_at=profile.created_at,
        updated_at=profile.updated_at,
    )
