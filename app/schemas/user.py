"""
Pydantic schemas for user registration, updates and authentication.
"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional

from app.schemas.common import CamelModel


class UserRegisterRequest(CamelModel):
    """Request schema for self-registration (never creates an admin)."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(
        ...,
        min_length=5,
        max_length=72,  # bcrypt limit
    )
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    email: EmailStr


class UserCreateRequest(UserRegisterRequest):
    """Request schema for admins adding a user; may create another admin."""
    is_admin: bool = False


class UserUpdateRequest(CamelModel):
    """Partial update of a user. username cannot be changed."""
    first_name: Optional[str] = Field(None, min_length=1, max_length=30)
    last_name: Optional[str] = Field(None, min_length=1, max_length=30)
    password: Optional[str] = Field(None, min_length=5, max_length=72)
    email: Optional[EmailStr] = None
    is_admin: Optional[bool] = None


class TokenRequest(BaseModel):
    """Request schema for exchanging credentials for a token."""
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """JWT token response."""
    token: str
