"""
Authentication schemas.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from gadgetops.kernel.models.user import UserRole
from gadgetops.schemas.common import CamelModel


class SignupRequest(BaseModel):
    """User registration request."""

    username: str = Field(..., min_length=1, max_length=150)
    password: str = Field(..., min_length=1, max_length=128)
    # Plain string so an unknown role is reported as invalid_role, not a 422
    role: Optional[str] = Field(None, description="BASIC or ADMIN")


class SigninRequest(BaseModel):
    """User login request."""

    username: str
    password: str


class UserResponse(CamelModel):
    """Public user profile. Never includes the password hash."""

    id: uuid.UUID
    username: str
    role: UserRole
    created_at: datetime


class SignupResponse(BaseModel):
    message: str = "User registered successfully!"
    user: UserResponse


class SigninResponse(BaseModel):
    message: str = "Login successful"
    token: str
