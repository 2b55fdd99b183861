"""
Account schemas - registration, activation, login, password change
"""

import re
import uuid
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

_USERNAME_RE = re.compile(r"^\w+(?:[.-]\w+)*$")


class RegisterRequest(BaseModel):
    """Registration request."""

    username: str = Field(min_length=1, max_length=50)
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=8, max_length=128)
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    role: Literal["STUDENT_ROLE", "TEACHER_ROLE"] = Field(default="STUDENT_ROLE")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v):
        if not _USERNAME_RE.match(v):
            raise ValueError("Username must be word characters joined by single '.' or '-'")
        return v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        if "@" not in v:
            raise ValueError("Not a valid e-mail address")
        return v.strip().lower()


class LoginRequest(BaseModel):
    """Login request."""

    username: str
    password: str


class TokenResponse(BaseModel):
    """Access token response."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(description="Token lifetime in seconds")


class PasswordChangeRequest(BaseModel):
    """Password change request."""

    current_password: str
    new_password: str = Field(min_length=8, max_length=128)


class UserResponse(BaseModel):
    """User account as returned by the API."""

    id: uuid.UUID
    username: str
    display_name: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    enabled: bool
    roles: List[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
