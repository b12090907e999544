"""
Pydantic models for user data.

Defines schemas for signing up, signing in and reading user
information.  Sign‑in is an email lookup only; ``password`` is
accepted so existing clients keep working but it is never checked.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import CamelModel

DEFAULT_ROLE = "user"


class UserCreate(CamelModel):
    """Schema for registering a user."""

    email: str = Field(..., min_length=1, examples=["medic@example.com"])
    name: str = Field(..., min_length=1, examples=["Alex Paramedic"])
    license_number: Optional[str] = Field(None, examples=["PCP-12345"])
    role: Optional[str] = Field(None, description="Defaults to 'user' when omitted")


class UserRead(CamelModel):
    """Full user record as held by the record store."""

    id: int
    email: str
    name: str
    license_number: Optional[str] = None
    role: str = DEFAULT_ROLE
    created_at: datetime


class UserSummary(CamelModel):
    """Subset of the user record returned by the auth endpoints."""

    id: int
    email: str
    name: str
    role: str


class SignInRequest(CamelModel):
    email: str = Field(..., min_length=1)
    password: Optional[str] = None


class AuthResponse(CamelModel):
    user: UserSummary
