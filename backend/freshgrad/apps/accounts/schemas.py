# backend/freshgrad/apps/accounts/schemas.py

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import EmailStr, Field, field_validator

from freshgrad.schemas import CamelModel
from .models import UserRole


# ---------------------------------------------------------------------------
# AUTH
# ---------------------------------------------------------------------------


class LoginRequest(CamelModel):
    # Plain str: a malformed email must fail as bad credentials (401), not 422.
    email: str
    password: str


class RegisterRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)
    name: str = Field(min_length=1)
    role: Optional[UserRole] = None


# ---------------------------------------------------------------------------
# USERS
# ---------------------------------------------------------------------------


class UserRead(CamelModel):
    """Public profile; never carries the password hash."""

    email: str
    name: str
    role: UserRole
    verified: bool = False
    applicant_status: str = "None"
    docs: Dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[datetime] = None

    @field_validator("docs", mode="before")
    @classmethod
    def _docs_default(cls, value):
        return value or {}


class LoginResponse(UserRead):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class UserUpdate(CamelModel):
    """
    Partial update. Only keys present in the body are applied; see
    services.update_user for how explicit nulls are handled.
    """

    name: Optional[str] = None
    role: Optional[UserRole] = None
    password: Optional[str] = None
    verified: Optional[bool] = None
    applicant_status: Optional[str] = None
    docs: Optional[Dict[str, Any]] = None
