# backend/freshgrad/apps/mentors/schemas.py

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from freshgrad.schemas import CamelModel


class MentorBase(CamelModel):
    name: str = Field(min_length=1)
    email: Optional[str] = None
    contact: Optional[str] = None
    subject: Optional[str] = None
    school: Optional[str] = None
    emirate: Optional[str] = None


class MentorCreate(MentorBase):
    pass


class MentorUpdate(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    contact: Optional[str] = None
    subject: Optional[str] = None
    school: Optional[str] = None
    emirate: Optional[str] = None


class MentorRead(MentorBase):
    id: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class MentorSummary(CamelModel):
    id: str
    name: str
    email: Optional[str] = None
    subject: Optional[str] = None
    school: Optional[str] = None
    emirate: Optional[str] = None
    active_internships: int = 0
