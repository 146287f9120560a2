from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from freshgrad.schemas import CamelModel
from .models import CorrectionStatus


class CorrectionCreate(CamelModel):
    candidate_id: str = Field(min_length=1)
    text: str = Field(min_length=1)
    by_user: str = Field(min_length=1)
    by_role: str = Field(min_length=1)
    for_role: str = Field(min_length=1)


class CorrectionResponseIn(CamelModel):
    author: str = Field(min_length=1)
    role: str = Field(min_length=1)
    text: str = Field(min_length=1)


class CorrectionResponseOut(CamelModel):
    author: str
    role: str
    text: str
    timestamp: datetime


class CorrectionReject(CamelModel):
    # Blank reasons are rejected by the service so the message stays uniform.
    reason: Optional[str] = None


class CorrectionRead(CamelModel):
    id: str
    candidate_id: str
    text: str
    by_user: str
    by_role: str
    for_role: str
    status: CorrectionStatus
    reject_reason: Optional[str] = None
    response: Optional[CorrectionResponseOut] = None
    resolved_at: Optional[datetime] = None
    rejected_at: Optional[datetime] = None
    created_at: datetime
