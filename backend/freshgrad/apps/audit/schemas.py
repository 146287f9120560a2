from __future__ import annotations

from datetime import datetime
from typing import Any, Dict

from pydantic import Field

from freshgrad.schemas import CamelModel


class AuditEventCreate(CamelModel):
    event_type: str = Field(min_length=1, max_length=100)
    payload: Dict[str, Any] = Field(default_factory=dict)


class AuditEventRead(CamelModel):
    id: str
    event_type: str
    payload: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
