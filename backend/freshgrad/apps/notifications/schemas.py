from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import Field, field_validator, model_validator

from freshgrad.schemas import CamelModel


class NotificationCreate(CamelModel):
    to_email: Optional[str] = None
    to_role: Optional[str] = None
    type: str = Field(min_length=1, max_length=100)
    title: str = Field(min_length=1, max_length=255)
    body: Optional[str] = None
    target: Dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _needs_recipient(self):
        if not (self.to_email or "").strip() and not (self.to_role or "").strip():
            raise ValueError("toEmail or toRole is required")
        return self


class NotificationRead(CamelModel):
    id: str
    to_email: Optional[str] = None
    to_role: Optional[str] = None
    type: str
    title: str
    body: Optional[str] = None
    target: Dict[str, Any] = Field(default_factory=dict)
    read: bool = False
    created_at: datetime

    @field_validator("target", mode="before")
    @classmethod
    def _target_default(cls, value):
        return value or {}
