# backend/freshgrad/apps/courses/schemas.py

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from freshgrad.apps.candidates.models import TrackId
from freshgrad.schemas import CamelModel, coerce_number

DEFAULT_WEIGHT = 1.0
DEFAULT_PASS_THRESHOLD = 70


class CourseCreate(CamelModel):
    code: str = Field(min_length=1, max_length=50)
    title: str = Field(min_length=1)
    description: Optional[str] = None
    weight: float = Field(default=DEFAULT_WEIGHT, ge=0)
    pass_threshold: int = Field(default=DEFAULT_PASS_THRESHOLD, ge=0, le=100)
    is_required: bool = False
    tracks: List[TrackId] = Field(default_factory=list)


class CourseUpdate(CamelModel):
    code: Optional[str] = Field(default=None, min_length=1, max_length=50)
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    weight: Optional[float] = Field(default=None, ge=0)
    pass_threshold: Optional[int] = Field(default=None, ge=0, le=100)
    is_required: Optional[bool] = None
    tracks: Optional[List[TrackId]] = None
    active: Optional[bool] = None


class CourseRead(CamelModel):
    id: str
    code: str
    title: str
    description: Optional[str] = None
    weight: float = DEFAULT_WEIGHT
    pass_threshold: int = DEFAULT_PASS_THRESHOLD
    is_required: bool = False
    tracks: List[str] = Field(default_factory=list)
    active: bool = True
    created_at: datetime
    updated_at: Optional[datetime] = None

    @field_validator("weight", mode="before")
    @classmethod
    def _weight_number(cls, value):
        return coerce_number(value, DEFAULT_WEIGHT)

    @field_validator("pass_threshold", mode="before")
    @classmethod
    def _threshold_number(cls, value):
        return int(coerce_number(value, DEFAULT_PASS_THRESHOLD))

    @field_validator("tracks", mode="before")
    @classmethod
    def _tracks_default(cls, value):
        return value or []
