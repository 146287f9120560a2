# backend/freshgrad/apps/candidates/schemas.py

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import ConfigDict, Field, field_validator

from freshgrad.schemas import CamelModel, coerce_number
from .models import (
    CandidateStatus,
    EnrollmentStatus,
    PassState,
    RequirementLevel,
    Sponsor,
    TrackId,
)


# ---------------------------------------------------------------------------
# CHILD COLLECTIONS
# ---------------------------------------------------------------------------


class EnrollmentBase(CamelModel):
    course_code: str = Field(min_length=1)
    title: Optional[str] = None
    cohort: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: EnrollmentStatus = EnrollmentStatus.ENROLLED
    assigned_by: Optional[str] = None
    assigned_ts: Optional[datetime] = None
    is_internship: bool = False
    required: RequirementLevel = RequirementLevel.OPTIONAL
    type: Optional[str] = None

    mentor_id: Optional[str] = None
    mentor_name: Optional[str] = None
    mentor_email: Optional[str] = None
    mentor_contact: Optional[str] = None
    school_name: Optional[str] = None
    school_emirate: Optional[str] = None
    pass_state: PassState = PassState.NOT_STARTED


class EnrollmentIn(EnrollmentBase):
    pass


class EnrollmentOut(EnrollmentBase):
    id: str


class CourseResultBase(CamelModel):
    course_code: str = Field(min_length=1)
    title: Optional[str] = None
    score: Optional[float] = None
    # "pass" on the wire; Python keyword, so the attribute is `passed`.
    passed: bool = Field(default=False, alias="pass")
    result_date: Optional[date] = None


class CourseResultIn(CourseResultBase):
    pass


class CourseResultOut(CourseResultBase):
    id: str

    @field_validator("score", mode="before")
    @classmethod
    def _score_number(cls, value):
        return coerce_number(value)


class NoteIn(CamelModel):
    text: str = Field(min_length=1)
    author: str = Field(min_length=1)
    role: str = Field(min_length=1)
    timestamp: Optional[datetime] = None


class NoteOut(CamelModel):
    text: str
    author: str
    role: str
    timestamp: datetime


class NoteCreate(CamelModel):
    text: str = Field(min_length=1)
    author: str = Field(min_length=1)
    role: str = Field(min_length=1)


# ---------------------------------------------------------------------------
# CANDIDATE
# ---------------------------------------------------------------------------


class CandidateCreate(CamelModel):
    """
    Import / create payload.

    Keys that are not candidate fields are kept, not rejected: they end up in
    the `extensions` map together with anything sent under `extensions`.
    """

    model_config = ConfigDict(extra="allow")

    name: str = Field(min_length=1)
    email: Optional[str] = None
    mobile: Optional[str] = None
    national_id: Optional[str] = None
    emirate: Optional[str] = None
    subject: Optional[str] = None
    gpa: Optional[float] = None
    track_id: TrackId = TrackId.T1
    status: CandidateStatus = CandidateStatus.IMPORTED
    sponsor: Optional[Sponsor] = None

    enrollments: List[EnrollmentIn] = Field(default_factory=list)
    course_results: List[CourseResultIn] = Field(default_factory=list)
    notes_thread: List[NoteIn] = Field(default_factory=list)

    extensions: Dict[str, Any] = Field(default_factory=dict)


class CandidateUpdate(CamelModel):
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    email: Optional[str] = None
    mobile: Optional[str] = None
    national_id: Optional[str] = None
    emirate: Optional[str] = None
    subject: Optional[str] = None
    gpa: Optional[float] = None
    track_id: Optional[TrackId] = None
    status: Optional[CandidateStatus] = None
    sponsor: Optional[Sponsor] = None

    enrollments: Optional[List[EnrollmentIn]] = None
    course_results: Optional[List[CourseResultIn]] = None
    notes_thread: Optional[List[NoteIn]] = None

    extensions: Optional[Dict[str, Any]] = None


class CandidateRead(CamelModel):
    id: str
    name: str
    email: Optional[str] = None
    mobile: Optional[str] = None
    national_id: Optional[str] = None
    emirate: Optional[str] = None
    subject: Optional[str] = None
    gpa: float = 0
    track_id: TrackId
    status: CandidateStatus
    sponsor: Optional[Sponsor] = None

    enrollments: List[EnrollmentOut] = Field(default_factory=list)
    course_results: List[CourseResultOut] = Field(default_factory=list)
    notes_thread: List[NoteOut] = Field(default_factory=list)

    extensions: Dict[str, Any] = Field(default_factory=dict)

    created_at: datetime
    updated_at: Optional[datetime] = None

    @field_validator("gpa", mode="before")
    @classmethod
    def _gpa_number(cls, value):
        return coerce_number(value)

    @field_validator("extensions", mode="before")
    @classmethod
    def _extensions_default(cls, value):
        return value or {}


class CandidateSummary(CamelModel):
    """One row per candidate for dashboards; no child payloads."""

    id: str
    name: str
    status: CandidateStatus
    stage_index: int
    track_id: TrackId
    track_name: Optional[str] = None
    sponsor: Optional[Sponsor] = None
    enrollment_count: int = 0
    result_count: int = 0
    note_count: int = 0
