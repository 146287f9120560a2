# backend/freshgrad/apps/candidates/models.py

from __future__ import annotations

import enum
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    JSON,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from freshgrad.database import Base
from freshgrad.utils.identifiers import id_factory


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


# ---------------------------------------------------------------------------
# ENUMS
# ---------------------------------------------------------------------------


class CandidateStatus(str, enum.Enum):
    IMPORTED = "Imported"
    ELIGIBLE = "Eligible"
    ASSIGNED = "Assigned"
    IN_TRAINING = "In Training"
    COURSES_COMPLETED = "Courses Completed"
    ASSESSED = "Assessed"
    GRADUATED = "Graduated"
    READY_FOR_HIRING = "Ready for Hiring"
    HIRED_CLOSED = "Hired/Closed"
    ON_HOLD = "On Hold"
    WITHDRAWN = "Withdrawn"
    REJECTED = "Rejected"


class TrackId(str, enum.Enum):
    T1 = "t1"
    T2 = "t2"
    T3 = "t3"


class Sponsor(str, enum.Enum):
    MOE = "MOE"
    MAWAHEB = "Mawaheb"
    MBZUH = "MBZUH"


class EnrollmentStatus(str, enum.Enum):
    ENROLLED = "Enrolled"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    WITHDRAWN = "Withdrawn"


class RequirementLevel(str, enum.Enum):
    REQUIRED = "Required"
    OPTIONAL = "Optional"


class PassState(str, enum.Enum):
    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    PASSED = "Passed"
    FAILED = "Failed"


# ---------------------------------------------------------------------------
# CANDIDATE
# ---------------------------------------------------------------------------


class Candidate(Base):
    """
    A teacher-in-training moving through the FreshGrad lifecycle.

    Enrollments, course results and notes are owned rows: they are removed
    with the candidate both by the ORM cascade and by ON DELETE CASCADE.
    `extensions` holds imported attributes that have no fixed column.
    """

    __tablename__ = "candidates"
    __table_args__ = (
        Index("ix_candidates_status_created", "status", "created_at"),
    )

    id = Column(String(64), primary_key=True, default=id_factory("C"))

    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    mobile = Column(String(50), nullable=True)
    national_id = Column(String(50), nullable=True)
    emirate = Column(String(100), nullable=True, index=True)
    subject = Column(String(100), nullable=True, index=True)
    gpa = Column(Float, nullable=True, default=0)

    track_id = Column(
        Enum(TrackId, name="track_id_enum", native_enum=False, values_callable=_enum_values),
        nullable=False,
        default=TrackId.T1,
        index=True,
    )
    status = Column(
        Enum(
            CandidateStatus,
            name="candidate_status_enum",
            native_enum=False,
            length=50,
            values_callable=_enum_values,
        ),
        nullable=False,
        default=CandidateStatus.IMPORTED,
        index=True,
    )
    sponsor = Column(
        Enum(Sponsor, name="sponsor_enum", native_enum=False, values_callable=_enum_values),
        nullable=True,
        index=True,
    )

    extensions = Column(JSON, nullable=False, default=dict)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    enrollments = relationship(
        "CandidateEnrollment",
        back_populates="candidate",
        cascade="all, delete-orphan",
        order_by="CandidateEnrollment.position",
    )
    course_results = relationship(
        "CandidateCourseResult",
        back_populates="candidate",
        cascade="all, delete-orphan",
        order_by="CandidateCourseResult.position",
    )
    notes_thread = relationship(
        "CandidateNote",
        back_populates="candidate",
        cascade="all, delete-orphan",
        order_by="CandidateNote.position",
    )

    def __repr__(self) -> str:
        return f"<Candidate id={self.id} status={self.status}>"


class CandidateEnrollment(Base):
    """
    A course assignment. Courses are referenced by code only, so a course
    that is later deactivated still resolves for historical enrollments.
    Mentor details are snapshotted alongside the optional mentor FK.
    """

    __tablename__ = "candidate_enrollments"

    id = Column(String(64), primary_key=True, default=id_factory("ENR"))
    candidate_id = Column(
        String(64),
        ForeignKey("candidates.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position = Column(Integer, nullable=False, default=0)

    course_code = Column(String(50), nullable=False, index=True)
    title = Column(String(255), nullable=True)
    cohort = Column(String(100), nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    status = Column(
        Enum(
            EnrollmentStatus,
            name="enrollment_status_enum",
            native_enum=False,
            values_callable=_enum_values,
        ),
        nullable=False,
        default=EnrollmentStatus.ENROLLED,
        index=True,
    )
    assigned_by = Column(String(255), nullable=True)
    assigned_ts = Column(DateTime(timezone=True), nullable=True, default=_utcnow)
    is_internship = Column(Boolean, nullable=False, default=False, index=True)
    required = Column(
        Enum(
            RequirementLevel,
            name="requirement_level_enum",
            native_enum=False,
            values_callable=_enum_values,
        ),
        nullable=False,
        default=RequirementLevel.OPTIONAL,
    )
    type = Column(String(50), nullable=True)

    # Internship-specific fields
    mentor_id = Column(
        String(64),
        ForeignKey("mentors.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    mentor_name = Column(String(255), nullable=True)
    mentor_email = Column(String(255), nullable=True)
    mentor_contact = Column(String(50), nullable=True)
    school_name = Column(String(255), nullable=True)
    school_emirate = Column(String(100), nullable=True)
    pass_state = Column(
        Enum(PassState, name="pass_state_enum", native_enum=False, values_callable=_enum_values),
        nullable=False,
        default=PassState.NOT_STARTED,
    )

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    candidate = relationship("Candidate", back_populates="enrollments")


class CandidateCourseResult(Base):
    __tablename__ = "candidate_course_results"

    id = Column(String(64), primary_key=True, default=id_factory("RES"))
    candidate_id = Column(
        String(64),
        ForeignKey("candidates.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position = Column(Integer, nullable=False, default=0)

    course_code = Column(String(50), nullable=False, index=True)
    title = Column(String(255), nullable=True)
    score = Column(Float, nullable=True)
    passed = Column("pass", Boolean, nullable=False, default=False)
    result_date = Column(Date, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    candidate = relationship("Candidate", back_populates="course_results")


class CandidateNote(Base):
    __tablename__ = "candidate_notes"

    id = Column(String(64), primary_key=True, default=id_factory("N"))
    candidate_id = Column(
        String(64),
        ForeignKey("candidates.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position = Column(Integer, nullable=False, default=0)

    text = Column(Text, nullable=False)
    author = Column("by_user", String(255), nullable=False)
    role = Column("by_role", String(50), nullable=False)
    timestamp = Column("created_at", DateTime(timezone=True), nullable=False, default=_utcnow)

    candidate = relationship("Candidate", back_populates="notes_thread")
