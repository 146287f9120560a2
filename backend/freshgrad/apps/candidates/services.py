# backend/freshgrad/apps/candidates/services.py

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from freshgrad.apps.audit import services as audit_services
from freshgrad.apps.mentors.models import Mentor
from freshgrad.apps.reference import services as reference_services
from freshgrad.errors import NotFoundError, ValidationError
from . import lifecycle, models, schemas

logger = logging.getLogger(__name__)

# Core columns that cannot be cleared with an explicit null on update.
_NON_NULLABLE = {"name", "status", "track_id"}
_COLLECTIONS = {"enrollments", "course_results", "notes_thread"}
# Server-owned fields echoed back by clients that PUT a fetched record.
_READ_ONLY_KEYS = {"id", "createdAt", "created_at", "updatedAt", "updated_at"}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _split_payload(data) -> tuple[Dict[str, Any], Optional[Dict[str, Any]]]:
    """
    Separate core fields that were sent from extension attributes.

    Returns (core_changes, extensions). `extensions` is None when the request
    carried no extension attribute at all.
    """
    declared = set(type(data).model_fields)
    sent = data.model_fields_set & declared
    core = {name: getattr(data, name) for name in sent if name != "extensions"}

    extras = {
        key: value
        for key, value in (data.model_extra or {}).items()
        if key not in _READ_ONLY_KEYS
    }
    if "extensions" not in sent and not extras:
        return core, None

    extensions = dict(getattr(data, "extensions", None) or {})
    extensions.update(extras)
    return core, extensions


# ---------------------------------------------------------------------------
# Child collections
# ---------------------------------------------------------------------------


def _build_enrollments(db: Session, items: Iterable[schemas.EnrollmentIn]) -> List[models.CandidateEnrollment]:
    rows = []
    for position, item in enumerate(items):
        values = item.model_dump()
        if not values.get("assigned_ts"):
            values["assigned_ts"] = _utcnow()

        mentor_id = values.get("mentor_id")
        if mentor_id:
            mentor = db.get(Mentor, mentor_id)
            if mentor is None:
                raise ValidationError(f"Unknown mentor: {mentor_id}")
            # Keep a snapshot so the enrollment survives the mentor's removal.
            values["mentor_name"] = values.get("mentor_name") or mentor.name
            values["mentor_email"] = values.get("mentor_email") or mentor.email
            values["mentor_contact"] = values.get("mentor_contact") or mentor.contact

        rows.append(models.CandidateEnrollment(position=position, **values))
    return rows


def _build_results(items: Iterable[schemas.CourseResultIn]) -> List[models.CandidateCourseResult]:
    return [
        models.CandidateCourseResult(position=position, **item.model_dump())
        for position, item in enumerate(items)
    ]


def _build_notes(items: Iterable[schemas.NoteIn]) -> List[models.CandidateNote]:
    rows = []
    for position, item in enumerate(items):
        rows.append(
            models.CandidateNote(
                position=position,
                text=item.text,
                author=item.author,
                role=item.role,
                timestamp=item.timestamp or _utcnow(),
            )
        )
    return rows


def _replace_collection(db: Session, candidate: models.Candidate, name: str, items) -> None:
    items = items or []
    if name == "enrollments":
        candidate.enrollments = _build_enrollments(db, items)
    elif name == "course_results":
        candidate.course_results = _build_results(items)
    elif name == "notes_thread":
        candidate.notes_thread = _build_notes(items)


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def list_candidates(
    db: Session,
    *,
    status: Optional[models.CandidateStatus] = None,
    track_id: Optional[models.TrackId] = None,
    sponsor: Optional[models.Sponsor] = None,
    emirate: Optional[str] = None,
) -> List[models.Candidate]:
    query = db.query(models.Candidate)
    if status is not None:
        query = query.filter(models.Candidate.status == status)
    if track_id is not None:
        query = query.filter(models.Candidate.track_id == track_id)
    if sponsor is not None:
        query = query.filter(models.Candidate.sponsor == sponsor)
    if emirate:
        query = query.filter(models.Candidate.emirate == emirate)
    return query.order_by(models.Candidate.created_at.desc(), models.Candidate.id.desc()).all()


def get_candidate(db: Session, candidate_id: str) -> Optional[models.Candidate]:
    return db.query(models.Candidate).filter(models.Candidate.id == candidate_id).first()


def get_candidate_or_404(db: Session, candidate_id: str) -> models.Candidate:
    candidate = get_candidate(db, candidate_id)
    if candidate is None:
        raise NotFoundError("Candidate not found")
    return candidate


def list_candidate_summaries(db: Session) -> List[schemas.CandidateSummary]:
    """Per-candidate counts of owned rows plus the track display name."""
    enrollment_count = (
        select(func.count(models.CandidateEnrollment.id))
        .where(models.CandidateEnrollment.candidate_id == models.Candidate.id)
        .correlate(models.Candidate)
        .scalar_subquery()
    )
    result_count = (
        select(func.count(models.CandidateCourseResult.id))
        .where(models.CandidateCourseResult.candidate_id == models.Candidate.id)
        .correlate(models.Candidate)
        .scalar_subquery()
    )
    note_count = (
        select(func.count(models.CandidateNote.id))
        .where(models.CandidateNote.candidate_id == models.Candidate.id)
        .correlate(models.Candidate)
        .scalar_subquery()
    )
    names = reference_services.track_names(db)

    rows = (
        db.query(models.Candidate, enrollment_count, result_count, note_count)
        .order_by(models.Candidate.created_at.desc(), models.Candidate.id.desc())
        .all()
    )
    return [
        schemas.CandidateSummary(
            id=candidate.id,
            name=candidate.name,
            status=candidate.status,
            stage_index=lifecycle.stage_index(candidate.status),
            track_id=candidate.track_id,
            track_name=names.get(candidate.track_id.value),
            sponsor=candidate.sponsor,
            enrollment_count=enrollments or 0,
            result_count=results or 0,
            note_count=notes or 0,
        )
        for candidate, enrollments, results, notes in rows
    ]


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------


def create_candidate(
    db: Session,
    data: schemas.CandidateCreate,
    *,
    actor: Optional[dict] = None,
) -> models.Candidate:
    _, extensions = _split_payload(data)

    candidate = models.Candidate(
        name=data.name.strip(),
        email=data.email,
        mobile=data.mobile,
        national_id=data.national_id,
        emirate=data.emirate,
        subject=data.subject,
        gpa=data.gpa if data.gpa is not None else 0,
        track_id=data.track_id,
        status=data.status,
        sponsor=data.sponsor,
        extensions=extensions or {},
    )
    candidate.enrollments = _build_enrollments(db, data.enrollments)
    candidate.course_results = _build_results(data.course_results)
    candidate.notes_thread = _build_notes(data.notes_thread)

    db.add(candidate)
    db.flush()
    audit_services.log_event(
        db,
        "candidate.created",
        {"id": candidate.id, "name": candidate.name, "status": candidate.status},
        actor=actor,
    )
    return candidate


def update_candidate(
    db: Session,
    candidate_id: str,
    data: schemas.CandidateUpdate,
    *,
    actor: Optional[dict] = None,
) -> models.Candidate:
    """
    Apply a partial update.

    Only fields present in the request are written. Explicit null clears a
    nullable column (and empties a child collection); null on name, status or
    trackId is rejected.
    """
    candidate = get_candidate_or_404(db, candidate_id)
    core, extensions = _split_payload(data)

    cleared = sorted(k for k, v in core.items() if v is None and k in _NON_NULLABLE)
    if cleared:
        raise ValidationError(f"Field(s) cannot be null: {', '.join(cleared)}")
    if "name" in core and not core["name"].strip():
        raise ValidationError("Candidate name cannot be empty")

    previous_status = candidate.status
    new_status = core.get("status")
    if new_status is not None:
        lifecycle.check_transition(previous_status, new_status)

    for field, value in core.items():
        if field in _COLLECTIONS:
            _replace_collection(db, candidate, field, value)
        elif field == "gpa":
            candidate.gpa = value if value is not None else 0
        elif field == "name":
            candidate.name = value.strip()
        else:
            setattr(candidate, field, value)

    if extensions is not None:
        candidate.extensions = extensions

    db.add(candidate)
    db.flush()

    changed = sorted(core.keys()) + (["extensions"] if extensions is not None else [])
    audit_services.log_event(
        db,
        "candidate.updated",
        {"id": candidate.id, "fields": changed},
        actor=actor,
    )
    if new_status is not None and new_status != previous_status:
        logger.info(
            "Candidate %s status %s -> %s",
            candidate.id,
            previous_status.value,
            new_status.value,
        )
        audit_services.log_event(
            db,
            "candidate.status_changed",
            {"id": candidate.id, "from": previous_status, "to": new_status},
            actor=actor,
        )
    return candidate


def delete_candidate(db: Session, candidate_id: str, *, actor: Optional[dict] = None) -> None:
    candidate = get_candidate_or_404(db, candidate_id)
    snapshot = {"id": candidate.id, "name": candidate.name, "status": candidate.status}
    db.delete(candidate)
    db.flush()
    audit_services.log_event(db, "candidate.deleted", snapshot, actor=actor)


def add_note(
    db: Session,
    candidate_id: str,
    data: schemas.NoteCreate,
    *,
    actor: Optional[dict] = None,
) -> models.Candidate:
    candidate = get_candidate_or_404(db, candidate_id)
    position = max((note.position for note in candidate.notes_thread), default=-1) + 1
    candidate.notes_thread.append(
        models.CandidateNote(
            position=position,
            text=data.text,
            author=data.author,
            role=data.role,
            timestamp=_utcnow(),
        )
    )
    db.add(candidate)
    db.flush()
    audit_services.log_event(
        db,
        "candidate.note_added",
        {"id": candidate.id, "author": data.author, "role": data.role},
        actor=actor,
    )
    return candidate
