# backend/freshgrad/apps/courses/services.py

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from freshgrad.apps.audit import services as audit_services
from freshgrad.errors import ConflictError, NotFoundError, ValidationError
from . import models, schemas

logger = logging.getLogger(__name__)

_NON_NULLABLE = {"code", "title", "weight", "pass_threshold", "is_required", "tracks", "active"}


def _track_values(tracks) -> List[str]:
    return [getattr(t, "value", t) for t in (tracks or [])]


def _ensure_code_free(db: Session, code: str, *, exclude_id: Optional[str] = None) -> None:
    query = db.query(models.Course.id).filter(models.Course.code == code)
    if exclude_id is not None:
        query = query.filter(models.Course.id != exclude_id)
    if query.first() is not None:
        raise ConflictError(f"Course code already exists: {code}")


def _flush_or_conflict(db: Session, code: str) -> None:
    try:
        db.flush()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError(f"Course code already exists: {code}") from exc


def list_courses(db: Session, *, include_inactive: bool = False) -> List[models.Course]:
    query = db.query(models.Course)
    if not include_inactive:
        query = query.filter(models.Course.active.is_(True))
    return query.order_by(models.Course.code.asc()).all()


def get_course(db: Session, course_id: str) -> Optional[models.Course]:
    return db.query(models.Course).filter(models.Course.id == course_id).first()


def get_course_or_404(db: Session, course_id: str) -> models.Course:
    course = get_course(db, course_id)
    if course is None:
        raise NotFoundError("Course not found")
    return course


def create_course(
    db: Session,
    data: schemas.CourseCreate,
    *,
    actor: Optional[dict] = None,
) -> models.Course:
    code = data.code.strip()
    _ensure_code_free(db, code)

    course = models.Course(
        code=code,
        title=data.title.strip(),
        description=data.description,
        weight=data.weight,
        pass_threshold=data.pass_threshold,
        is_required=data.is_required,
        tracks=_track_values(data.tracks),
        active=True,
    )
    db.add(course)
    _flush_or_conflict(db, code)
    audit_services.log_event(
        db,
        "course.created",
        {"id": course.id, "code": course.code, "title": course.title},
        actor=actor,
    )
    return course


def update_course(
    db: Session,
    course_id: str,
    data: schemas.CourseUpdate,
    *,
    actor: Optional[dict] = None,
) -> models.Course:
    course = get_course_or_404(db, course_id)
    changes = data.model_dump(exclude_unset=True)

    cleared = sorted(k for k, v in changes.items() if v is None and k in _NON_NULLABLE)
    if cleared:
        raise ValidationError(f"Field(s) cannot be null: {', '.join(cleared)}")

    if "code" in changes:
        changes["code"] = changes["code"].strip()
        _ensure_code_free(db, changes["code"], exclude_id=course.id)
    if "title" in changes:
        changes["title"] = changes["title"].strip()
        if not changes["title"]:
            raise ValidationError("Course title cannot be empty")
    if "tracks" in changes:
        changes["tracks"] = _track_values(changes["tracks"])

    for field, value in changes.items():
        setattr(course, field, value)
    db.add(course)
    _flush_or_conflict(db, course.code)
    audit_services.log_event(
        db,
        "course.updated",
        {"id": course.id, "code": course.code, "fields": sorted(changes.keys())},
        actor=actor,
    )
    return course


def deactivate_course(db: Session, course_id: str, *, actor: Optional[dict] = None) -> models.Course:
    """Soft delete; enrollments referencing the code are untouched."""
    course = get_course_or_404(db, course_id)
    course.active = False
    db.add(course)
    db.flush()
    audit_services.log_event(
        db,
        "course.deactivated",
        {"id": course.id, "code": course.code},
        actor=actor,
    )
    return course
