# backend/freshgrad/apps/mentors/services.py

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from freshgrad.apps.audit import services as audit_services
from freshgrad.apps.candidates.models import CandidateEnrollment
from freshgrad.errors import NotFoundError, ValidationError
from . import models, schemas

logger = logging.getLogger(__name__)


def _snapshot(mentor: models.Mentor) -> dict:
    return {
        "id": mentor.id,
        "name": mentor.name,
        "email": mentor.email,
        "subject": mentor.subject,
        "school": mentor.school,
        "emirate": mentor.emirate,
    }


def list_mentors(
    db: Session,
    *,
    subject: Optional[str] = None,
    emirate: Optional[str] = None,
) -> List[models.Mentor]:
    query = db.query(models.Mentor)
    if subject:
        query = query.filter(models.Mentor.subject == subject)
    if emirate:
        query = query.filter(models.Mentor.emirate == emirate)
    return query.order_by(models.Mentor.name.asc(), models.Mentor.id.asc()).all()


def get_mentor(db: Session, mentor_id: str) -> Optional[models.Mentor]:
    return db.query(models.Mentor).filter(models.Mentor.id == mentor_id).first()


def get_mentor_or_404(db: Session, mentor_id: str) -> models.Mentor:
    mentor = get_mentor(db, mentor_id)
    if mentor is None:
        raise NotFoundError("Mentor not found")
    return mentor


def create_mentor(
    db: Session,
    data: schemas.MentorCreate,
    *,
    actor: Optional[dict] = None,
) -> models.Mentor:
    mentor = models.Mentor(**data.model_dump())
    db.add(mentor)
    db.flush()
    audit_services.log_event(db, "mentor.created", _snapshot(mentor), actor=actor)
    return mentor


def update_mentor(
    db: Session,
    mentor_id: str,
    data: schemas.MentorUpdate,
    *,
    actor: Optional[dict] = None,
) -> models.Mentor:
    mentor = get_mentor_or_404(db, mentor_id)
    changes = data.model_dump(exclude_unset=True)
    if "name" in changes and not (changes["name"] or "").strip():
        raise ValidationError("Mentor name cannot be empty")

    for field, value in changes.items():
        setattr(mentor, field, value)
    db.add(mentor)
    db.flush()
    audit_services.log_event(
        db,
        "mentor.updated",
        {"id": mentor.id, "fields": sorted(changes.keys())},
        actor=actor,
    )
    return mentor


def delete_mentor(db: Session, mentor_id: str, *, actor: Optional[dict] = None) -> None:
    mentor = get_mentor_or_404(db, mentor_id)
    snapshot = _snapshot(mentor)

    # Enrollments keep their mentor name/contact snapshot; only the link goes.
    (
        db.query(CandidateEnrollment)
        .filter(CandidateEnrollment.mentor_id == mentor.id)
        .update({CandidateEnrollment.mentor_id: None}, synchronize_session="fetch")
    )
    db.delete(mentor)
    db.flush()
    audit_services.log_event(db, "mentor.deleted", snapshot, actor=actor)


def list_mentor_summaries(db: Session) -> List[schemas.MentorSummary]:
    """Mentors with the number of internship enrollments pointing at them."""
    internships = (
        db.query(
            CandidateEnrollment.mentor_id.label("mentor_id"),
            func.count(CandidateEnrollment.id).label("active_internships"),
        )
        .filter(CandidateEnrollment.is_internship.is_(True))
        .group_by(CandidateEnrollment.mentor_id)
        .subquery()
    )
    rows = (
        db.query(models.Mentor, internships.c.active_internships)
        .outerjoin(internships, internships.c.mentor_id == models.Mentor.id)
        .order_by(models.Mentor.name.asc(), models.Mentor.id.asc())
        .all()
    )
    return [
        schemas.MentorSummary(
            id=mentor.id,
            name=mentor.name,
            email=mentor.email,
            subject=mentor.subject,
            school=mentor.school,
            emirate=mentor.emirate,
            active_internships=count or 0,
        )
        for mentor, count in rows
    ]
