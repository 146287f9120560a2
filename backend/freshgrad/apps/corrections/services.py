# backend/freshgrad/apps/corrections/services.py
"""
Correction workflow.

    Pending ──respond──> Responded ──respond──> Responded
       │                    │
       ├──resolve / reject──┴──> Resolved | Rejected   (terminal)

Any action on a terminal correction raises ConflictError. There is no
concurrency guard: the last write wins.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from freshgrad.apps.audit import services as audit_services
from freshgrad.apps.candidates.models import Candidate
from freshgrad.apps.notifications import services as notification_services
from freshgrad.errors import ConflictError, NotFoundError, ValidationError
from . import models, schemas

logger = logging.getLogger(__name__)

CorrectionStatus = models.CorrectionStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _ensure_open(correction: models.Correction, action: str) -> None:
    if correction.is_terminal:
        raise ConflictError(
            f"Cannot {action} a correction that is already {correction.status.value}"
        )


def _target(correction: models.Correction) -> dict:
    return {"page": "candidate", "candidateId": correction.candidate_id, "correctionId": correction.id}


def _audit(db: Session, action: str, correction: models.Correction, actor: Optional[dict], **extra) -> None:
    payload = {
        "id": correction.id,
        "candidate_id": correction.candidate_id,
        "status": correction.status,
    }
    payload.update(extra)
    audit_services.log_event(db, f"correction.{action}", payload, actor=actor)


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def list_corrections(
    db: Session,
    *,
    candidate_id: Optional[str] = None,
    status: Optional[CorrectionStatus] = None,
    for_role: Optional[str] = None,
) -> List[models.Correction]:
    query = db.query(models.Correction)
    if candidate_id:
        query = query.filter(models.Correction.candidate_id == candidate_id)
    if status is not None:
        query = query.filter(models.Correction.status == status)
    if for_role:
        query = query.filter(models.Correction.for_role == for_role)
    return (
        query.order_by(models.Correction.created_at.desc(), models.Correction.id.desc())
        .all()
    )


def get_correction_or_404(db: Session, correction_id: str) -> models.Correction:
    correction = (
        db.query(models.Correction).filter(models.Correction.id == correction_id).first()
    )
    if correction is None:
        raise NotFoundError("Correction not found")
    return correction


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------


def create_correction(
    db: Session,
    data: schemas.CorrectionCreate,
    *,
    actor: Optional[dict] = None,
) -> models.Correction:
    candidate = db.get(Candidate, data.candidate_id)
    if candidate is None:
        raise NotFoundError("Candidate not found")

    correction = models.Correction(
        candidate_id=candidate.id,
        text=data.text,
        by_user=data.by_user,
        by_role=data.by_role,
        for_role=data.for_role,
        status=CorrectionStatus.PENDING,
    )
    db.add(correction)
    db.flush()

    notification_services.notify(
        db,
        type="correction.requested",
        title=f"Correction requested for {candidate.name}",
        body=data.text,
        to_role=data.for_role,
        target=_target(correction),
    )
    _audit(db, "requested", correction, actor, for_role=data.for_role)
    return correction


def respond_to_correction(
    db: Session,
    correction_id: str,
    data: schemas.CorrectionResponseIn,
    *,
    actor: Optional[dict] = None,
) -> models.Correction:
    correction = get_correction_or_404(db, correction_id)
    _ensure_open(correction, "respond to")

    correction.response = {
        "author": data.author,
        "role": data.role,
        "text": data.text,
        "timestamp": _utcnow().isoformat(),
    }
    correction.status = CorrectionStatus.RESPONDED
    db.add(correction)
    db.flush()

    # by_user holds the requester's email when raised from the portal;
    # otherwise the requesting role is notified.
    requester = correction.by_user if "@" in (correction.by_user or "") else None
    if requester is None:
        logger.debug(
            "Correction %s requester is not an email; notifying role %s",
            correction.id,
            correction.by_role,
        )
    notification_services.notify(
        db,
        type="correction.responded",
        title="Your correction request has a response",
        body=data.text,
        to_email=requester,
        to_role=None if requester else correction.by_role,
        target=_target(correction),
    )
    _audit(db, "responded", correction, actor, author=data.author)
    return correction


def resolve_correction(
    db: Session,
    correction_id: str,
    *,
    actor: Optional[dict] = None,
) -> models.Correction:
    correction = get_correction_or_404(db, correction_id)
    _ensure_open(correction, "resolve")

    correction.status = CorrectionStatus.RESOLVED
    correction.resolved_at = _utcnow()
    db.add(correction)
    db.flush()
    _audit(db, "resolved", correction, actor)
    return correction


def reject_correction(
    db: Session,
    correction_id: str,
    reason: Optional[str],
    *,
    actor: Optional[dict] = None,
) -> models.Correction:
    correction = get_correction_or_404(db, correction_id)
    _ensure_open(correction, "reject")

    reason = (reason or "").strip()
    if not reason:
        raise ValidationError("A reason is required to reject a correction")

    correction.status = CorrectionStatus.REJECTED
    correction.reject_reason = reason
    correction.rejected_at = _utcnow()
    db.add(correction)
    db.flush()
    _audit(db, "rejected", correction, actor, reason=reason)
    return correction
