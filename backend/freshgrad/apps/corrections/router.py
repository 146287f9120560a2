from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from freshgrad.apps.accounts.models import User
from freshgrad.database import get_db
from freshgrad.errors import ConflictError, NotFoundError, ValidationError
from freshgrad.security import actor_of, get_optional_user
from . import models, schemas, services

router = APIRouter(prefix="/api/corrections", tags=["corrections"])


def _translate(exc: Exception) -> HTTPException:
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, ConflictError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))


@router.get("", response_model=List[schemas.CorrectionRead])
def list_corrections(
    candidate_id: Optional[str] = Query(None, alias="candidateId"),
    status_filter: Optional[models.CorrectionStatus] = Query(None, alias="status"),
    for_role: Optional[str] = Query(None, alias="forRole"),
    db: Session = Depends(get_db),
):
    return services.list_corrections(
        db,
        candidate_id=candidate_id,
        status=status_filter,
        for_role=for_role,
    )


@router.get("/{correction_id}", response_model=schemas.CorrectionRead)
def get_correction(correction_id: str, db: Session = Depends(get_db)):
    try:
        return services.get_correction_or_404(db, correction_id)
    except NotFoundError as exc:
        raise _translate(exc)


@router.post("", response_model=schemas.CorrectionRead, status_code=status.HTTP_201_CREATED)
def create_correction(
    payload: schemas.CorrectionCreate,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    try:
        correction = services.create_correction(db, payload, actor=actor_of(current_user))
    except NotFoundError as exc:
        raise _translate(exc)
    db.commit()
    db.refresh(correction)
    return correction


@router.post("/{correction_id}/respond", response_model=schemas.CorrectionRead)
def respond(
    correction_id: str,
    payload: schemas.CorrectionResponseIn,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    try:
        correction = services.respond_to_correction(
            db, correction_id, payload, actor=actor_of(current_user)
        )
    except (NotFoundError, ConflictError) as exc:
        raise _translate(exc)
    db.commit()
    db.refresh(correction)
    return correction


@router.post("/{correction_id}/resolve", response_model=schemas.CorrectionRead)
def resolve(
    correction_id: str,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    try:
        correction = services.resolve_correction(db, correction_id, actor=actor_of(current_user))
    except (NotFoundError, ConflictError) as exc:
        raise _translate(exc)
    db.commit()
    db.refresh(correction)
    return correction


@router.post("/{correction_id}/reject", response_model=schemas.CorrectionRead)
def reject(
    correction_id: str,
    payload: schemas.CorrectionReject,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    try:
        correction = services.reject_correction(
            db, correction_id, payload.reason, actor=actor_of(current_user)
        )
    except (NotFoundError, ConflictError, ValidationError) as exc:
        raise _translate(exc)
    db.commit()
    db.refresh(correction)
    return correction
