# backend/freshgrad/apps/candidates/router.py

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from freshgrad.apps.accounts.models import User
from freshgrad.database import get_db
from freshgrad.errors import NotFoundError, ValidationError
from freshgrad.schemas import SuccessResponse
from freshgrad.security import actor_of, get_optional_user
from . import models, schemas, services

router = APIRouter(prefix="/api/candidates", tags=["candidates"])


def _not_found(exc: Exception) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


def _invalid(exc: Exception) -> HTTPException:
    return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))


@router.get("", response_model=List[schemas.CandidateRead])
def list_candidates(
    status_filter: Optional[models.CandidateStatus] = Query(None, alias="status"),
    track_id: Optional[models.TrackId] = Query(None, alias="trackId"),
    sponsor: Optional[models.Sponsor] = None,
    emirate: Optional[str] = None,
    db: Session = Depends(get_db),
):
    return services.list_candidates(
        db,
        status=status_filter,
        track_id=track_id,
        sponsor=sponsor,
        emirate=emirate,
    )


# Declared before "/{candidate_id}" so "summary" is not taken for an id.
@router.get("/summary", response_model=List[schemas.CandidateSummary])
def candidate_summary(db: Session = Depends(get_db)):
    return services.list_candidate_summaries(db)


@router.get("/{candidate_id}", response_model=schemas.CandidateRead)
def get_candidate(candidate_id: str, db: Session = Depends(get_db)):
    candidate = services.get_candidate(db, candidate_id)
    if candidate is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Candidate not found")
    return candidate


@router.post("", response_model=schemas.CandidateRead, status_code=status.HTTP_201_CREATED)
def create_candidate(
    payload: schemas.CandidateCreate,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    try:
        candidate = services.create_candidate(db, payload, actor=actor_of(current_user))
    except ValidationError as exc:
        raise _invalid(exc)
    db.commit()
    db.refresh(candidate)
    return candidate


@router.put("/{candidate_id}", response_model=schemas.CandidateRead)
def update_candidate(
    candidate_id: str,
    payload: schemas.CandidateUpdate,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    try:
        candidate = services.update_candidate(
            db, candidate_id, payload, actor=actor_of(current_user)
        )
    except NotFoundError as exc:
        raise _not_found(exc)
    except ValidationError as exc:
        raise _invalid(exc)
    db.commit()
    db.refresh(candidate)
    return candidate


@router.delete("/{candidate_id}", response_model=SuccessResponse)
def delete_candidate(
    candidate_id: str,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    try:
        services.delete_candidate(db, candidate_id, actor=actor_of(current_user))
    except NotFoundError as exc:
        raise _not_found(exc)
    db.commit()
    return SuccessResponse()


@router.post(
    "/{candidate_id}/notes",
    response_model=schemas.CandidateRead,
    status_code=status.HTTP_201_CREATED,
)
def add_note(
    candidate_id: str,
    payload: schemas.NoteCreate,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    try:
        candidate = services.add_note(db, candidate_id, payload, actor=actor_of(current_user))
    except NotFoundError as exc:
        raise _not_found(exc)
    db.commit()
    db.refresh(candidate)
    return candidate
