from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from freshgrad.apps.accounts.models import User
from freshgrad.database import get_db
from freshgrad.errors import NotFoundError, ValidationError
from freshgrad.schemas import SuccessResponse
from freshgrad.security import actor_of, get_optional_user
from . import schemas, services

router = APIRouter(prefix="/api/mentors", tags=["mentors"])


@router.get("", response_model=List[schemas.MentorRead])
def list_mentors(
    subject: Optional[str] = None,
    emirate: Optional[str] = None,
    db: Session = Depends(get_db),
):
    return services.list_mentors(db, subject=subject, emirate=emirate)


@router.get("/summary", response_model=List[schemas.MentorSummary])
def mentor_summary(db: Session = Depends(get_db)):
    return services.list_mentor_summaries(db)


@router.get("/{mentor_id}", response_model=schemas.MentorRead)
def get_mentor(mentor_id: str, db: Session = Depends(get_db)):
    mentor = services.get_mentor(db, mentor_id)
    if mentor is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Mentor not found")
    return mentor


@router.post("", response_model=schemas.MentorRead, status_code=status.HTTP_201_CREATED)
def create_mentor(
    payload: schemas.MentorCreate,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    mentor = services.create_mentor(db, payload, actor=actor_of(current_user))
    db.commit()
    db.refresh(mentor)
    return mentor


@router.put("/{mentor_id}", response_model=schemas.MentorRead)
def update_mentor(
    mentor_id: str,
    payload: schemas.MentorUpdate,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    try:
        mentor = services.update_mentor(db, mentor_id, payload, actor=actor_of(current_user))
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    db.commit()
    db.refresh(mentor)
    return mentor


@router.delete("/{mentor_id}", response_model=SuccessResponse)
def delete_mentor(
    mentor_id: str,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    try:
        services.delete_mentor(db, mentor_id, actor=actor_of(current_user))
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    db.commit()
    return SuccessResponse()
