from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from freshgrad.apps.accounts.models import User
from freshgrad.database import get_db
from freshgrad.errors import ConflictError, NotFoundError, ValidationError
from freshgrad.schemas import SuccessResponse
from freshgrad.security import actor_of, get_optional_user
from . import schemas, services

router = APIRouter(prefix="/api/courses", tags=["courses"])


@router.get("", response_model=List[schemas.CourseRead])
def list_courses(
    include_inactive: bool = Query(False, alias="includeInactive"),
    db: Session = Depends(get_db),
):
    return services.list_courses(db, include_inactive=include_inactive)


@router.get("/{course_id}", response_model=schemas.CourseRead)
def get_course(course_id: str, db: Session = Depends(get_db)):
    course = services.get_course(db, course_id)
    if course is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
    return course


@router.post("", response_model=schemas.CourseRead, status_code=status.HTTP_201_CREATED)
def create_course(
    payload: schemas.CourseCreate,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    try:
        course = services.create_course(db, payload, actor=actor_of(current_user))
    except ConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    db.commit()
    db.refresh(course)
    return course


@router.put("/{course_id}", response_model=schemas.CourseRead)
def update_course(
    course_id: str,
    payload: schemas.CourseUpdate,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    try:
        course = services.update_course(db, course_id, payload, actor=actor_of(current_user))
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    except ConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    db.commit()
    db.refresh(course)
    return course


@router.delete("/{course_id}", response_model=SuccessResponse)
def delete_course(
    course_id: str,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    try:
        services.deactivate_course(db, course_id, actor=actor_of(current_user))
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    db.commit()
    return SuccessResponse()
