# backend/freshgrad/apps/accounts/router.py

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from freshgrad.database import get_db
from freshgrad.errors import AuthenticationError, ConflictError, NotFoundError, ValidationError
from freshgrad.schemas import SuccessResponse
from freshgrad.security import actor_of, get_current_user, get_optional_user
from . import models, schemas, services

router = APIRouter(prefix="/api/users", tags=["users"])


def _login_response(user: models.User) -> schemas.LoginResponse:
    token, expires_in = services.issue_access_token_for_user(user)
    profile = schemas.UserRead.model_validate(user)
    return schemas.LoginResponse(
        **profile.model_dump(),
        access_token=token,
        expires_in=expires_in,
    )


# ---------------------------------------------------------------------------
# AUTH
# ---------------------------------------------------------------------------


@router.post(
    "/auth/login",
    response_model=schemas.LoginResponse,
    summary="Login with email and password",
)
def login(payload: schemas.LoginRequest, db: Session = Depends(get_db)):
    """
    Email matching is case-insensitive. Wrong password and unknown email
    both answer 401 "Invalid credentials".
    """
    try:
        user = services.authenticate_user(db, email=payload.email, password=payload.password)
    except AuthenticationError as exc:
        # Keep the last_login/audit side effects out of failed attempts.
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc) or services.INVALID_CREDENTIALS,
        )
    db.commit()
    db.refresh(user)
    return _login_response(user)


@router.post(
    "/auth/register",
    response_model=schemas.UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Self-service registration",
)
def register(payload: schemas.RegisterRequest, db: Session = Depends(get_db)):
    try:
        user = services.register_user(db, payload)
    except ConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    db.commit()
    db.refresh(user)
    return user


@router.get("/me", response_model=schemas.UserRead)
def read_me(current_user: models.User = Depends(get_current_user)):
    return current_user


# ---------------------------------------------------------------------------
# USERS
# ---------------------------------------------------------------------------


@router.get("", response_model=List[schemas.UserRead])
def list_users(db: Session = Depends(get_db)):
    return services.list_users(db)


@router.get("/{email}", response_model=schemas.UserRead)
def get_user(email: str, db: Session = Depends(get_db)):
    user = services.get_user_by_email(db, email)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.put("/{email}", response_model=schemas.UserRead)
def update_user(
    email: str,
    payload: schemas.UserUpdate,
    db: Session = Depends(get_db),
    current_user: Optional[models.User] = Depends(get_optional_user),
):
    try:
        user = services.update_user(db, email, payload, actor=actor_of(current_user))
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    db.commit()
    db.refresh(user)
    return user


@router.delete("/{email}", response_model=SuccessResponse)
def delete_user(
    email: str,
    db: Session = Depends(get_db),
    current_user: Optional[models.User] = Depends(get_optional_user),
):
    try:
        services.delete_user(db, email, actor=actor_of(current_user))
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    db.commit()
    return SuccessResponse()
