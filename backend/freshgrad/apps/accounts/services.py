# backend/freshgrad/apps/accounts/services.py

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from freshgrad.errors import AuthenticationError, ConflictError, NotFoundError, ValidationError
from freshgrad.security import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    create_access_token,
    get_password_hash,
    is_known_hash,
    verify_password,
)
from freshgrad.apps.audit import services as audit_services
from . import models, schemas

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"

# Fields that can never be cleared with an explicit null.
_REQUIRED_FIELDS = {"name", "role", "password", "verified", "applicant_status"}

_dummy_hash: Optional[str] = None


def _normalise_email(value: str) -> str:
    return (value or "").strip().lower()


def _burn_hash_check(password: str) -> None:
    """Spend the same work on unknown emails as on real ones."""
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = get_password_hash("freshgrad-timing-equaliser")
    verify_password(password, _dummy_hash)


def _profile_snapshot(user: models.User) -> dict:
    return {
        "email": user.email,
        "name": user.name,
        "role": user.role.value if user.role else None,
        "verified": user.verified,
        "applicant_status": user.applicant_status,
    }


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


def get_user_by_email(db: Session, email: str) -> Optional[models.User]:
    return (
        db.query(models.User)
        .filter(models.User.email == _normalise_email(email))
        .first()
    )


def list_users(db: Session) -> List[models.User]:
    return (
        db.query(models.User)
        .order_by(models.User.created_at.desc(), models.User.id.desc())
        .all()
    )


# ---------------------------------------------------------------------------
# User lifecycle
# ---------------------------------------------------------------------------


def create_user(
    db: Session,
    *,
    email: str,
    password: str,
    name: str,
    role: Optional[models.UserRole] = None,
    verified: bool = True,
    actor: Optional[dict] = None,
) -> models.User:
    email = _normalise_email(email)
    if get_user_by_email(db, email) is not None:
        raise ConflictError("Email already exists")

    user = models.User(
        email=email,
        name=name.strip(),
        hashed_password=get_password_hash(password),
        role=role or models.UserRole.TEACHER,
        verified=verified,
        applicant_status="None",
        docs={},
    )
    db.add(user)
    try:
        db.flush()
    except IntegrityError as exc:
        # Lost a race with a concurrent registration of the same email.
        db.rollback()
        raise ConflictError("Email already exists") from exc

    audit_services.log_event(db, "user.registered", _profile_snapshot(user), actor=actor)
    return user


def register_user(db: Session, data: schemas.RegisterRequest) -> models.User:
    user = create_user(
        db,
        email=str(data.email),
        password=data.password,
        name=data.name,
        role=data.role,
    )
    logger.info("User registered: %s", user.email)
    return user


def authenticate_user(db: Session, *, email: str, password: str) -> models.User:
    """
    Return the user for a valid email/password pair.

    Unknown email and wrong password raise the same AuthenticationError so the
    response never reveals whether the account exists.
    """
    user = get_user_by_email(db, email)
    if user is None:
        _burn_hash_check(password or "")
        logger.info("Login failed for unknown account")
        raise AuthenticationError(INVALID_CREDENTIALS)

    if not verify_password(password, user.hashed_password):
        logger.info("Login failed for %s", user.email)
        raise AuthenticationError(INVALID_CREDENTIALS)

    user.last_login_at = datetime.now(timezone.utc)
    db.add(user)
    audit_services.log_event(db, "user.login", {"email": user.email})
    logger.info("Login successful: %s", user.email)
    return user


def issue_access_token_for_user(user: models.User) -> Tuple[str, int]:
    token = create_access_token(
        data={"sub": user.email, "role": user.role.value},
    )
    return token, ACCESS_TOKEN_EXPIRE_MINUTES * 60


def update_user(
    db: Session,
    email: str,
    data: schemas.UserUpdate,
    *,
    actor: Optional[dict] = None,
) -> models.User:
    user = get_user_by_email(db, email)
    if user is None:
        raise NotFoundError("User not found")

    changes = data.model_dump(exclude_unset=True)
    cleared = sorted(k for k, v in changes.items() if v is None and k in _REQUIRED_FIELDS)
    if cleared:
        raise ValidationError(f"Field(s) cannot be null: {', '.join(cleared)}")

    before = _profile_snapshot(user)
    for field, value in changes.items():
        if field == "password":
            user.hashed_password = get_password_hash(value)
        elif field == "docs":
            user.docs = value or {}
        elif field == "name":
            user.name = value.strip()
        else:
            setattr(user, field, value)

    db.add(user)
    db.flush()
    audit_services.log_event(
        db,
        "user.updated",
        {
            "email": user.email,
            "fields": sorted(changes.keys()),
            "before": before,
            "after": _profile_snapshot(user),
        },
        actor=actor,
    )
    return user


def delete_user(db: Session, email: str, *, actor: Optional[dict] = None) -> None:
    user = get_user_by_email(db, email)
    if user is None:
        raise NotFoundError("User not found")
    snapshot = _profile_snapshot(user)
    db.delete(user)
    db.flush()
    audit_services.log_event(db, "user.deleted", snapshot, actor=actor)


def ensure_default_admin(
    db: Session,
    *,
    email: str,
    password: str,
    name: str = "Administrator",
) -> Tuple[models.User, bool]:
    """
    Create the bootstrap admin if it does not exist yet.

    Returns (user, created). An existing account is left untouched.
    """
    existing = get_user_by_email(db, email)
    if existing is not None:
        return existing, False
    user = create_user(
        db,
        email=email,
        password=password,
        name=name,
        role=models.UserRole.ADMIN,
        verified=True,
    )
    return user, True


def rehash_legacy_passwords(db: Session, *, email: Optional[str] = None) -> List[models.User]:
    """
    Hash passwords that were imported as plain values.

    Any stored value that is not an Argon2/bcrypt hash is treated as the
    user's current password and replaced with its Argon2id hash.
    """
    query = db.query(models.User)
    if email:
        query = query.filter(models.User.email == _normalise_email(email))

    updated: List[models.User] = []
    for user in query.order_by(models.User.email.asc()).all():
        if not user.hashed_password or is_known_hash(user.hashed_password):
            continue
        user.hashed_password = get_password_hash(user.hashed_password)
        updated.append(user)
    if updated:
        db.flush()
        logger.info("Rehashed %d legacy password(s)", len(updated))
    return updated
