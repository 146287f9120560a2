# backend/freshgrad/apps/accounts/models.py

from __future__ import annotations

import enum
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Enum, Index, Integer, JSON, String

from freshgrad.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserRole(str, enum.Enum):
    """Portal roles. 'Manager' and 'Trainer' are accepted as short forms."""

    ADMIN = "Admin"
    MANAGER = "ECAE Manager"
    TRAINER = "ECAE Trainer"
    AUDITOR = "Auditor"
    TEACHER = "Teacher"

    @classmethod
    def _missing_(cls, value):
        if not isinstance(value, str):
            return None
        wanted = value.strip().lower()
        for member in cls:
            if member.value.lower() == wanted or member.name.lower() == wanted:
                return member
        return None


class User(Base):
    """
    Portal account.

    Emails are stored lower-cased, which makes the unique index
    case-insensitive in practice. Passwords are only ever stored hashed.
    """

    __tablename__ = "users"
    __table_args__ = (
        Index("idx_users_role_created", "role", "created_at"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    hashed_password = Column(String(255), nullable=False)

    role = Column(
        Enum(
            UserRole,
            name="user_role_enum",
            native_enum=False,
            length=50,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=UserRole.TEACHER,
        index=True,
    )
    verified = Column(Boolean, nullable=False, default=False)
    applicant_status = Column(String(50), nullable=False, default="None")
    docs = Column(JSON, nullable=False, default=dict)

    last_login_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email} role={self.role}>"
