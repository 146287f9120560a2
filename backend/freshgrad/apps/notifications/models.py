# backend/freshgrad/apps/notifications/models.py

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Index, JSON, String, Text

from freshgrad.database import Base
from freshgrad.utils.identifiers import id_factory


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Notification(Base):
    """
    In-app notification addressed to an email, a role, or both.

    Rows are append-only apart from the `read` flag.
    """

    __tablename__ = "notifications"
    __table_args__ = (
        Index("ix_notifications_role_created", "to_role", "created_at"),
    )

    id = Column(String(64), primary_key=True, default=id_factory("NTF"))
    to_email = Column(String(255), nullable=True, index=True)
    to_role = Column(String(50), nullable=True, index=True)
    type = Column(String(100), nullable=False)
    title = Column(String(255), nullable=False)
    body = Column(Text, nullable=True)
    target = Column(JSON, nullable=False, default=dict)
    read = Column(Boolean, nullable=False, default=False, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
