# backend/freshgrad/apps/mentors/models.py

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String

from freshgrad.database import Base
from freshgrad.utils.identifiers import id_factory


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Mentor(Base):
    """
    School-based mentor who supervises internship enrollments.

    Enrollments point at mentors but do not belong to them; deleting a mentor
    only clears `candidate_enrollments.mentor_id`.
    """

    __tablename__ = "mentors"

    id = Column(String(64), primary_key=True, default=id_factory("M"))
    name = Column(String(255), nullable=False, index=True)
    email = Column(String(255), nullable=True)
    contact = Column(String(50), nullable=True)
    subject = Column(String(100), nullable=True, index=True)
    school = Column(String(255), nullable=True, index=True)
    emirate = Column(String(100), nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    def __repr__(self) -> str:
        return f"<Mentor id={self.id} name={self.name}>"
