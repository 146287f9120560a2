# backend/freshgrad/apps/courses/models.py

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Float, Integer, JSON, String, Text

from freshgrad.database import Base
from freshgrad.utils.identifiers import id_factory


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Course(Base):
    """
    Training course. Courses are never hard-deleted: `active=False` hides them
    from the default listing while enrollments keep referencing the code.
    """

    __tablename__ = "courses"

    id = Column(String(64), primary_key=True, default=id_factory("CR"))
    code = Column(String(50), unique=True, nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    # Multiplier applied to the course score when averaging.
    weight = Column(Float, nullable=False, default=1.0)
    pass_threshold = Column(Integer, nullable=False, default=70)
    is_required = Column(Boolean, nullable=False, default=False)
    tracks = Column(JSON, nullable=False, default=list)
    active = Column(Boolean, nullable=False, default=True, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    def __repr__(self) -> str:
        return f"<Course id={self.id} code={self.code} active={self.active}>"
