from __future__ import annotations

from sqlalchemy import Column, Integer, String

from freshgrad.database import Base


class Track(Base):
    """Static training curriculum lookup (t1/t2/t3)."""

    __tablename__ = "tracks"

    id = Column(String(10), primary_key=True)
    name = Column(String(100), nullable=False)
    min_average = Column(Integer, nullable=False, default=70)


class CandidateStatusInfo(Base):
    """Display metadata per candidate status; seeded, never edited at runtime."""

    __tablename__ = "candidate_statuses"

    status = Column(String(50), primary_key=True)
    display_order = Column(Integer, nullable=False)
    stage_index = Column(Integer, nullable=False)
    color_class = Column(String(100), nullable=True)
