# backend/freshgrad/apps/corrections/models.py

from __future__ import annotations

import enum
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Index, JSON, String, Text

from freshgrad.database import Base
from freshgrad.utils.identifiers import id_factory


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CorrectionStatus(str, enum.Enum):
    PENDING = "Pending"
    RESPONDED = "Responded"
    RESOLVED = "Resolved"
    REJECTED = "Rejected"


TERMINAL_STATUSES = frozenset({CorrectionStatus.RESOLVED, CorrectionStatus.REJECTED})


class Correction(Base):
    """
    Data-dispute item raised by one role against a candidate, addressed to
    another role. `response` holds the latest {author, role, text, timestamp}.
    """

    __tablename__ = "corrections"
    __table_args__ = (
        Index("ix_corrections_for_role_status", "for_role", "status"),
    )

    id = Column(String(64), primary_key=True, default=id_factory("COR"))
    candidate_id = Column(
        String(64),
        ForeignKey("candidates.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    text = Column(Text, nullable=False)
    by_user = Column(String(255), nullable=False)
    by_role = Column(String(50), nullable=False)
    for_role = Column(String(50), nullable=False)

    status = Column(
        Enum(
            CorrectionStatus,
            name="correction_status_enum",
            native_enum=False,
            length=20,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=CorrectionStatus.PENDING,
        index=True,
    )
    reject_reason = Column(Text, nullable=True)
    response = Column(JSON, nullable=True)

    resolved_at = Column(DateTime(timezone=True), nullable=True)
    rejected_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES
