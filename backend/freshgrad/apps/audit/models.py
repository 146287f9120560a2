from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Index, JSON, String, desc

from freshgrad.database import Base
from freshgrad.utils.identifiers import id_factory


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditLogEntry(Base):
    """
    Append-only audit trail. Rows are never updated or deleted by the app.
    """

    __tablename__ = "audit_log"
    __table_args__ = (
        Index("ix_audit_log_type_created", "event_type", "created_at"),
        Index("ix_audit_log_created_desc", desc("created_at")),
    )

    id = Column(String(64), primary_key=True, default=id_factory("E"))
    event_type = Column(String(100), nullable=False, index=True)
    payload = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)

    def __repr__(self) -> str:
        return f"<AuditLogEntry id={self.id} event_type={self.event_type}>"
