from __future__ import annotations

from datetime import date, datetime
import enum
import logging
from typing import Any, Optional, Sequence

from sqlalchemy.orm import Session

from . import models, schemas

logger = logging.getLogger(__name__)

MAX_LIST_LIMIT = 1000


def _json_safe(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_json_safe(v) for v in value]
    if isinstance(value, enum.Enum):
        return value.value
    return value


def create_audit_event(
    db: Session,
    *,
    data: schemas.AuditEventCreate,
) -> models.AuditLogEntry:
    entry = models.AuditLogEntry(
        event_type=data.event_type,
        payload=_json_safe(data.payload or {}),
    )
    db.add(entry)
    db.flush()
    return entry


def log_event(
    db: Session,
    event_type: str,
    payload: Optional[dict] = None,
    *,
    actor: Optional[dict] = None,
    critical: bool = False,
) -> Optional[models.AuditLogEntry]:
    """
    Best-effort audit event logger.
    - For critical events, raise on failure.
    - Otherwise log a warning and let the caller's write continue.
    """
    body = dict(payload or {})
    if actor:
        body["actor"] = actor
    try:
        # Savepoint: a failed audit write leaves the caller's transaction intact.
        with db.begin_nested():
            return create_audit_event(
                db,
                data=schemas.AuditEventCreate(event_type=event_type, payload=body),
            )
    except Exception as exc:
        if critical:
            raise
        logger.warning(
            "Audit log write failed",
            extra={"event_type": event_type, "error": str(exc)},
        )
        return None


def list_audit_events(
    db: Session,
    *,
    event_type: Optional[str] = None,
    limit: int = 200,
) -> Sequence[models.AuditLogEntry]:
    limit = max(1, min(limit, MAX_LIST_LIMIT))
    query = db.query(models.AuditLogEntry)
    if event_type:
        query = query.filter(models.AuditLogEntry.event_type == event_type)
    return (
        query.order_by(models.AuditLogEntry.created_at.desc(), models.AuditLogEntry.id.desc())
        .limit(limit)
        .all()
    )
