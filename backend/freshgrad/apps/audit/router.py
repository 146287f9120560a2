from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from freshgrad.database import get_db
from . import schemas, services


router = APIRouter(prefix="/api/audit", tags=["audit"])


@router.get("", response_model=List[schemas.AuditEventRead])
def list_audit_events(
    event_type: Optional[str] = Query(None, alias="eventType"),
    limit: int = 200,
    db: Session = Depends(get_db),
):
    return services.list_audit_events(db, event_type=event_type, limit=limit)


@router.post(
    "",
    response_model=schemas.AuditEventRead,
    status_code=status.HTTP_201_CREATED,
)
def create_audit_event(
    payload: schemas.AuditEventCreate,
    db: Session = Depends(get_db),
):
    event = services.create_audit_event(db, data=payload)
    db.commit()
    db.refresh(event)
    return event
