from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from freshgrad.database import get_db
from freshgrad.errors import NotFoundError
from . import schemas, services

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("", response_model=List[schemas.NotificationRead])
def list_notifications(
    email: Optional[str] = None,
    role: Optional[str] = None,
    unread_only: bool = Query(False, alias="unreadOnly"),
    db: Session = Depends(get_db),
):
    return services.list_notifications(db, email=email, role=role, unread_only=unread_only)


@router.post(
    "",
    response_model=schemas.NotificationRead,
    status_code=status.HTTP_201_CREATED,
)
def create_notification(
    payload: schemas.NotificationCreate,
    db: Session = Depends(get_db),
):
    notification = services.create_notification(db, payload)
    db.commit()
    db.refresh(notification)
    return notification


@router.post("/{notification_id}/read", response_model=schemas.NotificationRead)
def mark_read(notification_id: str, db: Session = Depends(get_db)):
    try:
        notification = services.mark_read(db, notification_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    db.commit()
    db.refresh(notification)
    return notification
