# backend/freshgrad/apps/notifications/services.py

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import false, func, or_
from sqlalchemy.orm import Session

from freshgrad.errors import NotFoundError
from . import models, schemas

logger = logging.getLogger(__name__)


def create_notification(db: Session, data: schemas.NotificationCreate) -> models.Notification:
    to_email = (data.to_email or "").strip().lower() or None
    to_role = (data.to_role or "").strip() or None
    notification = models.Notification(
        to_email=to_email,
        to_role=to_role,
        type=data.type,
        title=data.title,
        body=data.body,
        target=data.target or {},
        read=False,
    )
    db.add(notification)
    db.flush()
    logger.debug("Notification %s queued for %s", notification.id, to_email or to_role)
    return notification


def notify(
    db: Session,
    *,
    type: str,
    title: str,
    body: Optional[str] = None,
    to_email: Optional[str] = None,
    to_role: Optional[str] = None,
    target: Optional[dict] = None,
) -> Optional[models.Notification]:
    """
    Workflow hook. Quietly does nothing when there is no recipient.
    """
    if not (to_email or to_role):
        return None
    return create_notification(
        db,
        schemas.NotificationCreate(
            to_email=to_email,
            to_role=to_role,
            type=type,
            title=title,
            body=body,
            target=target or {},
        ),
    )


def list_notifications(
    db: Session,
    *,
    email: Optional[str] = None,
    role: Optional[str] = None,
    unread_only: bool = False,
) -> List[models.Notification]:
    """
    Inbox for an email and/or role. With neither given, everything is listed.
    """
    query = db.query(models.Notification)

    recipients = []
    if email:
        recipients.append(func.lower(models.Notification.to_email) == email.strip().lower())
    if role:
        recipients.append(models.Notification.to_role == role.strip())
    if recipients:
        query = query.filter(or_(*recipients))

    if unread_only:
        query = query.filter(models.Notification.read == false())

    return (
        query.order_by(models.Notification.created_at.desc(), models.Notification.id.desc())
        .all()
    )


def mark_read(db: Session, notification_id: str) -> models.Notification:
    notification = (
        db.query(models.Notification)
        .filter(models.Notification.id == notification_id)
        .first()
    )
    if notification is None:
        raise NotFoundError("Notification not found")
    notification.read = True
    db.add(notification)
    db.flush()
    return notification
