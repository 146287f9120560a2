from __future__ import annotations

import pytest
from pydantic import ValidationError as SchemaValidationError

from freshgrad.apps.notifications import schemas as notification_schemas
from freshgrad.apps.notifications import services as notification_services
from freshgrad.errors import NotFoundError


def _send(db_session, **fields):
    body = {"type": "info", "title": "Hello", **fields}
    notification = notification_services.create_notification(
        db_session, notification_schemas.NotificationCreate.model_validate(body)
    )
    db_session.commit()
    return notification


def test_recipient_is_required():
    with pytest.raises(SchemaValidationError):
        notification_schemas.NotificationCreate(type="info", title="Nobody")
    with pytest.raises(SchemaValidationError):
        notification_schemas.NotificationCreate(type="info", title="Blank", to_email="  ")


def test_inbox_by_email_or_role(db_session):
    _send(db_session, toEmail="Teacher@Example.com", title="direct")
    _send(db_session, toRole="Admin", title="role")
    _send(db_session, toRole="Auditor", title="other")

    titles = {
        n.title
        for n in notification_services.list_notifications(
            db_session, email="teacher@example.com", role="Admin"
        )
    }
    assert titles == {"direct", "role"}
    assert [n.title for n in notification_services.list_notifications(db_session, role="Auditor")] == ["other"]


def test_mark_read_and_unread_filter(db_session):
    first = _send(db_session, toRole="Admin", title="one")
    _send(db_session, toRole="Admin", title="two")

    notification_services.mark_read(db_session, first.id)
    db_session.commit()

    unread = notification_services.list_notifications(db_session, role="Admin", unread_only=True)
    assert [n.title for n in unread] == ["two"]

    with pytest.raises(NotFoundError):
        notification_services.mark_read(db_session, "NTF-missing")


def test_notify_without_recipient_is_a_no_op(db_session):
    assert notification_services.notify(db_session, type="x", title="y") is None


def test_notification_routes(client):
    assert client.post("/api/notifications", json={"type": "info", "title": "x"}).status_code == 422

    created = client.post(
        "/api/notifications",
        json={"toEmail": "a@b.com", "type": "info", "title": "Hi", "target": {"page": "dashboard"}},
    )
    assert created.status_code == 201
    notification_id = created.json()["id"]
    assert notification_id.startswith("NTF-")
    assert created.json()["read"] is False

    assert client.post(f"/api/notifications/{notification_id}/read").json()["read"] is True
    inbox = client.get("/api/notifications", params={"email": "A@B.com", "unreadOnly": "true"})
    assert inbox.json() == []
