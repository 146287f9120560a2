from __future__ import annotations

from datetime import date

import pytest

from freshgrad.apps.audit import models as audit_models
from freshgrad.apps.audit import schemas as audit_schemas
from freshgrad.apps.audit import services as audit_services
from freshgrad.apps.candidates.models import CandidateStatus
from freshgrad.apps.mentors import models as mentor_models


def test_log_event_serialises_payload_and_actor(db_session):
    entry = audit_services.log_event(
        db_session,
        "candidate.status_changed",
        {"to": CandidateStatus.ELIGIBLE, "on": date(2025, 1, 2), "fields": ("a", "b")},
        actor={"email": "admin@example.com", "role": "Admin"},
    )
    db_session.commit()

    assert entry.id.startswith("E-")
    assert entry.payload == {
        "to": "Eligible",
        "on": "2025-01-02",
        "fields": ["a", "b"],
        "actor": {"email": "admin@example.com", "role": "Admin"},
    }


def test_log_event_is_best_effort(db_session, monkeypatch):
    def _boom(*args, **kwargs):
        raise RuntimeError("store down")

    monkeypatch.setattr(audit_services, "create_audit_event", _boom)

    assert audit_services.log_event(db_session, "user.login", {"email": "x"}) is None
    with pytest.raises(RuntimeError):
        audit_services.log_event(db_session, "user.login", {"email": "x"}, critical=True)


def test_failed_audit_flush_keeps_caller_write(db_session):
    mentor = mentor_models.Mentor(name="Ms. Noura")
    db_session.add(mentor)
    db_session.flush()

    # Not JSON serialisable, so the audit INSERT fails at flush time.
    assert audit_services.log_event(db_session, "mentor.created", {"bad": object()}) is None
    db_session.commit()

    assert db_session.query(mentor_models.Mentor).filter_by(name="Ms. Noura").count() == 1
    assert db_session.query(audit_models.AuditLogEntry).count() == 0


def test_list_filters_and_clamps_limit(db_session):
    for i in range(3):
        audit_services.create_audit_event(
            db_session, data=audit_schemas.AuditEventCreate(event_type="a", payload={"i": i})
        )
    audit_services.create_audit_event(db_session, data=audit_schemas.AuditEventCreate(event_type="b"))
    db_session.commit()

    assert len(audit_services.list_audit_events(db_session, event_type="a")) == 3
    assert len(audit_services.list_audit_events(db_session, limit=0)) == 1
    assert len(audit_services.list_audit_events(db_session, limit=5000)) == 4
    assert db_session.query(audit_models.AuditLogEntry).count() == 4


def test_audit_routes(client):
    created = client.post("/api/audit", json={"eventType": "manual.note", "payload": {"k": "v"}})
    assert created.status_code == 201
    assert created.json()["eventType"] == "manual.note"

    client.post("/api/candidates", json={"name": "Audited"})

    manual = client.get("/api/audit", params={"eventType": "manual.note"}).json()
    assert [e["payload"] for e in manual] == [{"k": "v"}]
    created_events = client.get("/api/audit", params={"eventType": "candidate.created"}).json()
    assert created_events[0]["payload"]["name"] == "Audited"
