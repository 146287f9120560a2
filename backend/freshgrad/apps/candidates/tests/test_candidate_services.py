from __future__ import annotations

from datetime import date

import pytest

from freshgrad.apps.audit import models as audit_models
from freshgrad.apps.candidates import models as candidate_models
from freshgrad.apps.candidates import schemas as candidate_schemas
from freshgrad.apps.candidates import services as candidate_services
from freshgrad.apps.mentors import models as mentor_models
from freshgrad.errors import NotFoundError, ValidationError


def _create(db_session, **fields):
    body = {"name": "Aisha", **fields}
    candidate = candidate_services.create_candidate(
        db_session, candidate_schemas.CandidateCreate.model_validate(body)
    )
    db_session.commit()
    db_session.refresh(candidate)
    return candidate


def _read(candidate) -> dict:
    return candidate_schemas.CandidateRead.model_validate(candidate).model_dump(by_alias=True)


def test_create_applies_defaults(db_session):
    candidate = _create(db_session, subject="Math")

    assert candidate.id.startswith("C-")
    assert candidate.status == candidate_models.CandidateStatus.IMPORTED
    assert candidate.track_id == candidate_models.TrackId.T1
    assert candidate.gpa == 0
    assert candidate.sponsor is None
    assert candidate.extensions == {}


def test_create_then_fetch_is_identical(db_session):
    created = _create(
        db_session,
        email="aisha@example.com",
        trackId="t2",
        status="Eligible",
        sponsor="MOE",
        gpa=3.4,
        enrollments=[{"courseCode": "EDU101", "startDate": "2025-01-05"}],
        courseResults=[{"courseCode": "EDU101", "score": 88, "pass": True}],
        notesThread=[{"text": "Imported", "author": "admin@example.com", "role": "Admin"}],
    )
    before = _read(created)

    db_session.expire_all()
    fetched = candidate_services.get_candidate(db_session, created.id)

    assert _read(fetched) == before
    assert before["enrollments"][0]["courseCode"] == "EDU101"
    assert before["enrollments"][0]["startDate"] == date(2025, 1, 5)
    assert before["courseResults"][0]["pass"] is True
    assert before["notesThread"][0]["author"] == "admin@example.com"


def test_unknown_fields_go_to_extensions(db_session):
    candidate = _create(
        db_session,
        cohort="2025A",
        extensions={"university": "UAEU"},
    )

    assert candidate.extensions == {"university": "UAEU", "cohort": "2025A"}
    # Core fields are never overwritten by extension keys.
    assert candidate.name == "Aisha"


def test_partial_update_preserves_absent_fields(db_session):
    candidate = _create(db_session, subject="Math", emirate="Dubai", hometown="Hatta")

    updated = candidate_services.update_candidate(
        db_session,
        candidate.id,
        candidate_schemas.CandidateUpdate.model_validate({"status": "Eligible"}),
    )
    db_session.commit()

    assert updated.status == candidate_models.CandidateStatus.ELIGIBLE
    assert updated.name == "Aisha"
    assert updated.subject == "Math"
    assert updated.emirate == "Dubai"
    assert updated.extensions == {"hometown": "Hatta"}


def test_update_replaces_extensions_only_when_sent(db_session):
    candidate = _create(db_session, hometown="Hatta", cohort="2025A")

    candidate_services.update_candidate(
        db_session,
        candidate.id,
        candidate_schemas.CandidateUpdate.model_validate({"mobile": "0500000000"}),
    )
    assert candidate.extensions == {"hometown": "Hatta", "cohort": "2025A"}

    candidate_services.update_candidate(
        db_session,
        candidate.id,
        candidate_schemas.CandidateUpdate.model_validate({"cohort": "2025B"}),
    )
    db_session.commit()
    assert candidate.extensions == {"cohort": "2025B"}


def test_explicit_null_clears_nullable_field(db_session):
    candidate = _create(db_session, subject="Math", sponsor="Mawaheb")

    candidate_services.update_candidate(
        db_session,
        candidate.id,
        candidate_schemas.CandidateUpdate.model_validate({"sponsor": None, "subject": None}),
    )
    db_session.commit()

    assert candidate.sponsor is None
    assert candidate.subject is None
    assert candidate.name == "Aisha"


def test_null_on_required_field_is_rejected(db_session):
    candidate = _create(db_session)

    with pytest.raises(ValidationError):
        candidate_services.update_candidate(
            db_session,
            candidate.id,
            candidate_schemas.CandidateUpdate.model_validate({"status": None}),
        )


def test_status_change_is_audited(db_session):
    candidate = _create(db_session)

    candidate_services.update_candidate(
        db_session,
        candidate.id,
        candidate_schemas.CandidateUpdate(status=candidate_models.CandidateStatus.ASSIGNED),
    )
    db_session.commit()

    events = (
        db_session.query(audit_models.AuditLogEntry)
        .filter(audit_models.AuditLogEntry.event_type == "candidate.status_changed")
        .all()
    )
    assert len(events) == 1
    assert events[0].payload["from"] == "Imported"
    assert events[0].payload["to"] == "Assigned"


def test_update_missing_candidate(db_session):
    with pytest.raises(NotFoundError):
        candidate_services.update_candidate(
            db_session, "C-missing", candidate_schemas.CandidateUpdate(name="X")
        )


def test_delete_cascades_to_owned_rows(db_session):
    candidate = _create(
        db_session,
        enrollments=[{"courseCode": "EDU101"}, {"courseCode": "EDU102"}],
        courseResults=[{"courseCode": "EDU101", "score": 70}],
        notesThread=[{"text": "hi", "author": "a@b.c", "role": "Admin"}],
    )
    candidate_id = candidate.id

    candidate_services.delete_candidate(db_session, candidate_id)
    db_session.commit()

    assert candidate_services.get_candidate(db_session, candidate_id) is None
    for model in (
        candidate_models.CandidateEnrollment,
        candidate_models.CandidateCourseResult,
        candidate_models.CandidateNote,
    ):
        assert db_session.query(model).filter(model.candidate_id == candidate_id).count() == 0


def test_enrollment_mentor_snapshot(db_session):
    mentor = mentor_models.Mentor(name="Mr. Salem", email="salem@school.ae", contact="0501112222")
    db_session.add(mentor)
    db_session.commit()

    candidate = _create(
        db_session,
        enrollments=[{"courseCode": "INT900", "isInternship": True, "mentorId": mentor.id}],
    )

    enrollment = candidate.enrollments[0]
    assert enrollment.mentor_name == "Mr. Salem"
    assert enrollment.mentor_email == "salem@school.ae"
    assert enrollment.mentor_contact == "0501112222"


def test_enrollment_with_unknown_mentor_is_rejected(db_session):
    with pytest.raises(ValidationError):
        candidate_services.create_candidate(
            db_session,
            candidate_schemas.CandidateCreate.model_validate(
                {"name": "X", "enrollments": [{"courseCode": "INT900", "mentorId": "M-nope"}]}
            ),
        )


def test_add_note_appends_in_order(db_session):
    candidate = _create(db_session, notesThread=[{"text": "first", "author": "a@b.c", "role": "Admin"}])

    candidate_services.add_note(
        db_session,
        candidate.id,
        candidate_schemas.NoteCreate(text="second", author="t@b.c", role="ECAE Trainer"),
    )
    db_session.commit()
    db_session.refresh(candidate)

    assert [n.text for n in candidate.notes_thread] == ["first", "second"]
    assert candidate.notes_thread[1].timestamp is not None


def test_summary_counts_and_track_name(db_session):
    _create(
        db_session,
        trackId="t3",
        enrollments=[{"courseCode": "ICT1"}],
        notesThread=[
            {"text": "a", "author": "x", "role": "Admin"},
            {"text": "b", "author": "x", "role": "Admin"},
        ],
    )

    [summary] = candidate_services.list_candidate_summaries(db_session)

    assert summary.track_name == "ICT"
    assert summary.enrollment_count == 1
    assert summary.result_count == 0
    assert summary.note_count == 2
    assert summary.stage_index == 0


def test_list_filters(db_session):
    _create(db_session, name="A", sponsor="MOE", emirate="Dubai")
    _create(db_session, name="B", sponsor="MBZUH", status="Eligible")

    assert [c.name for c in candidate_services.list_candidates(
        db_session, sponsor=candidate_models.Sponsor.MOE
    )] == ["A"]
    assert [c.name for c in candidate_services.list_candidates(
        db_session, status=candidate_models.CandidateStatus.ELIGIBLE
    )] == ["B"]
    assert [c.name for c in candidate_services.list_candidates(db_session, emirate="Dubai")] == ["A"]


def test_server_owned_keys_never_become_extensions(db_session):
    candidate = _create(db_session, id="C-client", created_at="2020-01-01", hometown="Hatta")

    assert candidate.id != "C-client"
    assert candidate.extensions == {"hometown": "Hatta"}

    candidate_services.update_candidate(
        db_session,
        candidate.id,
        candidate_schemas.CandidateUpdate.model_validate(
            {"id": candidate.id, "createdAt": "2020-01-01", "updatedAt": "2020-01-02"}
        ),
    )
    db_session.commit()

    assert candidate.extensions == {"hometown": "Hatta"}
