from __future__ import annotations

import pytest

from freshgrad.apps.candidates import lifecycle
from freshgrad.apps.candidates import schemas as candidate_schemas
from freshgrad.apps.candidates import services as candidate_services
from freshgrad.apps.candidates.models import CandidateStatus
from freshgrad.errors import ValidationError


def test_status_table_covers_every_status_in_order():
    assert [info.status for info in lifecycle.STATUS_TABLE] == list(CandidateStatus)
    assert [info.display_order for info in lifecycle.STATUS_TABLE] == list(range(1, 13))


@pytest.mark.parametrize(
    "status,stage",
    [
        ("Imported", 0),
        ("Assigned", 1),
        ("In Training", 2),
        ("Courses Completed", 2),
        ("Assessed", 2),
        ("Graduated", 3),
        ("Hired/Closed", 4),
        ("On Hold", 1),
        ("Rejected", 0),
    ],
)
def test_stage_index(status, stage):
    assert lifecycle.stage_index(status) == stage


def test_transitions_not_enforced_by_default():
    lifecycle.check_transition(CandidateStatus.IMPORTED, CandidateStatus.GRADUATED, enforce=False)


def test_enforced_transitions():
    lifecycle.check_transition("Imported", "Eligible", enforce=True)
    lifecycle.check_transition("In Training", "On Hold", enforce=True)
    lifecycle.check_transition("Graduated", "Graduated", enforce=True)

    with pytest.raises(ValidationError) as exc:
        lifecycle.check_transition("Imported", "Graduated", enforce=True)
    assert str(exc.value) == "Cannot transition from Imported to Graduated"

    with pytest.raises(ValidationError):
        lifecycle.check_transition("Hired/Closed", "Imported", enforce=True)


def test_update_honours_enforcement_flag(db_session, monkeypatch):
    candidate = candidate_services.create_candidate(
        db_session, candidate_schemas.CandidateCreate(name="Z")
    )
    db_session.commit()
    monkeypatch.setattr(lifecycle, "ENFORCE_STATUS_TRANSITIONS", True)

    with pytest.raises(ValidationError):
        candidate_services.update_candidate(
            db_session,
            candidate.id,
            candidate_schemas.CandidateUpdate(status=CandidateStatus.GRADUATED),
        )

    updated = candidate_services.update_candidate(
        db_session,
        candidate.id,
        candidate_schemas.CandidateUpdate(status=CandidateStatus.ELIGIBLE),
    )
    assert updated.status == CandidateStatus.ELIGIBLE
