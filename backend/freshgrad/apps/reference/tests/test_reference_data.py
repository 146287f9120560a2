from __future__ import annotations

from freshgrad.apps.reference import models as reference_models
from freshgrad.apps.reference import services as reference_services


def test_seed_is_idempotent(db_session):
    # init_schema already seeded once.
    assert reference_services.seed_reference_data(db_session) == 0
    assert db_session.query(reference_models.Track).count() == 3
    assert db_session.query(reference_models.CandidateStatusInfo).count() == 12


def test_track_names(db_session):
    assert reference_services.track_names(db_session) == {
        "t1": "STEM Core",
        "t2": "Languages",
        "t3": "ICT",
    }


def test_reference_routes(client):
    tracks = client.get("/api/reference/tracks").json()
    statuses = client.get("/api/reference/statuses").json()

    assert tracks[1] == {"id": "t2", "name": "Languages", "minAverage": 75}
    assert statuses[0]["status"] == "Imported"
    assert statuses[-1] == {
        "status": "Rejected",
        "displayOrder": 12,
        "stageIndex": 0,
        "colorClass": "bg-red-100 text-red-800",
    }
