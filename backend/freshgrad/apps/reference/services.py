from __future__ import annotations

from typing import List, Sequence

from sqlalchemy.orm import Session

from freshgrad.apps.candidates.lifecycle import STATUS_TABLE
from freshgrad.apps.candidates.models import TrackId
from . import models

TRACKS = [
    (TrackId.T1.value, "STEM Core", 70),
    (TrackId.T2.value, "Languages", 75),
    (TrackId.T3.value, "ICT", 70),
]


def seed_reference_data(db: Session) -> int:
    """
    Insert missing tracks and status rows. Existing rows are left alone, so
    this is safe to run on every start. Returns the number of rows added.
    """
    added = 0

    existing_tracks = {row.id for row in db.query(models.Track.id).all()}
    for track_id, name, min_average in TRACKS:
        if track_id in existing_tracks:
            continue
        db.add(models.Track(id=track_id, name=name, min_average=min_average))
        added += 1

    existing_statuses = {row.status for row in db.query(models.CandidateStatusInfo.status).all()}
    for info in STATUS_TABLE:
        if info.status.value in existing_statuses:
            continue
        db.add(
            models.CandidateStatusInfo(
                status=info.status.value,
                display_order=info.display_order,
                stage_index=info.stage_index,
                color_class=info.color_class,
            )
        )
        added += 1

    db.flush()
    return added


def list_tracks(db: Session) -> Sequence[models.Track]:
    return db.query(models.Track).order_by(models.Track.id.asc()).all()


def list_statuses(db: Session) -> List[models.CandidateStatusInfo]:
    return (
        db.query(models.CandidateStatusInfo)
        .order_by(models.CandidateStatusInfo.display_order.asc())
        .all()
    )


def track_names(db: Session) -> dict:
    return {track.id: track.name for track in list_tracks(db)}
