from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from freshgrad.database import get_db
from . import schemas, services

router = APIRouter(prefix="/api/reference", tags=["reference"])


@router.get("/tracks", response_model=List[schemas.TrackRead])
def list_tracks(db: Session = Depends(get_db)):
    return services.list_tracks(db)


@router.get("/statuses", response_model=List[schemas.StatusInfoRead])
def list_statuses(db: Session = Depends(get_db)):
    return services.list_statuses(db)
