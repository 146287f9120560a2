from __future__ import annotations

from typing import Optional

from freshgrad.schemas import CamelModel


class TrackRead(CamelModel):
    id: str
    name: str
    min_average: int


class StatusInfoRead(CamelModel):
    status: str
    display_order: int
    stage_index: int
    color_class: Optional[str] = None
