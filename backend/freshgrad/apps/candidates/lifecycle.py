# backend/freshgrad/apps/candidates/lifecycle.py
"""
Candidate status lifecycle.

Status is a single value from a fixed, totally ordered set. Each status also
carries a coarser "stage index" used by the front end to group statuses into
five phases, and a display colour class.

By default any status may follow any other. When ENFORCE_STATUS_TRANSITIONS
is enabled, `check_transition` rejects moves missing from TRANSITIONS.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional

from freshgrad.errors import ValidationError
from .models import CandidateStatus

ENFORCE_STATUS_TRANSITIONS = os.getenv("ENFORCE_STATUS_TRANSITIONS", "false").lower() in {
    "1",
    "true",
    "yes",
    "on",
}


@dataclass(frozen=True)
class StatusInfo:
    status: CandidateStatus
    display_order: int
    stage_index: int
    color_class: str


STATUS_TABLE: List[StatusInfo] = [
    StatusInfo(CandidateStatus.IMPORTED, 1, 0, "bg-slate-100 text-slate-800"),
    StatusInfo(CandidateStatus.ELIGIBLE, 2, 0, "bg-sky-100 text-sky-800"),
    StatusInfo(CandidateStatus.ASSIGNED, 3, 1, "bg-indigo-100 text-indigo-800"),
    StatusInfo(CandidateStatus.IN_TRAINING, 4, 2, "bg-amber-100 text-amber-800"),
    StatusInfo(CandidateStatus.COURSES_COMPLETED, 5, 2, "bg-emerald-100 text-emerald-800"),
    StatusInfo(CandidateStatus.ASSESSED, 6, 2, "bg-teal-100 text-teal-800"),
    StatusInfo(CandidateStatus.GRADUATED, 7, 3, "bg-green-100 text-green-800"),
    StatusInfo(CandidateStatus.READY_FOR_HIRING, 8, 4, "bg-lime-100 text-lime-800"),
    StatusInfo(CandidateStatus.HIRED_CLOSED, 9, 4, "bg-gray-200 text-gray-800"),
    StatusInfo(CandidateStatus.ON_HOLD, 10, 1, "bg-orange-100 text-orange-800"),
    StatusInfo(CandidateStatus.WITHDRAWN, 11, 0, "bg-rose-100 text-rose-800"),
    StatusInfo(CandidateStatus.REJECTED, 12, 0, "bg-red-100 text-red-800"),
]

STATUS_INFO: Dict[CandidateStatus, StatusInfo] = {info.status: info for info in STATUS_TABLE}

# Exits available from every non-closed status.
_SIDE_EXITS = {CandidateStatus.ON_HOLD, CandidateStatus.WITHDRAWN, CandidateStatus.REJECTED}

TRANSITIONS: Dict[CandidateStatus, FrozenSet[CandidateStatus]] = {
    CandidateStatus.IMPORTED: frozenset({CandidateStatus.ELIGIBLE} | _SIDE_EXITS),
    CandidateStatus.ELIGIBLE: frozenset({CandidateStatus.ASSIGNED} | _SIDE_EXITS),
    CandidateStatus.ASSIGNED: frozenset({CandidateStatus.IN_TRAINING} | _SIDE_EXITS),
    CandidateStatus.IN_TRAINING: frozenset({CandidateStatus.COURSES_COMPLETED} | _SIDE_EXITS),
    CandidateStatus.COURSES_COMPLETED: frozenset({CandidateStatus.ASSESSED} | _SIDE_EXITS),
    CandidateStatus.ASSESSED: frozenset({CandidateStatus.GRADUATED} | _SIDE_EXITS),
    CandidateStatus.GRADUATED: frozenset({CandidateStatus.READY_FOR_HIRING} | _SIDE_EXITS),
    CandidateStatus.READY_FOR_HIRING: frozenset({CandidateStatus.HIRED_CLOSED} | _SIDE_EXITS),
    CandidateStatus.HIRED_CLOSED: frozenset(),
    CandidateStatus.ON_HOLD: frozenset(
        {
            CandidateStatus.ELIGIBLE,
            CandidateStatus.ASSIGNED,
            CandidateStatus.IN_TRAINING,
            CandidateStatus.WITHDRAWN,
            CandidateStatus.REJECTED,
        }
    ),
    CandidateStatus.WITHDRAWN: frozenset({CandidateStatus.IMPORTED}),
    CandidateStatus.REJECTED: frozenset({CandidateStatus.IMPORTED}),
}


def stage_index(status: CandidateStatus | str) -> int:
    return STATUS_INFO[CandidateStatus(status)].stage_index


def is_allowed(from_status: CandidateStatus | str, to_status: CandidateStatus | str) -> bool:
    src = CandidateStatus(from_status)
    dst = CandidateStatus(to_status)
    if src == dst:
        return True
    return dst in TRANSITIONS.get(src, frozenset())


def check_transition(
    from_status: CandidateStatus | str,
    to_status: CandidateStatus | str,
    *,
    enforce: Optional[bool] = None,
) -> None:
    enforce = ENFORCE_STATUS_TRANSITIONS if enforce is None else enforce
    if not enforce:
        return
    if not is_allowed(from_status, to_status):
        raise ValidationError(
            f"Cannot transition from {CandidateStatus(from_status).value} "
            f"to {CandidateStatus(to_status).value}"
        )
