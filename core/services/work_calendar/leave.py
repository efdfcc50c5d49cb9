from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, List, Sequence

from core.models import LeaveRecord
from core.services.work_calendar.projection import to_local

_ZERO = timedelta(0)


@dataclass(frozen=True)
class LocalInterval:
    start: datetime
    end: datetime


def localize_leaves(leaves: Iterable[LeaveRecord], tz: str) -> List[LocalInterval]:
    return [LocalInterval(to_local(leave.start, tz), to_local(leave.end, tz)) for leave in leaves]


def leave_overlap(
    window_start: datetime,
    window_end: datetime,
    leaves: Sequence[LocalInterval],
) -> timedelta:
    """Summed overlap of each leave with the window; leaves are not merged."""
    total = _ZERO
    for leave in leaves:
        overlap = min(window_end, leave.end) - max(window_start, leave.start)
        if overlap > _ZERO:
            total += overlap
    return total


def overlap_minutes(
    window_start: datetime,
    window_end: datetime,
    leaves: Iterable[LeaveRecord],
    tz: str,
) -> float:
    """
    Minutes of approved leave inside a local wall-clock window.

    Leave instants are projected into ``tz`` before comparison.
    """
    local = localize_leaves(leaves, tz)
    return leave_overlap(window_start, window_end, local).total_seconds() / 60


def _clipped_and_merged(
    window_start: datetime,
    window_end: datetime,
    leaves: Sequence[LocalInterval],
) -> List[LocalInterval]:
    clipped = sorted(
        (
            LocalInterval(max(window_start, leave.start), min(window_end, leave.end))
            for leave in leaves
            if leave.end > window_start and leave.start < window_end
        ),
        key=lambda interval: interval.start,
    )
    merged: List[LocalInterval] = []
    for interval in clipped:
        if merged and interval.start <= merged[-1].end:
            if interval.end > merged[-1].end:
                merged[-1] = LocalInterval(merged[-1].start, interval.end)
            continue
        merged.append(interval)
    return merged


def locate_free_instant(
    window_start: datetime,
    window_end: datetime,
    remaining: timedelta,
    leaves: Sequence[LocalInterval],
) -> datetime:
    """
    Wall-clock instant inside the window at which ``remaining`` leave-free time
    has elapsed since ``window_start``.

    A zero ``remaining`` yields the first leave-free instant. The caller must
    make sure the window holds at least ``remaining`` free time.
    """
    position = window_start
    for leave in _clipped_and_merged(window_start, window_end, leaves):
        free = leave.start - position
        if free > _ZERO and remaining <= free:
            return position + remaining
        if free > _ZERO:
            remaining -= free
        position = max(position, leave.end)
    return position + remaining


__all__ = [
    "LocalInterval",
    "localize_leaves",
    "leave_overlap",
    "overlap_minutes",
    "locate_free_instant",
]
