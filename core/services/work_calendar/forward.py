from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Iterable

from core.exceptions import CalendarUnsatisfiableError, ValidationError
from core.models import CalendarConfig, LeaveRecord
from core.services.work_calendar.budget import DEFAULT_STEP_BUDGET, StepBudget
from core.services.work_calendar.leave import leave_overlap, locate_free_instant, localize_leaves
from core.services.work_calendar.projection import to_instant, to_local
from core.services.work_calendar.windows import iter_working_windows

_ZERO = timedelta(0)
MAX_DURATION_MINUTES = timedelta.max.days * 24 * 60


def compute_deadline(
    start_instant: datetime,
    duration_minutes: float,
    calendar: CalendarConfig,
    leaves: Iterable[LeaveRecord] = (),
    *,
    budget: StepBudget = DEFAULT_STEP_BUDGET,
) -> datetime:
    """
    Instant at which ``duration_minutes`` of working time have accumulated
    after ``start_instant``.

    Working time is shift time on the calendar's working days minus approved
    leave. A zero duration returns the first leave-free working instant at or
    after the start rather than the start itself.
    """
    if duration_minutes is None or not math.isfinite(duration_minutes) or duration_minutes < 0:
        raise ValidationError(
            f"SLA duration must be a non-negative number of minutes, got {duration_minutes!r}.",
            code="INVALID_SLA_DURATION",
        )
    if duration_minutes > MAX_DURATION_MINUTES:
        raise ValidationError(
            f"SLA duration of {duration_minutes!r} minutes is too large.",
            code="INVALID_SLA_DURATION",
        )
    calendar.validate()

    tz = calendar.timezone
    local_leaves = localize_leaves(leaves, tz)
    remaining = timedelta(minutes=duration_minutes)

    for window in iter_working_windows(to_local(start_instant, tz), calendar, budget):
        usable = window.length - leave_overlap(window.start, window.end, local_leaves)
        if usable <= _ZERO:
            continue
        if remaining <= usable:
            landing = locate_free_instant(window.start, window.end, remaining, local_leaves)
            return to_instant(landing, tz)
        remaining -= usable

    raise CalendarUnsatisfiableError(
        "Working calendar walk ended without reaching the deadline.",
        code="CALENDAR_UNSATISFIABLE",
    )


__all__ = ["MAX_DURATION_MINUTES", "compute_deadline"]
