from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable

from core.exceptions import InvalidTimeRangeError, ValidationError
from core.models import CalendarConfig, LeaveRecord
from core.services.work_calendar.budget import DEFAULT_STEP_BUDGET, StepBudget
from core.services.work_calendar.leave import leave_overlap, localize_leaves
from core.services.work_calendar.projection import ensure_aware, to_local
from core.services.work_calendar.windows import iter_working_windows

_ZERO = timedelta(0)


def working_minutes_between(
    from_instant: datetime,
    to_instant: datetime,
    calendar: CalendarConfig,
    leaves: Iterable[LeaveRecord] = (),
    *,
    budget: StepBudget = DEFAULT_STEP_BUDGET,
    require_order: bool = False,
) -> float:
    """
    Working minutes between two instants under the calendar, minus leave.

    Walks the same windows as compute_deadline, so the two are inverse of each
    other. A reversed range counts as zero unless ``require_order`` is set, in
    which case it is rejected.
    """
    from_instant = ensure_aware(from_instant)
    to_instant = ensure_aware(to_instant)
    if to_instant < from_instant and require_order:
        raise InvalidTimeRangeError(
            "Range end must not precede its start.",
            code="INVALID_TIME_RANGE",
        )
    if to_instant <= from_instant:
        return 0.0
    calendar.validate()

    tz = calendar.timezone
    local_leaves = localize_leaves(leaves, tz)
    end_local = to_local(to_instant, tz)
    total = _ZERO

    for window in iter_working_windows(to_local(from_instant, tz), calendar, budget, until=end_local):
        clipped_end = min(window.end, end_local)
        worked = (clipped_end - window.start) - leave_overlap(window.start, clipped_end, local_leaves)
        if worked > _ZERO:
            total += worked
        if window.end >= end_local:
            break

    return total.total_seconds() / 60


def remaining_working_minutes(
    now: datetime,
    deadline: datetime,
    calendar: CalendarConfig,
    leaves: Iterable[LeaveRecord] = (),
    *,
    budget: StepBudget = DEFAULT_STEP_BUDGET,
) -> float:
    if ensure_aware(deadline) <= ensure_aware(now):
        return 0.0
    return working_minutes_between(now, deadline, calendar, leaves, budget=budget)


def overdue_working_minutes(
    now: datetime,
    deadline: datetime,
    calendar: CalendarConfig,
    leaves: Iterable[LeaveRecord] = (),
    *,
    budget: StepBudget = DEFAULT_STEP_BUDGET,
) -> float:
    if ensure_aware(now) <= ensure_aware(deadline):
        return 0.0
    return working_minutes_between(deadline, now, calendar, leaves, budget=budget)


def overdue_days(overdue_minutes: float, sla_hours_per_day: float) -> float:
    if sla_hours_per_day <= 0:
        raise ValidationError(
            "SLA hours per day must be positive.",
            code="INVALID_SLA_HOURS_PER_DAY",
        )
    return overdue_minutes / (sla_hours_per_day * 60)


__all__ = [
    "working_minutes_between",
    "remaining_working_minutes",
    "overdue_working_minutes",
    "overdue_days",
]
