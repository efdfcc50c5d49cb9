from __future__ import annotations

import math
from datetime import datetime
from typing import Iterable, Optional

from core.models import CalendarConfig, LeaveRecord, SlaState
from core.services.sla.models import SlaStatus
from core.services.work_calendar.backward import overdue_days
from core.services.work_calendar.engine import WorkCalendarEngine
from core.services.work_calendar.projection import ensure_aware

URGENT_THRESHOLD_MINUTES = 120
ACK_WINDOW_MINUTES = 30


def format_working_minutes(minutes: float) -> str:
    """Render working minutes as "Xh Ym", rounding down."""
    whole = max(0, int(math.floor(minutes)))
    return f"{whole // 60}h {whole % 60}m"


def build_sla_status(
    now: datetime,
    deadline: datetime,
    calendar: CalendarConfig,
    leaves: Iterable[LeaveRecord] = (),
    sla_hours: float = 0.0,
    engine: Optional[WorkCalendarEngine] = None,
    sla_hours_per_day: Optional[float] = None,
) -> SlaStatus:
    engine = engine or WorkCalendarEngine()
    leaves = list(leaves)
    if sla_hours_per_day is None:
        sla_hours_per_day = calendar.primary_shift.duration_minutes / 60

    if ensure_aware(deadline) <= ensure_aware(now):
        overdue = engine.overdue_working_minutes(now, deadline, calendar, leaves)
        return SlaStatus(
            state=SlaState.OVERDUE,
            remaining_minutes=0.0,
            overdue_minutes=overdue,
            overdue_days=overdue_days(overdue, sla_hours_per_day),
            total_working_minutes=overdue + (sla_hours or 0) * 60,
            label=f"{format_working_minutes(overdue)} overdue",
        )

    remaining = engine.remaining_working_minutes(now, deadline, calendar, leaves)
    state = SlaState.URGENT if remaining < URGENT_THRESHOLD_MINUTES else SlaState.ON_TRACK
    return SlaStatus(
        state=state,
        remaining_minutes=remaining,
        overdue_minutes=0.0,
        overdue_days=0.0,
        total_working_minutes=(sla_hours or 0) * 60,
        label=f"{format_working_minutes(remaining)} left",
    )


def is_acknowledgement_late(
    now: datetime,
    ack_deadline: datetime,
    calendar: CalendarConfig,
    leaves: Iterable[LeaveRecord] = (),
    engine: Optional[WorkCalendarEngine] = None,
) -> bool:
    # Late on the wall clock, or no working minutes left before the deadline.
    if ensure_aware(ack_deadline) < ensure_aware(now):
        return True
    engine = engine or WorkCalendarEngine()
    return engine.remaining_working_minutes(now, ack_deadline, calendar, leaves) <= 0


__all__ = [
    "URGENT_THRESHOLD_MINUTES",
    "ACK_WINDOW_MINUTES",
    "format_working_minutes",
    "build_sla_status",
    "is_acknowledgement_late",
]
