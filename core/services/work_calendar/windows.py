from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterator, Optional

from core.models import CalendarConfig
from core.services.work_calendar.budget import DEFAULT_STEP_BUDGET, StepBudget

_ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class WorkingWindow:
    """A contiguous stretch of shift time on the local wall clock, end exclusive."""

    start: datetime
    end: datetime

    @property
    def length(self) -> timedelta:
        return self.end - self.start


def at_minute(day: date, minute_of_day: int) -> datetime:
    return datetime.combine(day, time()) + timedelta(minutes=minute_of_day)


def shift_start_on(calendar: CalendarConfig, day: date) -> datetime:
    return at_minute(day, calendar.shift_for(day.isoweekday()).start_minute)


def iter_working_windows(
    start: datetime,
    calendar: CalendarConfig,
    budget: StepBudget = DEFAULT_STEP_BUDGET,
    until: Optional[datetime] = None,
) -> Iterator[WorkingWindow]:
    """
    Yield consecutive shift windows on the local wall clock, starting at ``start``.

    The first window may begin mid-shift. Non-working days and off-shift hours
    are skipped; every move onto a later calendar day is charged against the
    budget. An overnight shift belongs to the day it starts on, so its
    post-midnight part is yielded together with the evening part.

    Without ``until`` the iterator only ends by raising
    CalendarUnsatisfiableError once the budget is exhausted.
    """
    cursor = start
    day_steps = 0

    while until is None or cursor < until:
        day = cursor.date()
        weekday = day.isoweekday()

        if not calendar.is_working_day(weekday):
            day_steps += 1
            budget.check(day_steps)
            cursor = shift_start_on(calendar, day + _ONE_DAY)
            continue

        shift = calendar.shift_for(weekday)
        shift_start = at_minute(day, shift.start_minute)

        if shift.overnight:
            early_end = at_minute(day, shift.end_minute)
            # Pre-dawn start counts as this day's shift even after a day off; a walk
            # arriving from that day off skips it, so totals are not additive here.
            if cursor < early_end:
                yield WorkingWindow(cursor, early_end)
                cursor = shift_start
                continue
            if cursor < shift_start:
                cursor = shift_start
                continue
            window_end = at_minute(day + _ONE_DAY, shift.end_minute)
        else:
            if cursor < shift_start:
                cursor = shift_start
                continue
            window_end = at_minute(day, shift.end_minute)
            if cursor >= window_end:
                day_steps += 1
                budget.check(day_steps)
                cursor = shift_start_on(calendar, day + _ONE_DAY)
                continue

        yield WorkingWindow(cursor, window_end)

        day_steps += 1
        budget.check(day_steps)
        # A Saturday override may start before the previous overnight shift ends.
        cursor = max(shift_start_on(calendar, day + _ONE_DAY), window_end)


__all__ = ["WorkingWindow", "at_minute", "shift_start_on", "iter_working_windows"]
