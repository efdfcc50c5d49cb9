# core/services/work_calendar/engine.py
from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from core.models import CalendarConfig, LeaveRecord
from core.services.work_calendar.backward import (
    overdue_working_minutes,
    remaining_working_minutes,
    working_minutes_between,
)
from core.services.work_calendar.budget import DEFAULT_STEP_BUDGET, StepBudget
from core.services.work_calendar.forward import compute_deadline
from core.services.work_calendar.hold import HoldRecalculation, recalculate_after_hold


class WorkCalendarEngine:
    """
    Deadline arithmetic over a working calendar.
    Stateless apart from the step budget, so one instance can be shared.
    """

    def __init__(self, budget: Optional[StepBudget] = None):
        self._budget: StepBudget = budget or DEFAULT_STEP_BUDGET

    @property
    def budget(self) -> StepBudget:
        return self._budget

    def compute_deadline(
        self,
        start: datetime,
        duration_minutes: float,
        calendar: CalendarConfig,
        leaves: Iterable[LeaveRecord] = (),
    ) -> datetime:
        return compute_deadline(start, duration_minutes, calendar, leaves, budget=self._budget)

    def working_minutes_between(
        self,
        from_instant: datetime,
        to_instant: datetime,
        calendar: CalendarConfig,
        leaves: Iterable[LeaveRecord] = (),
        require_order: bool = False,
    ) -> float:
        return working_minutes_between(
            from_instant,
            to_instant,
            calendar,
            leaves,
            budget=self._budget,
            require_order=require_order,
        )

    def remaining_working_minutes(
        self,
        now: datetime,
        deadline: datetime,
        calendar: CalendarConfig,
        leaves: Iterable[LeaveRecord] = (),
    ) -> float:
        return remaining_working_minutes(now, deadline, calendar, leaves, budget=self._budget)

    def overdue_working_minutes(
        self,
        now: datetime,
        deadline: datetime,
        calendar: CalendarConfig,
        leaves: Iterable[LeaveRecord] = (),
    ) -> float:
        return overdue_working_minutes(now, deadline, calendar, leaves, budget=self._budget)

    def recalculate_after_hold(
        self,
        held_at: datetime,
        original_deadline: datetime,
        resume_at: datetime,
        calendar: CalendarConfig,
        leaves_at_hold: Iterable[LeaveRecord] = (),
        leaves_at_resume: Iterable[LeaveRecord] = (),
    ) -> HoldRecalculation:
        return recalculate_after_hold(
            held_at,
            original_deadline,
            resume_at,
            calendar,
            leaves_at_hold,
            leaves_at_resume,
            budget=self._budget,
        )
