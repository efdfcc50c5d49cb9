from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from core.models import CalendarConfig, LeaveRecord
from core.services.work_calendar.backward import working_minutes_between
from core.services.work_calendar.budget import DEFAULT_STEP_BUDGET, StepBudget
from core.services.work_calendar.forward import compute_deadline
from core.services.work_calendar.projection import ensure_aware


@dataclass(frozen=True)
class HoldRecalculation:
    held_at: datetime
    resumed_at: datetime
    remaining_minutes: float
    deadline: datetime


def recalculate_after_hold(
    held_at: datetime,
    original_deadline: datetime,
    resume_at: datetime,
    calendar: CalendarConfig,
    leaves_at_hold: Iterable[LeaveRecord] = (),
    leaves_at_resume: Iterable[LeaveRecord] = (),
    *,
    budget: StepBudget = DEFAULT_STEP_BUDGET,
) -> HoldRecalculation:
    """
    New deadline for work that was paused at ``held_at`` and resumes at ``resume_at``.

    Only the working minutes still left before the original deadline carry
    over. A deadline already breached at hold time carries zero minutes, so
    the new deadline is the first working instant at or after the resume.
    """
    held_at = ensure_aware(held_at)
    original_deadline = ensure_aware(original_deadline)
    resume_at = ensure_aware(resume_at)

    remaining = 0.0
    if original_deadline > held_at:
        remaining = max(
            0.0,
            working_minutes_between(
                held_at, original_deadline, calendar, leaves_at_hold, budget=budget
            ),
        )

    deadline = compute_deadline(resume_at, remaining, calendar, leaves_at_resume, budget=budget)
    return HoldRecalculation(
        held_at=held_at,
        resumed_at=resume_at,
        remaining_minutes=remaining,
        deadline=deadline,
    )


__all__ = ["HoldRecalculation", "recalculate_after_hold"]
