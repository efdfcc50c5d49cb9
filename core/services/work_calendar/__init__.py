from .backward import (
    overdue_days,
    overdue_working_minutes,
    remaining_working_minutes,
    working_minutes_between,
)
from .budget import DEFAULT_STEP_BUDGET, StepBudget
from .engine import WorkCalendarEngine
from .forward import compute_deadline
from .hold import HoldRecalculation, recalculate_after_hold
from .leave import overlap_minutes
from .projection import to_instant, to_local
from .service import WorkCalendarService

__all__ = [
    "DEFAULT_STEP_BUDGET",
    "StepBudget",
    "WorkCalendarEngine",
    "WorkCalendarService",
    "HoldRecalculation",
    "compute_deadline",
    "working_minutes_between",
    "remaining_working_minutes",
    "overdue_working_minutes",
    "overdue_days",
    "recalculate_after_hold",
    "overlap_minutes",
    "to_local",
    "to_instant",
]
