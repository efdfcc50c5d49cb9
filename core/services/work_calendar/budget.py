from __future__ import annotations

from dataclasses import dataclass

from core.exceptions import CalendarUnsatisfiableError, ValidationError

# Roughly two calendar years of day-steps.
DEFAULT_MAX_DAY_STEPS = 731


@dataclass(frozen=True)
class StepBudget:
    """
    Upper bound on the calendar days a single walk may step through.

    Sparse calendars (one working day a month, long leaves) may need a larger
    budget; callers that prefer failing fast can lower it.
    """

    max_day_steps: int = DEFAULT_MAX_DAY_STEPS

    def __post_init__(self) -> None:
        if self.max_day_steps < 1:
            raise ValidationError(
                "Step budget must allow at least one day-step.",
                code="INVALID_STEP_BUDGET",
            )

    def check(self, day_steps: int) -> None:
        if day_steps > self.max_day_steps:
            raise CalendarUnsatisfiableError(
                f"Working calendar walk exceeded {self.max_day_steps} day-steps.",
                code="CALENDAR_UNSATISFIABLE",
            )


DEFAULT_STEP_BUDGET = StepBudget()


__all__ = ["DEFAULT_MAX_DAY_STEPS", "DEFAULT_STEP_BUDGET", "StepBudget"]
