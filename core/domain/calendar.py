from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from core.domain.identifiers import generate_id
from core.exceptions import InvalidCalendarError

MINUTES_PER_DAY = 24 * 60
SATURDAY = 6

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2})?$")


def time_to_minutes(value: str) -> int:
    """Parse an "HH:MM" (or "HH:MM:SS") wall-clock string into minutes from midnight."""
    match = _TIME_RE.match((value or "").strip())
    if not match:
        raise InvalidCalendarError(
            f"Invalid shift time {value!r}; expected HH:MM.",
            code="INVALID_SHIFT_TIME",
        )
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise InvalidCalendarError(
            f"Invalid shift time {value!r}; expected HH:MM.",
            code="INVALID_SHIFT_TIME",
        )
    return hours * 60 + minutes


@dataclass(frozen=True)
class ShiftWindow:
    """Daily shift bounds in minutes from local midnight, end exclusive."""

    start_minute: int
    end_minute: int

    @property
    def overnight(self) -> bool:
        return self.end_minute <= self.start_minute

    @property
    def duration_minutes(self) -> int:
        if self.overnight:
            return MINUTES_PER_DAY - self.start_minute + self.end_minute
        return self.end_minute - self.start_minute

    def contains(self, minute_of_day: int) -> bool:
        if self.overnight:
            return minute_of_day >= self.start_minute or minute_of_day < self.end_minute
        return self.start_minute <= minute_of_day < self.end_minute

    def minutes_until_end(self, minute_of_day: int) -> int:
        if not self.contains(minute_of_day):
            return 0
        if self.overnight and minute_of_day >= self.start_minute:
            return MINUTES_PER_DAY - minute_of_day + self.end_minute
        return self.end_minute - minute_of_day


@dataclass(frozen=True)
class CalendarConfig:
    """
    Weekly availability of one worker.

    working_days uses ISO weekday numbers (Monday=1 .. Sunday=7). Shift times
    are wall-clock "HH:MM" strings in ``timezone``; an end at or before the
    start means the shift wraps past midnight. The Saturday bounds override the
    primary ones on day 6 and fall back to them independently when missing.
    """

    working_days: FrozenSet[int]
    start_time: str
    end_time: str
    timezone: str = "UTC"
    saturday_start_time: Optional[str] = None
    saturday_end_time: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "working_days", frozenset(int(d) for d in self.working_days))

    @staticmethod
    def create(
        working_days: Iterable[int],
        start_time: str,
        end_time: str,
        timezone: str = "UTC",
        saturday_start_time: Optional[str] = None,
        saturday_end_time: Optional[str] = None,
    ) -> "CalendarConfig":
        config = CalendarConfig(
            working_days=frozenset(working_days),
            start_time=start_time,
            end_time=end_time,
            timezone=timezone,
            saturday_start_time=saturday_start_time or None,
            saturday_end_time=saturday_end_time or None,
        )
        config.validate()
        return config

    @property
    def primary_shift(self) -> ShiftWindow:
        return ShiftWindow(time_to_minutes(self.start_time), time_to_minutes(self.end_time))

    @property
    def saturday_shift(self) -> ShiftWindow:
        primary = self.primary_shift
        start = (
            time_to_minutes(self.saturday_start_time)
            if self.saturday_start_time
            else primary.start_minute
        )
        end = (
            time_to_minutes(self.saturday_end_time)
            if self.saturday_end_time
            else primary.end_minute
        )
        return ShiftWindow(start, end)

    def shift_for(self, iso_weekday: int) -> ShiftWindow:
        if iso_weekday == SATURDAY:
            return self.saturday_shift
        return self.primary_shift

    def is_working_day(self, iso_weekday: int) -> bool:
        return iso_weekday in self.working_days

    def validate(self) -> None:
        if not self.working_days:
            raise InvalidCalendarError(
                "Calendar has no working days.",
                code="INVALID_CALENDAR",
            )
        invalid_days = sorted(d for d in self.working_days if d < 1 or d > 7)
        if invalid_days:
            raise InvalidCalendarError(
                f"Working days must be ISO weekdays 1-7, got {invalid_days}.",
                code="INVALID_CALENDAR",
            )
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError, TypeError) as exc:
            raise InvalidCalendarError(
                f"Unknown time zone {self.timezone!r}.",
                code="INVALID_TIMEZONE",
            ) from exc
        for shift in (self.primary_shift, self.saturday_shift):
            if not 0 < shift.duration_minutes <= MINUTES_PER_DAY:
                raise InvalidCalendarError(
                    "Shift duration must be between 1 and 1440 minutes.",
                    code="INVALID_CALENDAR",
                )


@dataclass
class AvailabilityCalendar:
    id: str
    name: str
    config: CalendarConfig = field(
        default_factory=lambda: CalendarConfig(
            working_days=frozenset({1, 2, 3, 4, 5}),
            start_time="09:00",
            end_time="17:00",
        )
    )

    @staticmethod
    def create(name: str, config: CalendarConfig) -> "AvailabilityCalendar":
        config.validate()
        return AvailabilityCalendar(id=generate_id(), name=name.strip(), config=config)


__all__ = [
    "MINUTES_PER_DAY",
    "SATURDAY",
    "time_to_minutes",
    "ShiftWindow",
    "CalendarConfig",
    "AvailabilityCalendar",
]
