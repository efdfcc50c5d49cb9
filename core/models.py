"""Compatibility wrapper: domain models re-exported from core.domain."""

from core.domain import (
    MINUTES_PER_DAY,
    AvailabilityCalendar,
    CalendarConfig,
    ChangeSeverity,
    Developer,
    LeaveRecord,
    LeaveRequest,
    LeaveStatus,
    ShiftWindow,
    SlaState,
    generate_id,
    time_to_minutes,
)

__all__ = [
    "generate_id",
    "MINUTES_PER_DAY",
    "time_to_minutes",
    "ShiftWindow",
    "CalendarConfig",
    "AvailabilityCalendar",
    "LeaveStatus",
    "ChangeSeverity",
    "SlaState",
    "LeaveRecord",
    "LeaveRequest",
    "Developer",
]
