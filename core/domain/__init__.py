from core.domain.calendar import (
    MINUTES_PER_DAY,
    AvailabilityCalendar,
    CalendarConfig,
    ShiftWindow,
    time_to_minutes,
)
from core.domain.enums import ChangeSeverity, LeaveStatus, SlaState
from core.domain.identifiers import generate_id
from core.domain.developer import Developer
from core.domain.leave import LeaveRecord, LeaveRequest

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
