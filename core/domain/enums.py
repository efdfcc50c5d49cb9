from __future__ import annotations

from enum import Enum


class LeaveStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ChangeSeverity(str, Enum):
    MINOR = "minor"
    AVERAGE = "average"
    MAJOR = "major"
    MAJOR_MAJOR = "major_major"

    @property
    def sla_hours(self) -> float:
        return _SEVERITY_HOURS[self]


_SEVERITY_HOURS = {
    ChangeSeverity.MINOR: 2.0,
    ChangeSeverity.AVERAGE: 4.0,
    ChangeSeverity.MAJOR: 9.0,
    ChangeSeverity.MAJOR_MAJOR: 18.0,
}


class SlaState(str, Enum):
    ON_TRACK = "on_track"
    URGENT = "urgent"
    OVERDUE = "overdue"


__all__ = ["LeaveStatus", "ChangeSeverity", "SlaState"]
