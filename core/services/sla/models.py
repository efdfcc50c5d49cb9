from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.models import SlaState


@dataclass(frozen=True)
class SlaDeadlineRequest:
    developer_id: str
    sla_hours: Optional[float] = None
    start_time: Optional[datetime] = None
    resume_from_hold: bool = False
    held_at: Optional[datetime] = None
    original_sla_deadline: Optional[datetime] = None


@dataclass(frozen=True)
class SlaDeadlineResult:
    developer_id: str
    deadline: datetime
    sla_hours: float
    start_time: datetime
    remaining_minutes_at_hold: Optional[float] = None


@dataclass(frozen=True)
class SlaStatus:
    state: SlaState
    remaining_minutes: float
    overdue_minutes: float
    overdue_days: float
    total_working_minutes: float
    label: str

    @property
    def is_overdue(self) -> bool:
        return self.state is SlaState.OVERDUE


__all__ = ["SlaDeadlineRequest", "SlaDeadlineResult", "SlaStatus"]
