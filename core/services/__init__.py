from .sla import SlaService, SlaDeadlineRequest, SlaDeadlineResult, SlaStatus
from .work_calendar import WorkCalendarEngine, WorkCalendarService

__all__ = [
    "SlaService",
    "SlaDeadlineRequest",
    "SlaDeadlineResult",
    "SlaStatus",
    "WorkCalendarEngine",
    "WorkCalendarService",
]
