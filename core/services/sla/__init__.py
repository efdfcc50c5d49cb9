from .models import SlaDeadlineRequest, SlaDeadlineResult, SlaStatus
from .service import DEFAULT_SLA_HOURS, SlaService
from .status import (
    ACK_WINDOW_MINUTES,
    URGENT_THRESHOLD_MINUTES,
    build_sla_status,
    format_working_minutes,
    is_acknowledgement_late,
)

__all__ = [
    "SlaService",
    "SlaDeadlineRequest",
    "SlaDeadlineResult",
    "SlaStatus",
    "DEFAULT_SLA_HOURS",
    "ACK_WINDOW_MINUTES",
    "URGENT_THRESHOLD_MINUTES",
    "build_sla_status",
    "format_working_minutes",
    "is_acknowledgement_late",
]
