from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from core.exceptions import ValidationError
from core.models import ChangeSeverity
from core.services.sla.models import SlaDeadlineRequest, SlaDeadlineResult, SlaStatus
from core.services.sla.status import ACK_WINDOW_MINUTES, build_sla_status, is_acknowledgement_late
from core.services.work_calendar.engine import WorkCalendarEngine
from core.services.work_calendar.projection import ensure_aware
from core.services.work_calendar.service import WorkCalendarService

logger = logging.getLogger(__name__)

DEFAULT_SLA_HOURS = 8.0


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SlaService:
    """
    Request/response entry point for SLA deadlines.

    Resolves the developer's calendar and approved leave through
    WorkCalendarService, then hands explicit inputs to the engine. The
    reference instant comes from ``clock`` only when a request leaves it out.
    """

    def __init__(
        self,
        work_calendar_service: WorkCalendarService,
        engine: WorkCalendarEngine,
        default_sla_hours: float = DEFAULT_SLA_HOURS,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self._calendars: WorkCalendarService = work_calendar_service
        self._engine: WorkCalendarEngine = engine
        self._default_sla_hours: float = default_sla_hours
        self._clock: Callable[[], datetime] = clock

    def _now(self, value: Optional[datetime] = None) -> datetime:
        return ensure_aware(value) if value is not None else ensure_aware(self._clock())

    @staticmethod
    def _validate_hours(sla_hours: float) -> float:
        try:
            hours = float(sla_hours)
        except (TypeError, ValueError) as exc:
            raise ValidationError(
                f"sla_hours must be a number, got {sla_hours!r}.",
                code="INVALID_SLA_HOURS",
            ) from exc
        if hours < 0 or hours != hours or hours == float("inf"):
            raise ValidationError(
                "sla_hours must be a non-negative finite number.",
                code="INVALID_SLA_HOURS",
            )
        return hours

    def calculate_deadline(self, request: SlaDeadlineRequest) -> SlaDeadlineResult:
        if not (request.developer_id or "").strip():
            raise ValidationError("developer_id is required.", code="DEVELOPER_ID_REQUIRED")

        start = self._now(request.start_time)
        hours = self._validate_hours(
            self._default_sla_hours if request.sla_hours is None else request.sla_hours
        )
        calendar = self._calendars.get_calendar_for(request.developer_id)

        if request.resume_from_hold:
            return self._resume_from_hold(request, start, hours, calendar)

        logger.info(
            "Calculating SLA: developer=%s, start=%s, hours=%s",
            request.developer_id,
            start.isoformat(),
            hours,
        )
        leaves = self._calendars.lookahead_leaves(request.developer_id, start)
        deadline = self._engine.compute_deadline(start, hours * 60, calendar, leaves)
        logger.info("SLA deadline calculated: %s", deadline.isoformat())
        return SlaDeadlineResult(
            developer_id=request.developer_id,
            deadline=deadline,
            sla_hours=hours,
            start_time=start,
        )

    def _resume_from_hold(self, request, resume_at, hours, calendar) -> SlaDeadlineResult:
        if request.held_at is None or request.original_sla_deadline is None:
            raise ValidationError(
                "held_at and original_sla_deadline are required to resume from hold.",
                code="HOLD_FIELDS_REQUIRED",
            )
        held_at = ensure_aware(request.held_at)
        original = ensure_aware(request.original_sla_deadline)
        logger.info(
            "Resuming SLA from hold: developer=%s, held_at=%s, original_deadline=%s, resume=%s",
            request.developer_id,
            held_at.isoformat(),
            original.isoformat(),
            resume_at.isoformat(),
        )
        leaves_at_hold = self._calendars.approved_leaves(
            request.developer_id, held_at, max(original, held_at)
        )
        leaves_at_resume = self._calendars.lookahead_leaves(request.developer_id, resume_at)
        result = self._engine.recalculate_after_hold(
            held_at, original, resume_at, calendar, leaves_at_hold, leaves_at_resume
        )
        logger.info(
            "SLA deadline recalculated after hold: %s (%.1f working minutes carried over)",
            result.deadline.isoformat(),
            result.remaining_minutes,
        )
        return SlaDeadlineResult(
            developer_id=request.developer_id,
            deadline=result.deadline,
            sla_hours=hours,
            start_time=resume_at,
            remaining_minutes_at_hold=result.remaining_minutes,
        )

    def change_deadline(
        self,
        developer_id: str,
        severity: ChangeSeverity | str,
        start_time: Optional[datetime] = None,
    ) -> SlaDeadlineResult:
        try:
            level = ChangeSeverity(severity)
        except ValueError as exc:
            raise ValidationError(
                f"Unknown change severity {severity!r}.",
                code="INVALID_SEVERITY",
            ) from exc
        return self.calculate_deadline(
            SlaDeadlineRequest(
                developer_id=developer_id,
                sla_hours=level.sla_hours,
                start_time=start_time,
            )
        )

    def sla_status(
        self,
        developer_id: str,
        deadline: datetime,
        sla_hours: Optional[float] = None,
        now: Optional[datetime] = None,
    ) -> SlaStatus:
        now = self._now(now)
        deadline = ensure_aware(deadline)
        hours = self._validate_hours(self._default_sla_hours if sla_hours is None else sla_hours)
        calendar = self._calendars.get_calendar_for(developer_id)
        leaves = self._calendars.approved_leaves(
            developer_id, min(now, deadline), max(now, deadline)
        )
        return build_sla_status(now, deadline, calendar, leaves, hours, engine=self._engine)

    def working_minutes(
        self,
        developer_id: str,
        from_instant: datetime,
        to_instant: datetime,
    ) -> float:
        from_instant = ensure_aware(from_instant)
        to_instant = ensure_aware(to_instant)
        calendar = self._calendars.get_calendar_for(developer_id)
        leaves = self._calendars.approved_leaves(developer_id, from_instant, to_instant)
        return self._engine.working_minutes_between(
            from_instant, to_instant, calendar, leaves, require_order=True
        )

    def acknowledgement_deadline(
        self,
        developer_id: str,
        assigned_at: Optional[datetime] = None,
    ) -> datetime:
        assigned_at = self._now(assigned_at)
        calendar = self._calendars.get_calendar_for(developer_id)
        leaves = self._calendars.lookahead_leaves(developer_id, assigned_at)
        return self._engine.compute_deadline(assigned_at, ACK_WINDOW_MINUTES, calendar, leaves)

    def check_acknowledgement(
        self,
        developer_id: str,
        ack_deadline: datetime,
        now: Optional[datetime] = None,
    ) -> bool:
        now = self._now(now)
        ack_deadline = ensure_aware(ack_deadline)
        calendar = self._calendars.get_calendar_for(developer_id)
        leaves = self._calendars.approved_leaves(
            developer_id, now, max(now, ack_deadline) + timedelta(minutes=1)
        )
        late = is_acknowledgement_late(now, ack_deadline, calendar, leaves, engine=self._engine)
        if late:
            logger.info("Acknowledgement late: developer=%s, ack_deadline=%s", developer_id, ack_deadline.isoformat())
        return late
