# core/services/work_calendar/service.py
from __future__ import annotations

from datetime import datetime, timedelta
from typing import List

from core.exceptions import CalendarNotFoundError, ValidationError
from core.interfaces import (
    AvailabilityCalendarRepository,
    DeveloperRepository,
    LeaveRepository,
)
from core.models import CalendarConfig, LeaveRecord, LeaveStatus
from core.services.work_calendar.projection import ensure_aware

DEFAULT_LEAVE_LOOKAHEAD_DAYS = 60


class WorkCalendarService:
    """
    Read-side lookup of a developer's calendar and approved leave.
    The engine never touches repositories; this service feeds it.
    """

    def __init__(
        self,
        calendar_repo: AvailabilityCalendarRepository,
        developer_repo: DeveloperRepository,
        leave_repo: LeaveRepository,
        leave_lookahead_days: int = DEFAULT_LEAVE_LOOKAHEAD_DAYS,
    ):
        if leave_lookahead_days <= 0:
            raise ValidationError("leave_lookahead_days must be positive.")
        self._calendar_repo: AvailabilityCalendarRepository = calendar_repo
        self._developer_repo: DeveloperRepository = developer_repo
        self._leave_repo: LeaveRepository = leave_repo
        self._lookahead = timedelta(days=leave_lookahead_days)

    @property
    def leave_lookahead(self) -> timedelta:
        return self._lookahead

    def get_calendar_for(self, developer_id: str) -> CalendarConfig:
        developer = self._developer_repo.get(developer_id)
        if developer is None:
            raise CalendarNotFoundError(
                f"Developer {developer_id!r} not found.",
                code="DEVELOPER_NOT_FOUND",
            )
        if not developer.availability_calendar_id:
            raise CalendarNotFoundError(
                "Developer has no availability calendar.",
                code="CALENDAR_NOT_ASSIGNED",
            )
        calendar = self._calendar_repo.get(developer.availability_calendar_id)
        if calendar is None:
            raise CalendarNotFoundError(
                "Developer has no availability calendar.",
                code="CALENDAR_NOT_ASSIGNED",
            )
        return calendar.config

    def approved_leaves(
        self,
        developer_id: str,
        window_start: datetime,
        window_end: datetime,
    ) -> List[LeaveRecord]:
        rows = self._leave_repo.list_overlapping(
            developer_id,
            ensure_aware(window_start),
            ensure_aware(window_end),
            status=LeaveStatus.APPROVED,
        )
        return [row.to_record() for row in rows]

    def lookahead_leaves(self, developer_id: str, start: datetime) -> List[LeaveRecord]:
        start = ensure_aware(start)
        return self.approved_leaves(developer_id, start, start + self._lookahead)
