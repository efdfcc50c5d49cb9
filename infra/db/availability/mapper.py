from __future__ import annotations

from datetime import datetime, timezone
from typing import Set

from core.models import (
    AvailabilityCalendar,
    CalendarConfig,
    Developer,
    LeaveRequest,
    LeaveStatus,
)
from infra.db.models import AvailabilityCalendarORM, DeveloperORM, LeaveRequestORM


def to_utc_naive(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def from_utc_naive(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc)
    return value.replace(tzinfo=timezone.utc)


def calendar_from_orm(obj: AvailabilityCalendarORM) -> AvailabilityCalendar:
    days: Set[int] = set()
    if obj.working_days:
        for part in obj.working_days.split(","):
            part = part.strip()
            if part:
                days.add(int(part))
    return AvailabilityCalendar(
        id=obj.id,
        name=obj.name,
        config=CalendarConfig(
            working_days=frozenset(days),
            start_time=obj.start_time,
            end_time=obj.end_time,
            timezone=obj.timezone,
            saturday_start_time=obj.saturday_start_time,
            saturday_end_time=obj.saturday_end_time,
        ),
    )


def calendar_to_orm(calendar: AvailabilityCalendar) -> AvailabilityCalendarORM:
    config = calendar.config
    return AvailabilityCalendarORM(
        id=calendar.id,
        name=calendar.name,
        working_days=",".join(str(day) for day in sorted(config.working_days)),
        start_time=config.start_time,
        end_time=config.end_time,
        timezone=config.timezone,
        saturday_start_time=config.saturday_start_time,
        saturday_end_time=config.saturday_end_time,
    )


def developer_from_orm(obj: DeveloperORM) -> Developer:
    return Developer(
        id=obj.id,
        name=obj.name,
        availability_calendar_id=obj.availability_calendar_id,
        timezone=obj.timezone,
    )


def developer_to_orm(developer: Developer) -> DeveloperORM:
    return DeveloperORM(
        id=developer.id,
        name=developer.name,
        availability_calendar_id=developer.availability_calendar_id,
        timezone=developer.timezone,
    )


def leave_from_orm(obj: LeaveRequestORM) -> LeaveRequest:
    return LeaveRequest(
        id=obj.id,
        developer_id=obj.developer_id,
        start=from_utc_naive(obj.start_utc),
        end=from_utc_naive(obj.end_utc),
        status=LeaveStatus(obj.status) if obj.status else LeaveStatus.PENDING,
        reason=obj.reason or "",
    )


def leave_to_orm(leave: LeaveRequest) -> LeaveRequestORM:
    return LeaveRequestORM(
        id=leave.id,
        developer_id=leave.developer_id,
        start_utc=to_utc_naive(leave.start),
        end_utc=to_utc_naive(leave.end),
        status=leave.status,
        reason=leave.reason,
    )


__all__ = [
    "to_utc_naive",
    "from_utc_naive",
    "calendar_from_orm",
    "calendar_to_orm",
    "developer_from_orm",
    "developer_to_orm",
    "leave_from_orm",
    "leave_to_orm",
]
