from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError
from core.interfaces import (
    AvailabilityCalendarRepository,
    DeveloperRepository,
    LeaveRepository,
)
from core.models import AvailabilityCalendar, Developer, LeaveRequest, LeaveStatus
from infra.db.availability.mapper import (
    calendar_from_orm,
    calendar_to_orm,
    developer_from_orm,
    developer_to_orm,
    leave_from_orm,
    leave_to_orm,
    to_utc_naive,
)
from infra.db.models import AvailabilityCalendarORM, DeveloperORM, LeaveRequestORM


class SqlAlchemyAvailabilityCalendarRepository(AvailabilityCalendarRepository):
    def __init__(self, session: Session):
        self.session = session

    def get(self, calendar_id: str) -> Optional[AvailabilityCalendar]:
        obj = self.session.get(AvailabilityCalendarORM, calendar_id)
        return calendar_from_orm(obj) if obj else None

    def upsert(self, calendar: AvailabilityCalendar) -> None:
        self.session.merge(calendar_to_orm(calendar))


class SqlAlchemyDeveloperRepository(DeveloperRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, developer: Developer) -> None:
        self.session.add(developer_to_orm(developer))

    def get(self, developer_id: str) -> Optional[Developer]:
        obj = self.session.get(DeveloperORM, developer_id)
        return developer_from_orm(obj) if obj else None

    def assign_calendar(self, developer_id: str, calendar_id: Optional[str]) -> None:
        obj = self.session.get(DeveloperORM, developer_id)
        if obj is None:
            raise NotFoundError("Developer not found.", code="DEVELOPER_NOT_FOUND")
        obj.availability_calendar_id = calendar_id


class SqlAlchemyLeaveRepository(LeaveRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, leave: LeaveRequest) -> None:
        self.session.add(leave_to_orm(leave))

    def set_status(self, leave_id: str, status: LeaveStatus) -> None:
        obj = self.session.get(LeaveRequestORM, leave_id)
        if obj is None:
            raise NotFoundError("Leave request not found.", code="LEAVE_NOT_FOUND")
        obj.status = status

    def list_overlapping(
        self,
        developer_id: str,
        window_start: datetime,
        window_end: datetime,
        status: Optional[LeaveStatus] = None,
    ) -> List[LeaveRequest]:
        stmt = (
            select(LeaveRequestORM)
            .where(LeaveRequestORM.developer_id == developer_id)
            .where(LeaveRequestORM.start_utc < to_utc_naive(window_end))
            .where(LeaveRequestORM.end_utc > to_utc_naive(window_start))
            .order_by(LeaveRequestORM.start_utc)
        )
        if status is not None:
            stmt = stmt.where(LeaveRequestORM.status == status)
        rows = self.session.execute(stmt).scalars().all()
        return [leave_from_orm(row) for row in rows]


__all__ = [
    "SqlAlchemyAvailabilityCalendarRepository",
    "SqlAlchemyDeveloperRepository",
    "SqlAlchemyLeaveRepository",
]
