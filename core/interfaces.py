# core/interfaces.py
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from core.models import AvailabilityCalendar, Developer, LeaveRequest, LeaveStatus


class AvailabilityCalendarRepository(ABC):
    @abstractmethod
    def get(self, calendar_id: str) -> Optional[AvailabilityCalendar]: ...

    @abstractmethod
    def upsert(self, calendar: AvailabilityCalendar) -> None: ...


class DeveloperRepository(ABC):
    @abstractmethod
    def add(self, developer: Developer) -> None: ...

    @abstractmethod
    def get(self, developer_id: str) -> Optional[Developer]: ...

    @abstractmethod
    def assign_calendar(self, developer_id: str, calendar_id: Optional[str]) -> None: ...


class LeaveRepository(ABC):
    @abstractmethod
    def add(self, leave: LeaveRequest) -> None: ...

    @abstractmethod
    def set_status(self, leave_id: str, status: LeaveStatus) -> None: ...

    @abstractmethod
    def list_overlapping(
        self,
        developer_id: str,
        window_start: datetime,
        window_end: datetime,
        status: Optional[LeaveStatus] = None,
    ) -> List[LeaveRequest]: ...
