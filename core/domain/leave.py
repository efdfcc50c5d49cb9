from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from core.domain.enums import LeaveStatus
from core.domain.identifiers import generate_id
from core.exceptions import ValidationError


@dataclass(frozen=True)
class LeaveRecord:
    """An approved absence interval; start inclusive, end exclusive."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.end <= self.start:
            raise ValidationError(
                "Leave must end after it starts.",
                code="INVALID_LEAVE_RANGE",
            )


@dataclass
class LeaveRequest:
    id: str
    developer_id: str
    start: datetime
    end: datetime
    status: LeaveStatus = LeaveStatus.PENDING
    reason: str = ""

    @staticmethod
    def create(
        developer_id: str,
        start: datetime,
        end: datetime,
        status: LeaveStatus = LeaveStatus.PENDING,
        reason: str = "",
    ) -> "LeaveRequest":
        LeaveRecord(start=start, end=end)
        return LeaveRequest(
            id=generate_id(),
            developer_id=developer_id,
            start=start,
            end=end,
            status=status,
            reason=reason.strip(),
        )

    def to_record(self) -> LeaveRecord:
        return LeaveRecord(start=self.start, end=self.end)


__all__ = ["LeaveRecord", "LeaveRequest"]
