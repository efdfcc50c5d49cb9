# infra/db/models.py
from __future__ import annotations
from datetime import datetime
from typing import Optional

from sqlalchemy import (
    DateTime,
    Enum as SAEnum,
    ForeignKey,
    Index,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column

from infra.db.base import Base
from core.models import LeaveStatus


class AvailabilityCalendarORM(Base):
    __tablename__ = "availability_calendars"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False, default="")
    # ISO weekdays as a comma-separated string, e.g. "1,2,3,4,5"
    working_days: Mapped[str] = mapped_column(String, nullable=False, default="1,2,3,4,5")
    start_time: Mapped[str] = mapped_column(String(8), nullable=False, default="09:00")
    end_time: Mapped[str] = mapped_column(String(8), nullable=False, default="17:00")
    timezone: Mapped[str] = mapped_column(String(64), nullable=False, default="UTC")
    saturday_start_time: Mapped[Optional[str]] = mapped_column(String(8), nullable=True)
    saturday_end_time: Mapped[Optional[str]] = mapped_column(String(8), nullable=True)


class DeveloperORM(Base):
    __tablename__ = "developers"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    timezone: Mapped[str] = mapped_column(String(64), nullable=False, default="UTC")
    availability_calendar_id: Mapped[Optional[str]] = mapped_column(
        String,
        ForeignKey("availability_calendars.id", ondelete="SET NULL"),
        nullable=True,
    )


class LeaveRequestORM(Base):
    __tablename__ = "leave_requests"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    developer_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("developers.id", ondelete="CASCADE"),
        nullable=False,
    )
    # stored as naive UTC
    start_utc: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    end_utc: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    status: Mapped[LeaveStatus] = mapped_column(
        SAEnum(LeaveStatus), default=LeaveStatus.PENDING, nullable=False
    )
    reason: Mapped[str] = mapped_column(String, default="")

Index("idx_leave_developer_range", LeaveRequestORM.developer_id, LeaveRequestORM.start_utc, LeaveRequestORM.end_utc)
