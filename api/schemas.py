"""
HTTP contracts for the SLA endpoints.

Request fields accept both snake_case and the camelCase spelling older
callers send. Responses are always snake_case.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from core.models import SlaState


class _Request(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class SlaDeadlineBody(_Request):
    developer_id: str = Field(..., min_length=1, alias="developerId")
    start_time: Optional[datetime] = Field(None, alias="startTime")
    sla_hours: Optional[float] = Field(None, ge=0, alias="slaHours")
    resume_from_hold: bool = Field(False, alias="resumeFromHold")
    held_at: Optional[datetime] = Field(None, alias="heldAt")
    original_sla_deadline: Optional[datetime] = Field(None, alias="originalSlaDeadline")


class SlaDeadlineResponse(BaseModel):
    success: bool = True
    deadline: datetime
    developer_id: str
    sla_hours: float
    start_time: datetime
    remaining_minutes_at_hold: Optional[float] = None


class SlaStatusBody(_Request):
    developer_id: str = Field(..., min_length=1, alias="developerId")
    deadline: datetime = Field(..., alias="slaDeadline")
    sla_hours: Optional[float] = Field(None, ge=0, alias="slaHours")
    now: Optional[datetime] = None


class SlaStatusResponse(BaseModel):
    state: SlaState
    remaining_minutes: float
    overdue_minutes: float
    overdue_days: float
    label: str


class WorkingMinutesBody(_Request):
    developer_id: str = Field(..., min_length=1, alias="developerId")
    from_time: datetime = Field(..., alias="fromTime")
    to_time: datetime = Field(..., alias="toTime")


class WorkingMinutesResponse(BaseModel):
    minutes: float


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    code: str
    incident_id: str
