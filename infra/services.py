from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from sqlalchemy.orm import Session

from core.services.sla import SlaService
from core.services.work_calendar import StepBudget, WorkCalendarEngine, WorkCalendarService
from infra.config import EngineSettings
from infra.db.repositories import (
    SqlAlchemyAvailabilityCalendarRepository,
    SqlAlchemyDeveloperRepository,
    SqlAlchemyLeaveRepository,
)


@dataclass(frozen=True)
class ServiceGraph:
    session: Session
    calendar_repo: SqlAlchemyAvailabilityCalendarRepository
    developer_repo: SqlAlchemyDeveloperRepository
    leave_repo: SqlAlchemyLeaveRepository
    work_calendar_engine: WorkCalendarEngine
    work_calendar_service: WorkCalendarService
    sla_service: SlaService

    def as_dict(self) -> dict[str, Any]:
        return {
            "session": self.session,
            "calendar_repo": self.calendar_repo,
            "developer_repo": self.developer_repo,
            "leave_repo": self.leave_repo,
            "work_calendar_engine": self.work_calendar_engine,
            "work_calendar_service": self.work_calendar_service,
            "sla_service": self.sla_service,
        }


def build_service_graph(
    session: Session,
    settings: Optional[EngineSettings] = None,
    clock: Optional[Callable] = None,
) -> ServiceGraph:
    settings = settings or EngineSettings()
    calendar_repo = SqlAlchemyAvailabilityCalendarRepository(session)
    developer_repo = SqlAlchemyDeveloperRepository(session)
    leave_repo = SqlAlchemyLeaveRepository(session)

    work_calendar_engine = WorkCalendarEngine(StepBudget(settings.step_budget_days))
    work_calendar_service = WorkCalendarService(
        calendar_repo,
        developer_repo,
        leave_repo,
        leave_lookahead_days=settings.leave_lookahead_days,
    )
    sla_kwargs: dict[str, Any] = {"default_sla_hours": settings.default_sla_hours}
    if clock is not None:
        sla_kwargs["clock"] = clock
    sla_service = SlaService(work_calendar_service, work_calendar_engine, **sla_kwargs)

    return ServiceGraph(
        session=session,
        calendar_repo=calendar_repo,
        developer_repo=developer_repo,
        leave_repo=leave_repo,
        work_calendar_engine=work_calendar_engine,
        work_calendar_service=work_calendar_service,
        sla_service=sla_service,
    )


__all__ = ["ServiceGraph", "build_service_graph"]
