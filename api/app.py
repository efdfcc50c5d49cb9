"""
SLA Deadline API
================
HTTP surface over SlaService.

Endpoints:
    POST   /calculate-sla-deadline  - Deadline for a new or resumed SLA
    POST   /sla-status              - Remaining / overdue working time
    POST   /working-minutes         - Working minutes between two instants
    GET    /health                  - Health check
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Iterator, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session, sessionmaker

from api.schemas import (
    ErrorResponse,
    HealthResponse,
    SlaDeadlineBody,
    SlaDeadlineResponse,
    SlaStatusBody,
    SlaStatusResponse,
    WorkingMinutesBody,
    WorkingMinutesResponse,
)
from core.exceptions import ComputationError, DomainError, NotFoundError, ValidationError
from core.services.sla import SlaDeadlineRequest, SlaService
from infra.config import EngineSettings
from infra.db.base import build_engine, build_session_factory
from infra.operational_support import (
    TRACE_HEADER,
    OperationalSupport,
    bind_trace_id,
    current_trace_id,
    get_operational_support,
)
from infra.services import build_service_graph
from infra.version import get_app_version

_LOGGER = logging.getLogger(__name__)


def _error_response(request: Request, status_code: int, message: str, code: str) -> JSONResponse:
    trace_id = getattr(request.state, "trace_id", None) or current_trace_id() or ""
    body = ErrorResponse(error=message, code=code, incident_id=trace_id)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(),
        headers={TRACE_HEADER: trace_id} if trace_id else None,
    )


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(NotFoundError)
    async def _not_found(request: Request, exc: NotFoundError):
        _LOGGER.warning("Lookup failed (%s): %s", exc.code, exc)
        return _error_response(request, 404, str(exc), exc.code)

    @app.exception_handler(ValidationError)
    async def _invalid(request: Request, exc: ValidationError):
        _LOGGER.warning("Rejected request (%s): %s", exc.code, exc)
        return _error_response(request, 400, str(exc), exc.code)

    @app.exception_handler(RequestValidationError)
    async def _invalid_body(request: Request, exc: RequestValidationError):
        details = "; ".join(
            f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
            for err in exc.errors()
        )
        _LOGGER.warning("Rejected request body: %s", details)
        return _error_response(request, 400, details or "Invalid request.", "INVALID_REQUEST")

    @app.exception_handler(ComputationError)
    async def _computation_failed(request: Request, exc: ComputationError):
        _LOGGER.error("SLA computation failed (%s): %s", exc.code, exc, exc_info=exc)
        support: OperationalSupport = app.state.support or get_operational_support()
        support.capture_exception(
            exc,
            context=f"{request.method} {request.url.path}",
            trace_id=getattr(request.state, "trace_id", None),
        )
        return _error_response(request, 500, str(exc), exc.code)

    @app.exception_handler(DomainError)
    async def _domain_error(request: Request, exc: DomainError):
        _LOGGER.warning("Domain error (%s): %s", exc.code, exc)
        return _error_response(request, 400, str(exc), exc.code)


def create_app(
    settings: Optional[EngineSettings] = None,
    session_factory: Optional[sessionmaker] = None,
    support: Optional[OperationalSupport] = None,
    clock=None,
) -> FastAPI:
    settings = settings or EngineSettings.from_env()

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        _LOGGER.info("Starting SLA Deadline API %s...", get_app_version())
        if application.state.session_factory is None:
            engine = build_engine(settings.resolved_database_url)
            application.state.session_factory = build_session_factory(engine)
        yield
        _LOGGER.info("SLA Deadline API shutting down")

    app = FastAPI(
        title="SLA Deadline API",
        description="Working-calendar SLA deadlines, status and working-time measurement",
        version=get_app_version(),
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.session_factory = session_factory
    app.state.support = support
    app.state.clock = clock

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[TRACE_HEADER],
    )

    @app.middleware("http")
    async def _trace_middleware(request: Request, call_next):
        """Attach X-Trace-ID to every request and propagate it into log records."""
        with bind_trace_id(request.headers.get(TRACE_HEADER)) as trace_id:
            request.state.trace_id = trace_id
            response = await call_next(request)
            response.headers[TRACE_HEADER] = trace_id
            return response

    _install_error_handlers(app)

    def get_session(request: Request) -> Iterator[Session]:
        factory = request.app.state.session_factory
        if factory is None:
            raise RuntimeError("Database is not initialized; the app lifespan has not run.")
        session = factory()
        try:
            yield session
        finally:
            session.close()

    def get_sla_service(request: Request, session: Session = Depends(get_session)) -> SlaService:
        graph = build_service_graph(
            session,
            request.app.state.settings,
            clock=request.app.state.clock,
        )
        return graph.sla_service

    @app.post("/calculate-sla-deadline", response_model=SlaDeadlineResponse)
    def calculate_sla_deadline(
        body: SlaDeadlineBody,
        service: SlaService = Depends(get_sla_service),
    ):
        result = service.calculate_deadline(
            SlaDeadlineRequest(
                developer_id=body.developer_id,
                sla_hours=body.sla_hours,
                start_time=body.start_time,
                resume_from_hold=body.resume_from_hold,
                held_at=body.held_at,
                original_sla_deadline=body.original_sla_deadline,
            )
        )
        return SlaDeadlineResponse(
            deadline=result.deadline,
            developer_id=result.developer_id,
            sla_hours=result.sla_hours,
            start_time=result.start_time,
            remaining_minutes_at_hold=result.remaining_minutes_at_hold,
        )

    @app.post("/sla-status", response_model=SlaStatusResponse)
    def sla_status(body: SlaStatusBody, service: SlaService = Depends(get_sla_service)):
        status = service.sla_status(
            body.developer_id,
            body.deadline,
            sla_hours=body.sla_hours,
            now=body.now,
        )
        return SlaStatusResponse(
            state=status.state,
            remaining_minutes=status.remaining_minutes,
            overdue_minutes=status.overdue_minutes,
            overdue_days=status.overdue_days,
            label=status.label,
        )

    @app.post("/working-minutes", response_model=WorkingMinutesResponse)
    def working_minutes(body: WorkingMinutesBody, service: SlaService = Depends(get_sla_service)):
        minutes = service.working_minutes(body.developer_id, body.from_time, body.to_time)
        return WorkingMinutesResponse(minutes=minutes)

    @app.get("/health", response_model=HealthResponse)
    def health():
        return HealthResponse(version=get_app_version())

    return app


__all__ = ["create_app"]
