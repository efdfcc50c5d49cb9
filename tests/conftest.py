# tests/conftest.py
from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core.models import AvailabilityCalendar, CalendarConfig, Developer, LeaveRequest
from infra.config import EngineSettings
from infra.db.base import Base, build_engine, build_session_factory
import infra.db.models  # noqa: F401
from infra.db.repositories import (
    SqlAlchemyAvailabilityCalendarRepository,
    SqlAlchemyDeveloperRepository,
    SqlAlchemyLeaveRepository,
)
from infra.services import build_service_graph

# Monday 2024-03-04 09:00 in Asia/Karachi (UTC+5, no DST).
FIXED_NOW = datetime(2024, 3, 4, 4, 0, tzinfo=timezone.utc)


@pytest.fixture
def karachi_calendar() -> CalendarConfig:
    return CalendarConfig.create(
        working_days={1, 2, 3, 4, 5},
        start_time="09:00",
        end_time="17:00",
        timezone="Asia/Karachi",
    )


@pytest.fixture
def utc_weekday_calendar() -> CalendarConfig:
    return CalendarConfig.create(
        working_days={1, 2, 3, 4, 5},
        start_time="09:00",
        end_time="17:00",
        timezone="UTC",
    )


@pytest.fixture
def night_shift_calendar() -> CalendarConfig:
    return CalendarConfig.create(
        working_days={1, 2, 3, 4, 5},
        start_time="22:00",
        end_time="06:00",
        timezone="UTC",
    )


@pytest.fixture
def session():
    # separate in-memory DB for tests
    engine = create_engine("sqlite:///:memory:", future=True)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def services(session):
    return build_service_graph(session, EngineSettings(), clock=lambda: FIXED_NOW).as_dict()


def _seed_developer(session, config=None, name="Dev", leaves=()):
    """Store a developer (and calendar, when given) and return the developer id."""
    calendar_id = None
    if config is not None:
        calendar = AvailabilityCalendar.create(f"{name} hours", config)
        SqlAlchemyAvailabilityCalendarRepository(session).upsert(calendar)
        calendar_id = calendar.id
    developer = Developer.create(
        name,
        availability_calendar_id=calendar_id,
        timezone=config.timezone if config else "UTC",
    )
    SqlAlchemyDeveloperRepository(session).add(developer)
    session.flush()

    leave_repo = SqlAlchemyLeaveRepository(session)
    for start, end, status in leaves:
        leave_repo.add(LeaveRequest.create(developer.id, start, end, status=status))
    session.commit()
    return developer.id


@pytest.fixture
def seed(session):
    def _seed(config=None, name="Dev", leaves=()):
        return _seed_developer(session, config, name=name, leaves=leaves)

    return _seed


@pytest.fixture
def karachi_developer(seed, karachi_calendar):
    return seed(karachi_calendar, name="Ayesha")


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def api_session_factory():
    # single shared in-memory connection so the app's worker threads see seeded rows
    engine = build_engine("sqlite:///:memory:")
    factory = build_session_factory(engine)
    try:
        yield factory
    finally:
        engine.dispose()


@pytest.fixture
def api_seed(api_session_factory):
    def _seed(config=None, name="Dev", leaves=()):
        db = api_session_factory()
        try:
            return _seed_developer(db, config, name=name, leaves=leaves)
        finally:
            db.close()

    return _seed
