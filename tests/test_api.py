from __future__ import annotations

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from core.models import CalendarConfig
from infra.config import EngineSettings
from infra.operational_support import OperationalSupport

FIXED_NOW = datetime(2024, 3, 4, 4, 0, tzinfo=timezone.utc)


def _parse(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@pytest.fixture
def support(tmp_path):
    return OperationalSupport(events_path=tmp_path / "support-events.jsonl")


@pytest.fixture
def client_factory(api_session_factory, support):
    def _client(settings: EngineSettings | None = None) -> TestClient:
        app = create_app(
            settings or EngineSettings(),
            session_factory=api_session_factory,
            support=support,
            clock=lambda: FIXED_NOW,
        )
        return TestClient(app)

    return _client


@pytest.fixture
def client(client_factory):
    with client_factory() as test_client:
        yield test_client


@pytest.fixture
def developer_id(api_seed, karachi_calendar):
    return api_seed(karachi_calendar, name="Ayesha")


def test_calculate_deadline_accepts_camel_case(client, developer_id):
    response = client.post(
        "/calculate-sla-deadline",
        json={"developerId": developer_id, "startTime": "2024-03-01T11:30:00Z", "slaHours": 2},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["developer_id"] == developer_id
    assert body["sla_hours"] == 2
    assert _parse(body["deadline"]) == datetime(2024, 3, 4, 5, 30, tzinfo=timezone.utc)
    assert body["remaining_minutes_at_hold"] is None


def test_calculate_deadline_accepts_snake_case_and_defaults(client, developer_id):
    response = client.post("/calculate-sla-deadline", json={"developer_id": developer_id})

    assert response.status_code == 200
    body = response.json()
    assert _parse(body["start_time"]) == FIXED_NOW
    assert _parse(body["deadline"]) == datetime(2024, 3, 4, 12, 0, tzinfo=timezone.utc)


def test_resume_from_hold_over_http(client, developer_id):
    response = client.post(
        "/calculate-sla-deadline",
        json={
            "developerId": developer_id,
            "startTime": "2024-03-06T04:00:00Z",
            "resumeFromHold": True,
            "heldAt": "2024-03-04T08:00:00Z",
            "originalSlaDeadline": "2024-03-04T12:00:00Z",
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["remaining_minutes_at_hold"] == pytest.approx(240)
    assert _parse(body["deadline"]) == datetime(2024, 3, 6, 8, 0, tzinfo=timezone.utc)


def test_unknown_developer_returns_404_with_incident_id(client):
    response = client.post(
        "/calculate-sla-deadline",
        json={"developerId": "nobody"},
        headers={"X-Trace-ID": "trace-404"},
    )

    assert response.status_code == 404
    body = response.json()
    assert body == {
        "success": False,
        "error": "Developer 'nobody' not found.",
        "code": "DEVELOPER_NOT_FOUND",
        "incident_id": "trace-404",
    }
    assert response.headers["X-Trace-ID"] == "trace-404"


def test_missing_developer_id_returns_400(client):
    response = client.post("/calculate-sla-deadline", json={"slaHours": 4})

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_REQUEST"


def test_negative_hours_return_400(client, developer_id):
    response = client.post("/calculate-sla-deadline", json={"developerId": developer_id, "slaHours": -3})

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_oversized_hours_return_structured_400(client, developer_id):
    response = client.post(
        "/calculate-sla-deadline",
        json={"developerId": developer_id, "startTime": "2024-03-04T04:00:00Z", "slaHours": 1e11},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["code"] == "INVALID_SLA_DURATION"
    assert body["incident_id"] == response.headers["X-Trace-ID"]


def test_unsatisfiable_calendar_returns_500_and_records_event(client_factory, api_seed, support):
    sundays_only = CalendarConfig.create(working_days={7}, start_time="09:00", end_time="17:00")
    dev_id = api_seed(sundays_only, name="Weekend")

    with client_factory(EngineSettings(step_budget_days=3)) as test_client:
        response = test_client.post(
            "/calculate-sla-deadline",
            json={"developerId": dev_id, "startTime": "2024-03-04T09:00:00Z"},
            headers={"X-Trace-ID": "trace-500"},
        )

    assert response.status_code == 500
    assert response.json()["code"] == "CALENDAR_UNSATISFIABLE"
    assert response.json()["incident_id"] == "trace-500"
    events = support.read_events(trace_id="trace-500")
    assert len(events) == 1
    assert events[0]["event_type"] == "sla.calculation.failed"


def test_sla_status_endpoint(client, developer_id):
    response = client.post(
        "/sla-status",
        json={"developerId": developer_id, "slaDeadline": "2024-03-04T05:30:00Z"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["state"] == "urgent"
    assert body["remaining_minutes"] == pytest.approx(90)
    assert body["label"] == "1h 30m left"


def test_working_minutes_endpoint_rejects_reversed_range(client, developer_id):
    ok = client.post(
        "/working-minutes",
        json={"developerId": developer_id, "fromTime": "2024-03-04T04:00:00Z", "toTime": "2024-03-05T04:00:00Z"},
    )
    reversed_range = client.post(
        "/working-minutes",
        json={"developer_id": developer_id, "from_time": "2024-03-05T04:00:00Z", "to_time": "2024-03-04T04:00:00Z"},
    )

    assert ok.status_code == 200
    assert ok.json()["minutes"] == pytest.approx(480)
    assert reversed_range.status_code == 400
    assert reversed_range.json()["code"] == "INVALID_TIME_RANGE"


def test_health_reports_version_and_trace_header(client, monkeypatch):
    monkeypatch.setenv("SLA_APP_VERSION", "3.2.1")

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "version": "3.2.1"}
    assert response.headers["X-Trace-ID"].startswith("inc-")
