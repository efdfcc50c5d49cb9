from datetime import datetime, timedelta, timezone

import pytest

from core.exceptions import InvalidTimeRangeError, ValidationError
from core.models import CalendarConfig, LeaveRecord
from core.services.work_calendar import (
    WorkCalendarEngine,
    compute_deadline,
    overdue_days,
    overdue_working_minutes,
    remaining_working_minutes,
    working_minutes_between,
)


def pkt(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc) - timedelta(hours=5)


def test_minutes_between_counts_only_shift_time(karachi_calendar):
    minutes = working_minutes_between(pkt(2024, 3, 1, 16, 30), pkt(2024, 3, 4, 10, 30), karachi_calendar)

    assert minutes == pytest.approx(120)


def test_reversed_range_is_zero_unless_order_is_required(karachi_calendar):
    later, earlier = pkt(2024, 3, 4, 12, 0), pkt(2024, 3, 4, 10, 0)

    assert working_minutes_between(later, earlier, karachi_calendar) == 0.0
    with pytest.raises(InvalidTimeRangeError) as exc:
        working_minutes_between(later, earlier, karachi_calendar, require_order=True)
    assert exc.value.code == "INVALID_TIME_RANGE"


def test_leave_is_subtracted_from_measured_time(karachi_calendar):
    leave = LeaveRecord(start=pkt(2024, 3, 4, 10, 0), end=pkt(2024, 3, 4, 12, 0))

    minutes = working_minutes_between(pkt(2024, 3, 4, 9, 0), pkt(2024, 3, 4, 17, 0), karachi_calendar, [leave])

    assert minutes == pytest.approx(360)


def test_overnight_shift_is_measured_across_midnight(night_shift_calendar):
    start = datetime(2024, 3, 4, 23, 0, tzinfo=timezone.utc)
    end = datetime(2024, 3, 5, 23, 0, tzinfo=timezone.utc)

    # Mon 23:00-Tue 06:00 (7h) plus Tue 22:00-23:00 (1h).
    assert working_minutes_between(start, end, night_shift_calendar) == pytest.approx(480)


@pytest.mark.parametrize("minutes", [0, 1, 30, 120, 479, 480, 481, 960, 2400])
def test_measuring_up_to_a_deadline_returns_its_duration(karachi_calendar, minutes):
    leaves = [LeaveRecord(start=pkt(2024, 3, 5, 13, 0), end=pkt(2024, 3, 6, 10, 0))]
    start = pkt(2024, 3, 4, 11, 20)

    deadline = compute_deadline(start, minutes, karachi_calendar, leaves)

    assert working_minutes_between(start, deadline, karachi_calendar, leaves) == pytest.approx(minutes)


def test_remaining_is_zero_once_deadline_passed(karachi_calendar):
    deadline = pkt(2024, 3, 4, 10, 30)

    assert remaining_working_minutes(pkt(2024, 3, 4, 11, 0), deadline, karachi_calendar) == 0.0
    assert remaining_working_minutes(pkt(2024, 3, 4, 9, 30), deadline, karachi_calendar) == pytest.approx(60)


def test_overdue_counts_working_time_since_deadline(karachi_calendar):
    deadline = pkt(2024, 3, 4, 10, 30)
    now = pkt(2024, 3, 5, 9, 30)

    overdue = overdue_working_minutes(now, deadline, karachi_calendar)

    # Mon 10:30-17:00 plus Tue 09:00-09:30.
    assert overdue == pytest.approx(420)
    assert overdue_days(overdue, 8) == pytest.approx(0.875)
    assert overdue_working_minutes(deadline, now, karachi_calendar) == 0.0


def test_overdue_days_needs_positive_divisor():
    with pytest.raises(ValidationError):
        overdue_days(60, 0)


def test_engine_facade_uses_its_budget(karachi_calendar):
    engine = WorkCalendarEngine()
    start = pkt(2024, 3, 4, 9, 0)
    deadline = engine.compute_deadline(start, 600, karachi_calendar)

    assert engine.working_minutes_between(start, deadline, karachi_calendar) == pytest.approx(600)
    assert engine.remaining_working_minutes(start, deadline, karachi_calendar) == pytest.approx(600)


@pytest.mark.parametrize(
    "deadline",
    [
        pkt(2024, 3, 4, 16, 59),
        pkt(2024, 3, 5, 12, 59),
        pkt(2024, 3, 6, 14, 15),
        pkt(2024, 3, 11, 9, 30),
    ],
)
def test_deadline_is_recovered_from_measured_minutes(karachi_calendar, deadline):
    leaves = [LeaveRecord(start=pkt(2024, 3, 5, 13, 0), end=pkt(2024, 3, 6, 10, 0))]
    start = pkt(2024, 3, 4, 11, 20)

    minutes = working_minutes_between(start, deadline, karachi_calendar, leaves)

    assert compute_deadline(start, minutes, karachi_calendar, leaves) == deadline


@pytest.mark.parametrize(
    "deadline",
    [
        datetime(2024, 3, 5, 3, 0, tzinfo=timezone.utc),
        datetime(2024, 3, 5, 23, 30, tzinfo=timezone.utc),
        datetime(2024, 3, 7, 5, 59, tzinfo=timezone.utc),
        datetime(2024, 3, 9, 2, 0, tzinfo=timezone.utc),
    ],
)
def test_overnight_deadline_is_recovered_from_measured_minutes(night_shift_calendar, deadline):
    start = datetime(2024, 3, 4, 23, 0, tzinfo=timezone.utc)

    minutes = working_minutes_between(start, deadline, night_shift_calendar)

    assert compute_deadline(start, minutes, night_shift_calendar) == deadline


def test_friday_night_shift_tail_is_measured_on_saturday(night_shift_calendar):
    friday_night = datetime(2024, 3, 8, 22, 0, tzinfo=timezone.utc)
    saturday_morning = datetime(2024, 3, 9, 6, 0, tzinfo=timezone.utc)

    assert working_minutes_between(friday_night, saturday_morning, night_shift_calendar) == pytest.approx(480)
    # A start inside that tail is judged by Saturday, which is off.
    assert working_minutes_between(
        datetime(2024, 3, 9, 2, 0, tzinfo=timezone.utc), saturday_morning, night_shift_calendar
    ) == 0.0


@pytest.mark.parametrize(
    "deadline, minutes",
    [
        (datetime(2024, 3, 10, 6, 30, tzinfo=timezone.utc), 210),
        (datetime(2024, 3, 10, 7, 0, tzinfo=timezone.utc), 300),
        (datetime(2024, 3, 10, 7, 30, tzinfo=timezone.utc), 330),
    ],
)
def test_round_trip_across_dst_gap_on_overnight_shift(deadline, minutes):
    config = CalendarConfig.create(
        working_days={1, 2, 3, 4, 5, 6, 7},
        start_time="22:00",
        end_time="06:00",
        timezone="America/New_York",
    )
    start = datetime(2024, 3, 10, 3, 0, tzinfo=timezone.utc)

    # Wall-clock minutes: the skipped hour still counts on the shift clock.
    assert working_minutes_between(start, deadline, config) == pytest.approx(minutes)
    assert compute_deadline(start, minutes, config) == deadline
