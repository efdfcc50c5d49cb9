from datetime import datetime, timedelta, timezone

import pytest

from core.models import LeaveRecord
from core.services.work_calendar import WorkCalendarEngine, recalculate_after_hold


def pkt(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc) - timedelta(hours=5)


def test_resume_carries_unelapsed_minutes(karachi_calendar):
    result = recalculate_after_hold(
        held_at=pkt(2024, 3, 4, 13, 0),
        original_deadline=pkt(2024, 3, 4, 17, 0),
        resume_at=pkt(2024, 3, 6, 9, 0),
        calendar=karachi_calendar,
    )

    assert result.remaining_minutes == pytest.approx(240)
    assert result.deadline == pkt(2024, 3, 6, 13, 0)


def test_hold_after_breach_carries_nothing(karachi_calendar):
    result = recalculate_after_hold(
        held_at=pkt(2024, 3, 5, 9, 0),
        original_deadline=pkt(2024, 3, 4, 17, 0),
        resume_at=pkt(2024, 3, 9, 12, 0),
        calendar=karachi_calendar,
    )

    assert result.remaining_minutes == 0
    assert result.deadline == pkt(2024, 3, 11, 9, 0)


def test_resume_respects_leave_at_each_end(karachi_calendar):
    engine = WorkCalendarEngine()
    leave_at_hold = [LeaveRecord(pkt(2024, 3, 4, 14, 0), pkt(2024, 3, 4, 15, 0))]
    leave_at_resume = [LeaveRecord(pkt(2024, 3, 6, 9, 0), pkt(2024, 3, 6, 10, 0))]

    result = engine.recalculate_after_hold(
        pkt(2024, 3, 4, 13, 0),
        pkt(2024, 3, 4, 17, 0),
        pkt(2024, 3, 6, 9, 0),
        karachi_calendar,
        leave_at_hold,
        leave_at_resume,
    )

    assert result.remaining_minutes == pytest.approx(180)
    assert result.deadline == pkt(2024, 3, 6, 13, 0)


def test_hold_exactly_at_deadline_carries_nothing(karachi_calendar):
    deadline = pkt(2024, 3, 4, 15, 0)

    weekend_resume = recalculate_after_hold(deadline, deadline, pkt(2024, 3, 9, 12, 0), karachi_calendar)
    in_shift_resume = recalculate_after_hold(deadline, deadline, pkt(2024, 3, 6, 10, 45), karachi_calendar)

    assert weekend_resume.remaining_minutes == 0
    assert weekend_resume.deadline == pkt(2024, 3, 11, 9, 0)
    assert in_shift_resume.remaining_minutes == 0
    assert in_shift_resume.deadline == pkt(2024, 3, 6, 10, 45)
