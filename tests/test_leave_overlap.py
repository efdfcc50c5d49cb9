from datetime import datetime, timedelta, timezone

from core.models import LeaveRecord
from core.services.work_calendar.leave import LocalInterval, locate_free_instant, overlap_minutes


def test_overlap_is_measured_in_calendar_zone():
    # 05:00-07:00 UTC is 10:00-12:00 in Karachi.
    leave = LeaveRecord(
        start=datetime(2024, 3, 4, 5, 0, tzinfo=timezone.utc),
        end=datetime(2024, 3, 4, 7, 0, tzinfo=timezone.utc),
    )

    assert overlap_minutes(datetime(2024, 3, 4, 9), datetime(2024, 3, 4, 11), [leave], "Asia/Karachi") == 60
    assert overlap_minutes(datetime(2024, 3, 4, 12), datetime(2024, 3, 4, 17), [leave], "Asia/Karachi") == 0


def test_overlapping_leaves_are_each_counted():
    leaves = [
        LeaveRecord(datetime(2024, 3, 4, 10, tzinfo=timezone.utc), datetime(2024, 3, 4, 12, tzinfo=timezone.utc)),
        LeaveRecord(datetime(2024, 3, 4, 11, tzinfo=timezone.utc), datetime(2024, 3, 4, 13, tzinfo=timezone.utc)),
    ]

    assert overlap_minutes(datetime(2024, 3, 4, 9), datetime(2024, 3, 4, 17), leaves, "UTC") == 240


def test_free_instant_skips_merged_leave_gaps():
    start, end = datetime(2024, 3, 4, 9), datetime(2024, 3, 4, 17)
    leaves = [
        LocalInterval(datetime(2024, 3, 4, 10), datetime(2024, 3, 4, 11)),
        LocalInterval(datetime(2024, 3, 4, 10, 30), datetime(2024, 3, 4, 12)),
    ]

    assert locate_free_instant(start, end, timedelta(minutes=30), leaves) == datetime(2024, 3, 4, 9, 30)
    assert locate_free_instant(start, end, timedelta(minutes=90), leaves) == datetime(2024, 3, 4, 12, 30)
