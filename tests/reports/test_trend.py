from __future__ import annotations

import time
from datetime import date, datetime

from dayflow.core.enums import AttendanceStatus, LeaveStatus
from dayflow.reports.trend import MonthlyTrendBuilder

from fakes import FakeAttendanceRepo, FakeLeavesRepo


class SlowOldMonthsAttendanceRepo(FakeAttendanceRepo):
    """Older windows answer last, so completion order differs from window order."""

    def count(self, *, user_id=None, status=None, work_date=None, date_range=None):
        if date_range is not None:
            age = 2025 * 12 + 2 - (date_range.start_date.year * 12 + date_range.start_date.month)
            time.sleep(0.01 * age)
        return super().count(user_id=user_id, status=status, work_date=work_date, date_range=date_range)


def test_trend_is_oldest_to_newest_regardless_of_completion_order():
    attendance = SlowOldMonthsAttendanceRepo()
    attendance.add(user_id=1, work_date=date(2024, 9, 2))
    attendance.add(user_id=1, work_date=date(2025, 2, 3))
    attendance.add(user_id=2, work_date=date(2025, 2, 4))
    attendance.add(user_id=2, work_date=date(2025, 2, 5), status=AttendanceStatus.ABSENT)

    leaves = FakeLeavesRepo()
    leaves.add(user_id=1, start_date=date(2025, 1, 6), end_date=date(2025, 1, 7), status=LeaveStatus.APPROVED)
    leaves.add(user_id=1, start_date=date(2025, 1, 8), end_date=date(2025, 1, 8), status=LeaveStatus.PENDING)

    points = MonthlyTrendBuilder(attendance, leaves, max_workers=6).build(date(2025, 2, 15), 6)

    assert [p.label for p in points] == ["Sep", "Oct", "Nov", "Dec", "Jan", "Feb"]
    assert [p.present_day_count for p in points] == [1, 0, 0, 0, 0, 2]
    assert [p.approved_leave_count for p in points] == [0, 0, 0, 0, 1, 0]


def test_trend_can_be_scoped_to_one_user():
    attendance = FakeAttendanceRepo()
    attendance.add(user_id=1, work_date=date(2025, 2, 3))
    attendance.add(user_id=2, work_date=date(2025, 2, 4))

    points = MonthlyTrendBuilder(attendance, FakeLeavesRepo(), max_workers=2).build(date(2025, 2, 15), 2, user_id=2)

    assert [(p.label, p.present_day_count) for p in points] == [("Jan", 0), ("Feb", 1)]


def test_leaves_created_outside_window_still_count_by_start_date():
    leaves = FakeLeavesRepo()
    leaves.add(
        user_id=1,
        start_date=date(2025, 2, 10),
        end_date=date(2025, 2, 11),
        status=LeaveStatus.APPROVED,
        created_at=datetime(2024, 12, 20, 10, 0),
    )

    points = MonthlyTrendBuilder(FakeAttendanceRepo(), leaves).build(date(2025, 2, 15), 3)

    assert [p.approved_leave_count for p in points] == [0, 0, 1]
