from __future__ import annotations

from datetime import datetime

import pytest

from dayflow.attendance.service import ACTION_CHECK_IN, ACTION_CHECK_OUT, ACTION_DONE, AttendanceService, allowed_action, to_row
from dayflow.core.enums import AttendanceStatus
from dayflow.core.exceptions import ValidationError

from fakes import FakeAttendanceRepo, FakeProfilesRepo, day, session_for

MORNING = datetime(2025, 3, 14, 9, 0)
EVENING = datetime(2025, 3, 14, 17, 30)


@pytest.fixture
def employee():
    return session_for(FakeProfilesRepo().add(first_name="Eli", last_name="Turner"))


def test_check_in_twice_keeps_one_record(employee):
    repo = FakeAttendanceRepo()
    svc = AttendanceService(repo)

    first = svc.check_in(employee, now=MORNING)
    second = svc.check_in(employee, now=datetime(2025, 3, 14, 9, 5))

    assert repo.count(user_id=employee.user_id, work_date=day(14)) == 1
    assert second.attendance_id == first.attendance_id
    # First check-in wins.
    assert second.check_in == MORNING


def test_check_out_requires_check_in(employee):
    svc = AttendanceService(FakeAttendanceRepo())
    with pytest.raises(ValidationError):
        svc.check_out(employee, now=EVENING)


def test_check_out_sets_time_once(employee):
    repo = FakeAttendanceRepo()
    svc = AttendanceService(repo)
    svc.check_in(employee, now=MORNING)

    rec = svc.check_out(employee, now=EVENING)
    assert rec.check_out == EVENING

    with pytest.raises(ValidationError):
        svc.check_out(employee, now=datetime(2025, 3, 14, 18, 0))


def test_check_out_before_check_in_is_rejected(employee):
    repo = FakeAttendanceRepo()
    repo.add(user_id=employee.user_id, work_date=day(14), check_in=datetime(2025, 3, 14, 10, 0))

    with pytest.raises(ValidationError) as exc:
        AttendanceService(repo).check_out(employee, now=MORNING)
    assert exc.value.field == "check_out"


def test_allowed_action_follows_today_record():
    repo = FakeAttendanceRepo()
    assert allowed_action(None) == ACTION_CHECK_IN

    rec = repo.add(user_id=1, work_date=day(14), check_in=MORNING)
    assert allowed_action(rec) == ACTION_CHECK_OUT

    rec = repo.add(user_id=1, work_date=day(15), check_in=MORNING, check_out=EVENING)
    assert allowed_action(rec) == ACTION_DONE


def test_row_formats_times_and_labels():
    rec = FakeAttendanceRepo().add(user_id=1, work_date=day(14), check_in=MORNING)
    row = to_row(rec)

    assert row["date"] == "2025-03-14"
    assert row["check_in"] == "09:00 AM"
    assert row["check_out"] == "-"
    assert row["status_label"] == "Present"
    assert "employee" not in row


def test_check_in_fills_pre_marked_row(employee):
    repo = FakeAttendanceRepo()
    marked = repo.add(user_id=employee.user_id, work_date=day(14), status=AttendanceStatus.ABSENT)
    svc = AttendanceService(repo)

    rec = svc.check_in(employee, now=MORNING)

    assert rec.attendance_id == marked.attendance_id
    assert rec.check_in == MORNING
    assert rec.status is AttendanceStatus.PRESENT
    assert allowed_action(rec) == ACTION_CHECK_OUT
    assert repo.count(user_id=employee.user_id, work_date=day(14)) == 1
    assert svc.check_out(employee, now=EVENING).check_out == EVENING
