"""Role-derived query scope.

The organization-wide ``list_all`` paths are only taken for hr/admin
sessions; every other session reads through ``list_for_user``.
"""
from __future__ import annotations

from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import DateRange
from ..leaves.model import LeaveRequest
from ..leaves.repository import LeaveRepository
from ..payroll.model import PayrollRecord
from ..payroll.repository import PayrollRepository
from ..users.model import SessionContext


def scoped_attendance(
    session: SessionContext,
    repo: AttendanceRepository,
    date_range: Optional[DateRange] = None,
) -> Sequence[AttendanceRecord]:
    if session.is_hr_or_admin:
        return repo.list_all(date_range)
    return repo.list_for_user(session.user_id, date_range)


def scoped_leaves(
    session: SessionContext,
    repo: LeaveRepository,
    date_range: Optional[DateRange] = None,
) -> Sequence[LeaveRequest]:
    if session.is_hr_or_admin:
        return repo.list_all(date_range)
    return repo.list_for_user(session.user_id, date_range)


def scoped_payroll(session: SessionContext, repo: PayrollRepository) -> Sequence[PayrollRecord]:
    if session.is_hr_or_admin:
        return repo.list_all()
    return repo.list_for_user(session.user_id)
