from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..common.datetime_utils import DateRange
from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_user(self, user_id: int, date_range: Optional[DateRange] = None) -> Sequence[AttendanceRecord]:
        """Newest work date first."""

        raise NotImplementedError

    def list_all(self, date_range: Optional[DateRange] = None) -> Sequence[AttendanceRecord]:
        """Organization-wide listing; callers must hold an hr/admin session."""

        raise NotImplementedError

    def count(
        self,
        *,
        user_id: Optional[int] = None,
        status: Optional[AttendanceStatus] = None,
        work_date: Optional[date] = None,
        date_range: Optional[DateRange] = None,
    ) -> int:
        raise NotImplementedError

    def upsert_check_in(self, *, user_id: int, work_date: date, check_in: datetime) -> int:
        """Insert the (user, date) row or fill in an existing one; returns its id.

        A row without a check-in (e.g. pre-marked absent) gets ``check_in`` and
        status present. A row that already has a check-in is left untouched,
        so the first check-in wins.
        """

        raise NotImplementedError

    def set_check_out(self, *, attendance_id: int, check_out: datetime) -> bool:
        raise NotImplementedError
