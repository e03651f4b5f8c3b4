from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import MonthWindow, trailing_months
from ..core.constants import DEFAULT_TREND_WORKERS
from ..core.enums import AttendanceStatus, LeaveStatus
from ..leaves.repository import LeaveRepository
from .aggregation import TrendPoint

logger = logging.getLogger(__name__)


class MonthlyTrendBuilder:
    """Present-day and approved-leave counts for the last N months.

    Each window is an independent read, so windows are queried on a thread
    pool; ``executor.map`` keeps the result oldest-to-newest regardless of
    completion order.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        leaves: LeaveRepository,
        *,
        max_workers: int = DEFAULT_TREND_WORKERS,
    ):
        self._attendance = attendance
        self._leaves = leaves
        self._max_workers = max(int(max_workers), 1)

    def _point(self, window: MonthWindow, user_id: Optional[int]) -> TrendPoint:
        present = self._attendance.count(user_id=user_id, status=AttendanceStatus.PRESENT, date_range=window.bounds)
        approved = self._leaves.count(user_id=user_id, status=LeaveStatus.APPROVED, start_range=window.bounds)
        return TrendPoint(
            label=window.label,
            year=window.year,
            month=window.month,
            present_day_count=present,
            approved_leave_count=approved,
        )

    def build(self, ref: date, months: int, *, user_id: Optional[int] = None) -> list[TrendPoint]:
        windows = trailing_months(ref, months)
        workers = min(self._max_workers, len(windows))
        logger.debug("Building %d-month trend ending %s with %d workers", months, ref, workers)

        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(lambda w: self._point(w, user_id), windows))
