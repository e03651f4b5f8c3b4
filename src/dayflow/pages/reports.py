from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..common.datetime_utils import month_bounds
from ..core.enums import LeaveStatus
from ..reports.aggregation import AttendanceStats, LeaveStats, TrendPoint, attendance_rate, attendance_stats
from .base import Page


@dataclass
class ReportsView:
    period_start: str
    period_end: str
    attendance: AttendanceStats = field(default_factory=AttendanceStats)
    attendance_rate: int = 0
    leaves: LeaveStats = field(default_factory=LeaveStats)
    trend: list[TrendPoint] = field(default_factory=list)
    error: Optional[str] = None


class ReportsPage(Page[ReportsView]):
    name = "reports"
    requires_hr_or_admin = True

    def empty(self, error: str) -> ReportsView:
        bounds = month_bounds(self.today)
        return ReportsView(period_start=bounds.start, period_end=bounds.end, error=error)

    def build(self) -> ReportsView:
        c = self._c
        bounds = month_bounds(self.today)

        stats = attendance_stats(c.attendance_repo.list_all(bounds))
        by_status = {s: c.leaves_repo.count(status=s, created_range=bounds) for s in LeaveStatus}

        return ReportsView(
            period_start=bounds.start,
            period_end=bounds.end,
            attendance=stats,
            attendance_rate=attendance_rate(stats),
            leaves=LeaveStats(
                total=sum(by_status.values()),
                pending=by_status[LeaveStatus.PENDING],
                approved=by_status[LeaveStatus.APPROVED],
                rejected=by_status[LeaveStatus.REJECTED],
            ),
            trend=c.trend_builder.build(self.today, c.trend_months),
        )
