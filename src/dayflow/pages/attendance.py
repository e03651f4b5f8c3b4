from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..attendance.service import allowed_action, to_row
from ..common.datetime_utils import month_bounds
from ..reports.aggregation import AttendanceStats, attendance_rate, attendance_stats
from .base import MutationResult, Page
from .scope import scoped_attendance


@dataclass
class AttendanceView:
    period_start: str
    period_end: str
    records: list = field(default_factory=list)
    stats: AttendanceStats = field(default_factory=AttendanceStats)
    attendance_rate: int = 0
    # Personal check-in card; employees only.
    today: Optional[dict] = None
    action: Optional[str] = None
    organization_wide: bool = False
    error: Optional[str] = None


class CheckInOutMixin:
    """Check-in/out commands for pages that show the attendance card."""

    def check_in(self) -> MutationResult:
        return self.mutate(
            "attendance",
            lambda: self._c.attendance_service.check_in(self.session, now=self.now),
            success="Your attendance has been recorded",
        )

    def check_out(self) -> MutationResult:
        return self.mutate(
            "attendance",
            lambda: self._c.attendance_service.check_out(self.session, now=self.now),
            success="Have a great day!",
        )


class AttendancePage(CheckInOutMixin, Page[AttendanceView]):
    name = "attendance"

    def empty(self, error: str) -> AttendanceView:
        bounds = month_bounds(self.today)
        return AttendanceView(period_start=bounds.start, period_end=bounds.end, error=error)

    def build(self) -> AttendanceView:
        bounds = month_bounds(self.today)
        org = self.session.is_hr_or_admin
        records = scoped_attendance(self.session, self._c.attendance_repo, bounds)
        stats = attendance_stats(records)

        view = AttendanceView(
            period_start=bounds.start,
            period_end=bounds.end,
            records=[to_row(r, with_employee=org) for r in records],
            stats=stats,
            attendance_rate=attendance_rate(stats),
            organization_wide=org,
        )
        if not org:
            today_rec = next((r for r in records if r.work_date == self.today), None)
            view.today = to_row(today_rec) if today_rec else None
            view.action = allowed_action(today_rec)
        return view
