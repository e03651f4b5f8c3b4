from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..attendance.service import allowed_action, to_row as attendance_row
from ..common.datetime_utils import month_bounds, year_bounds
from ..common.formatting import format_currency
from ..core.constants import RECENT_LEAVES_LIMIT
from ..core.enums import AttendanceStatus, LeaveStatus
from ..leaves.service import to_row as leave_row
from ..reports.aggregation import (
    approved_leave_days,
    attendance_rate,
    attendance_stats,
    leave_balance,
    payroll_totals,
)
from .attendance import CheckInOutMixin
from .base import Page


def greeting(hour: int) -> str:
    if hour < 12:
        return "Good morning"
    if hour < 18:
        return "Good afternoon"
    return "Good evening"


@dataclass
class OrganizationStats:
    total_employees: int = 0
    present_today: int = 0
    pending_leaves: int = 0
    monthly_payroll: str = "$0.00"


@dataclass
class PersonalStats:
    leave_total: int = 0
    leave_used: int = 0
    leave_remaining: int = 0
    leave_over_allotment: bool = False
    present_days_this_month: int = 0
    attendance_rate: int = 0


@dataclass
class DashboardView:
    greeting: str
    role: str
    today: Optional[dict] = None
    action: str = "check_in"
    recent_leaves: list = field(default_factory=list)
    personal: Optional[PersonalStats] = None
    organization: Optional[OrganizationStats] = None
    error: Optional[str] = None


class DashboardPage(CheckInOutMixin, Page[DashboardView]):
    name = "dashboard"

    def empty(self, error: str) -> DashboardView:
        return DashboardView(greeting=greeting(self.now.hour), role=self.session.role.value, error=error)

    def build(self) -> DashboardView:
        s = self.session
        c = self._c

        today_rec = c.attendance_service.today_record(s.user_id, self.today)
        # Employees need the full list for the leave balance.
        own_leaves = c.leaves_repo.list_for_user(s.user_id, limit=RECENT_LEAVES_LIMIT if s.is_hr_or_admin else None)

        view = DashboardView(
            greeting=greeting(self.now.hour),
            role=s.role.value,
            today=attendance_row(today_rec) if today_rec else None,
            action=allowed_action(today_rec),
            recent_leaves=[leave_row(r) for r in own_leaves[:RECENT_LEAVES_LIMIT]],
        )

        if s.is_hr_or_admin:
            month_payroll = c.payroll_repo.list_all(year=self.today.year, month=self.today.month)
            view.organization = OrganizationStats(
                total_employees=c.profile_service.count_employees(),
                present_today=c.attendance_repo.count(work_date=self.today, status=AttendanceStatus.PRESENT),
                pending_leaves=c.leaves_repo.count(status=LeaveStatus.PENDING),
                monthly_payroll=format_currency(payroll_totals(month_payroll).total_net),
            )
        else:
            month = c.attendance_repo.list_for_user(s.user_id, month_bounds(self.today))
            stats = attendance_stats(month)
            balance = leave_balance(c.leave_allotment, approved_leave_days(own_leaves, year_bounds(self.today)))
            view.personal = PersonalStats(
                leave_total=balance.total,
                leave_used=balance.used,
                leave_remaining=balance.remaining,
                leave_over_allotment=balance.over_allotment,
                present_days_this_month=stats.present,
                attendance_rate=attendance_rate(stats),
            )
        return view
