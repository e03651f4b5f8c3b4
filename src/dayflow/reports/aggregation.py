"""Pure reducers over fetched collections. No I/O happens here."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import DateRange
from ..common.stats import money, money_average, percent
from ..core.enums import AttendanceStatus, LeaveStatus
from ..leaves.model import LeaveRequest
from ..payroll.model import PayrollRecord


@dataclass(frozen=True)
class AttendanceStats:
    present: int = 0
    absent: int = 0
    half_day: int = 0
    leave: int = 0

    @property
    def total(self) -> int:
        return self.present + self.absent + self.half_day + self.leave


@dataclass(frozen=True)
class LeaveBalance:
    total: int
    used: int
    remaining: int
    # Days consumed beyond the allotment; remaining is clamped at 0 instead.
    overdraft: int = 0

    @property
    def over_allotment(self) -> bool:
        return self.overdraft > 0


@dataclass(frozen=True)
class LeaveStats:
    total: int = 0
    pending: int = 0
    approved: int = 0
    rejected: int = 0


@dataclass(frozen=True)
class PayrollTotals:
    count: int
    total_net: Decimal
    total_allowances: Decimal
    total_deductions: Decimal
    average_net: Decimal
    latest_net: Decimal


@dataclass(frozen=True)
class TrendPoint:
    label: str
    year: int
    month: int
    present_day_count: int
    approved_leave_count: int


def attendance_stats(records: Iterable[AttendanceRecord]) -> AttendanceStats:
    counts = {s: 0 for s in AttendanceStatus}
    for r in records:
        counts[r.status] += 1
    return AttendanceStats(
        present=counts[AttendanceStatus.PRESENT],
        absent=counts[AttendanceStatus.ABSENT],
        half_day=counts[AttendanceStatus.HALF_DAY],
        leave=counts[AttendanceStatus.LEAVE],
    )


def attendance_rate(stats: AttendanceStats) -> int:
    """Present share of the period's records as a whole percentage (0 if none)."""
    return percent(stats.present, stats.total)


def leave_balance(total: int, used: int) -> LeaveBalance:
    total = max(int(total), 0)
    used = max(int(used), 0)
    return LeaveBalance(
        total=total,
        used=used,
        remaining=max(total - used, 0),
        overdraft=max(used - total, 0),
    )


def approved_leave_days(requests: Iterable[LeaveRequest], period: DateRange) -> int:
    """Calendar days of approved leave falling inside ``period`` (clipped)."""
    start, end = period.start_date, period.end_date
    days = 0
    for r in requests:
        if r.status is not LeaveStatus.APPROVED:
            continue
        lo = max(r.start_date, start)
        hi = min(r.end_date, end)
        if hi >= lo:
            days += (hi - lo).days + 1
    return days


def leave_stats(requests: Sequence[LeaveRequest]) -> LeaveStats:
    by_status = {s: 0 for s in LeaveStatus}
    for r in requests:
        by_status[r.status] += 1
    return LeaveStats(
        total=len(requests),
        pending=by_status[LeaveStatus.PENDING],
        approved=by_status[LeaveStatus.APPROVED],
        rejected=by_status[LeaveStatus.REJECTED],
    )


def payroll_totals(records: Sequence[PayrollRecord]) -> PayrollTotals:
    total_net = sum((r.net_salary for r in records), Decimal(0))
    latest: Optional[PayrollRecord] = max(records, key=lambda r: (r.year, r.month), default=None)
    return PayrollTotals(
        count=len(records),
        total_net=money(total_net),
        total_allowances=money(sum((r.allowances for r in records), Decimal(0))),
        total_deductions=money(sum((r.deductions for r in records), Decimal(0))),
        average_net=money_average(total_net, len(records)),
        latest_net=money(latest.net_salary if latest else 0),
    )

