from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """One row per (user, calendar date)."""

    attendance_id: int
    user_id: int
    work_date: date
    check_in: Optional[datetime]
    check_out: Optional[datetime]
    status: AttendanceStatus
    notes: Optional[str] = None
    # Filled by organization-wide listings only.
    employee_name: Optional[str] = None
