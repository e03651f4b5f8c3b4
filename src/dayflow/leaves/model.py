from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveStatus, LeaveType


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    user_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    reason: Optional[str]
    status: LeaveStatus
    created_at: datetime
    reviewed_by: Optional[int] = None
    review_comment: Optional[str] = None
    employee_name: Optional[str] = None

    @property
    def days(self) -> int:
        return (self.end_date - self.start_date).days + 1
