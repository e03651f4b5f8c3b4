from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..common.datetime_utils import DateRange
from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_for_user(
        self,
        user_id: int,
        date_range: Optional[DateRange] = None,
        *,
        limit: Optional[int] = None,
    ) -> Sequence[LeaveRequest]:
        """Newest request first; ``date_range`` filters on start_date."""

        raise NotImplementedError

    def list_all(self, date_range: Optional[DateRange] = None) -> Sequence[LeaveRequest]:
        """Organization-wide listing; callers must hold an hr/admin session."""

        raise NotImplementedError

    def count(
        self,
        *,
        user_id: Optional[int] = None,
        status: Optional[LeaveStatus] = None,
        start_range: Optional[DateRange] = None,
        created_range: Optional[DateRange] = None,
    ) -> int:
        raise NotImplementedError

    def create_leave_request(
        self,
        *,
        user_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: Optional[str],
    ) -> int:
        raise NotImplementedError

    def set_leave_status(
        self,
        *,
        request_id: int,
        status: LeaveStatus,
        reviewer_id: int,
        review_comment: Optional[str] = None,
    ) -> bool:
        """Transition a PENDING request; returns False if it was not pending."""

        raise NotImplementedError
