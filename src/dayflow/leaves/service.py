from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.validators import optional_text, require_date_order
from ..core.enums import STATUS_LABELS, LeaveStatus, LeaveType
from ..core.exceptions import AuthorizationError, ValidationError
from ..users.model import SessionContext
from .model import LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


def to_row(leave: LeaveRequest, *, with_employee: bool = False) -> dict:
    row = {
        "id": leave.request_id,
        "leave_type": leave.leave_type.value,
        "start_date": leave.start_date.isoformat(),
        "end_date": leave.end_date.isoformat(),
        "days": leave.days,
        "reason": leave.reason or "-",
        "status": leave.status.value,
        "status_label": STATUS_LABELS[leave.status],
        "created_at": leave.created_at.isoformat(timespec="seconds"),
    }
    if with_employee:
        row["employee"] = leave.employee_name or "-"
        row["can_review"] = leave.status is LeaveStatus.PENDING
    return row


class LeaveService:
    def __init__(self, leaves: LeaveRepository):
        self._leaves = leaves

    def create(
        self,
        session: SessionContext,
        *,
        leave_type: LeaveType | str,
        start_date: Optional[date],
        end_date: Optional[date],
        reason: Optional[str] = None,
    ) -> int:
        """Validate fully before any write is attempted."""
        try:
            leave_type = LeaveType(leave_type)
        except ValueError:
            raise ValidationError("Unknown leave type", field="leave_type")
        if start_date is None:
            raise ValidationError("Start date is required", field="start_date")
        if end_date is None:
            raise ValidationError("End date is required", field="end_date")
        require_date_order(start_date, end_date)

        request_id = self._leaves.create_leave_request(
            user_id=session.user_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            reason=optional_text(reason, "reason"),
        )
        logger.info("User %s requested %s leave %s..%s", session.user_id, leave_type.value, start_date, end_date)
        return request_id

    def approve(self, session: SessionContext, *, request_id: int, comment: str = "") -> None:
        self._decide(session, request_id=request_id, status=LeaveStatus.APPROVED, comment=comment)

    def reject(self, session: SessionContext, *, request_id: int, comment: str = "") -> None:
        self._decide(session, request_id=request_id, status=LeaveStatus.REJECTED, comment=comment)

    def _decide(self, session: SessionContext, *, request_id: int, status: LeaveStatus, comment: str) -> None:
        if not session.is_hr_or_admin:
            raise AuthorizationError("Only HR can review leave requests")

        req = self._leaves.get_by_id(int(request_id))
        if not req:
            raise ValidationError("Leave request not found")
        if req.status.is_terminal:
            raise ValidationError("Leave request has already been reviewed")

        ok = self._leaves.set_leave_status(
            request_id=int(request_id),
            status=status,
            reviewer_id=session.user_id,
            review_comment=optional_text(comment, "comment"),
        )
        if not ok:
            raise ValidationError("Leave request has already been reviewed")
        logger.info("Leave %s %s by %s", request_id, status.value, session.user_id)
