from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..common.datetime_utils import year_bounds
from ..core.enums import LeaveType
from ..leaves.service import to_row
from ..reports.aggregation import LeaveBalance, LeaveStats, approved_leave_days, leave_balance, leave_stats
from .base import MutationResult, Page
from .scope import scoped_leaves


@dataclass
class LeavesView:
    requests: list = field(default_factory=list)
    stats: LeaveStats = field(default_factory=LeaveStats)
    leave_types: list = field(default_factory=lambda: [t.value for t in LeaveType])
    balance: Optional[LeaveBalance] = None
    can_review: bool = False
    error: Optional[str] = None


class LeavesPage(Page[LeavesView]):
    name = "leaves"

    def empty(self, error: str) -> LeavesView:
        return LeavesView(can_review=self.session.is_hr_or_admin, error=error)

    def build(self) -> LeavesView:
        org = self.session.is_hr_or_admin
        requests = scoped_leaves(self.session, self._c.leaves_repo)

        view = LeavesView(
            requests=[to_row(r, with_employee=org) for r in requests],
            stats=leave_stats(requests),
            can_review=org,
        )
        if not org:
            used = approved_leave_days(requests, year_bounds(self.today))
            view.balance = leave_balance(self._c.leave_allotment, used)
        return view

    def submit(
        self,
        *,
        leave_type: str,
        start_date: Optional[date],
        end_date: Optional[date],
        reason: Optional[str] = None,
    ) -> MutationResult:
        return self.mutate(
            "leave:new",
            lambda: self._c.leave_service.create(
                self.session,
                leave_type=leave_type,
                start_date=start_date,
                end_date=end_date,
                reason=reason,
            ),
            success="Leave request submitted successfully",
        )

    def approve(self, request_id: int, comment: str = "") -> MutationResult:
        return self.mutate(
            f"leave:{int(request_id)}",
            lambda: self._c.leave_service.approve(self.session, request_id=request_id, comment=comment),
            success="Leave request has been approved",
        )

    def reject(self, request_id: int, comment: str = "") -> MutationResult:
        return self.mutate(
            f"leave:{int(request_id)}",
            lambda: self._c.leave_service.reject(self.session, request_id=request_id, comment=comment),
            success="Leave request has been rejected",
        )
