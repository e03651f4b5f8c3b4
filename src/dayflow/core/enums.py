from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Coarse role used for page gating and query scoping."""

    EMPLOYEE = "employee"
    HR = "hr"
    ADMIN = "admin"

    @property
    def is_hr_or_admin(self) -> bool:
        return self in {Role.HR, Role.ADMIN}


# Lowest to highest privilege.
ROLE_PRECEDENCE = (Role.EMPLOYEE, Role.HR, Role.ADMIN)


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    HALF_DAY = "half_day"
    LEAVE = "leave"


class LeaveType(str, Enum):
    PAID = "paid"
    SICK = "sick"
    UNPAID = "unpaid"
    CASUAL = "casual"


class LeaveStatus(str, Enum):
    """Leave workflow: PENDING is initial, the other two are terminal."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not LeaveStatus.PENDING


STATUS_LABELS = {
    AttendanceStatus.PRESENT: "Present",
    AttendanceStatus.ABSENT: "Absent",
    AttendanceStatus.HALF_DAY: "Half Day",
    AttendanceStatus.LEAVE: "On Leave",
    LeaveStatus.PENDING: "Pending",
    LeaveStatus.APPROVED: "Approved",
    LeaveStatus.REJECTED: "Rejected",
}
