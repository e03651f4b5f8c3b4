from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..common.validators import require_time_order
from ..core.enums import STATUS_LABELS
from ..core.exceptions import DataAccessError, ValidationError
from ..users.model import SessionContext
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

ACTION_CHECK_IN = "check_in"
ACTION_CHECK_OUT = "check_out"
ACTION_DONE = "done"


def allowed_action(record: Optional[AttendanceRecord]) -> str:
    """Which attendance button the employee may press today."""
    if record is None or record.check_in is None:
        return ACTION_CHECK_IN
    if record.check_out is None:
        return ACTION_CHECK_OUT
    return ACTION_DONE


def to_row(record: AttendanceRecord, *, with_employee: bool = False) -> dict:
    row = {
        "id": record.attendance_id,
        "date": record.work_date.isoformat(),
        "check_in": record.check_in.strftime("%I:%M %p") if record.check_in else "-",
        "check_out": record.check_out.strftime("%I:%M %p") if record.check_out else "-",
        "status": record.status.value,
        "status_label": STATUS_LABELS[record.status],
    }
    if with_employee:
        row["employee"] = record.employee_name or "-"
    return row


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def today_record(self, user_id: int, today: date) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_user_and_date(user_id, today)

    def check_in(self, session: SessionContext, *, now: Optional[datetime] = None) -> AttendanceRecord:
        """Idempotent per (user, date): a repeated call returns the first record."""
        now = now or now_local()
        today = now.date()

        existing = self._attendance.get_for_user_and_date(session.user_id, today)
        if existing and existing.check_in is not None:
            logger.info("User %s already checked in on %s", session.user_id, today)
            return existing

        attendance_id = self._attendance.upsert_check_in(user_id=session.user_id, work_date=today, check_in=now)
        record = self._attendance.get_by_id(attendance_id)
        if record is None:
            raise DataAccessError("Check-in was not recorded")

        logger.info("User %s checked in at %s", session.user_id, now.isoformat(timespec="seconds"))
        return record

    def check_out(self, session: SessionContext, *, now: Optional[datetime] = None) -> AttendanceRecord:
        now = now or now_local()
        today = now.date()

        record = self._attendance.get_for_user_and_date(session.user_id, today)
        if not record or record.check_in is None:
            raise ValidationError("You have not checked in today")
        if record.check_out is not None:
            raise ValidationError("You have already checked out today")
        require_time_order(record.check_in, now)

        if not self._attendance.set_check_out(attendance_id=record.attendance_id, check_out=now):
            raise DataAccessError("Check-out was not recorded")

        logger.info("User %s checked out at %s", session.user_id, now.isoformat(timespec="seconds"))
        return self._attendance.get_by_id(record.attendance_id) or record
