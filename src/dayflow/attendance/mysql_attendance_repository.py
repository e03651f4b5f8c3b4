from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional, Sequence

from ..common.datetime_utils import DateRange
from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, range_clause, where_sql
from .model import AttendanceRecord
from .repository import AttendanceRepository

_SELECT = """
    SELECT a.attendance_id, a.user_id, a.work_date, a.check_in, a.check_out, a.status, a.notes,
           CONCAT(p.first_name, ' ', p.last_name) AS employee_name
    FROM attendance a
    JOIN profiles p ON p.profile_id = a.user_id
"""


def _to_record(r: dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        check_in=r.get("check_in"),
        check_out=r.get("check_out"),
        status=AttendanceStatus(r["status"]),
        notes=r.get("notes"),
        employee_name=r.get("employee_name"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, clauses: list[str], params: list[object]) -> list[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} {where_sql(clauses)} ORDER BY a.work_date DESC, a.attendance_id DESC",
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        rows = self._select(["a.attendance_id=%s"], [int(attendance_id)])
        return rows[0] if rows else None

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        rows = self._select(["a.user_id=%s", "a.work_date=%s"], [int(user_id), work_date])
        return rows[0] if rows else None

    def list_for_user(self, user_id: int, date_range: Optional[DateRange] = None) -> Sequence[AttendanceRecord]:
        clauses = ["a.user_id=%s"]
        params: list[object] = [int(user_id)]
        range_clause("a.work_date", date_range, clauses, params)
        return self._select(clauses, params)

    def list_all(self, date_range: Optional[DateRange] = None) -> Sequence[AttendanceRecord]:
        clauses: list[str] = []
        params: list[object] = []
        range_clause("a.work_date", date_range, clauses, params)
        return self._select(clauses, params)

    def count(
        self,
        *,
        user_id: Optional[int] = None,
        status: Optional[AttendanceStatus] = None,
        work_date: Optional[date] = None,
        date_range: Optional[DateRange] = None,
    ) -> int:
        clauses: list[str] = []
        params: list[object] = []
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(user_id))
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        if work_date is not None:
            clauses.append("work_date=%s")
            params.append(work_date)
        range_clause("work_date", date_range, clauses, params)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS n FROM attendance {where_sql(clauses)}", tuple(params))
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def upsert_check_in(self, *, user_id: int, work_date: date, check_in: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            # Assignments run left to right: status must see the old check_in.
            # LAST_INSERT_ID(expr) makes lastrowid point at the surviving row.
            cur.execute(
                """
                INSERT INTO attendance (user_id, work_date, check_in, status)
                VALUES (%s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE
                    status=IF(check_in IS NULL, VALUES(status), status),
                    check_in=COALESCE(check_in, VALUES(check_in)),
                    attendance_id=LAST_INSERT_ID(attendance_id)
                """,
                (int(user_id), work_date, check_in, AttendanceStatus.PRESENT.value),
            )
            return int(cur.lastrowid)

    def set_check_out(self, *, attendance_id: int, check_out: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance SET check_out=%s WHERE attendance_id=%s",
                (check_out, int(attendance_id)),
            )
            return cur.rowcount > 0
