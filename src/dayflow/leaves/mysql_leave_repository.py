from __future__ import annotations

from datetime import date
from typing import Any, Optional, Sequence

from ..common.datetime_utils import DateRange
from ..core.enums import LeaveStatus, LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, range_clause, where_sql
from .model import LeaveRequest
from .repository import LeaveRepository

_SELECT = """
    SELECT lr.request_id, lr.user_id, lr.leave_type, lr.start_date, lr.end_date, lr.reason, lr.status,
           lr.created_at, lr.reviewed_by, lr.review_comment,
           CONCAT(p.first_name, ' ', p.last_name) AS employee_name
    FROM leave_requests lr
    JOIN profiles p ON p.profile_id = lr.user_id
"""


def _to_request(r: dict[str, Any]) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(r["request_id"]),
        user_id=int(r["user_id"]),
        leave_type=LeaveType(r["leave_type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        reason=r.get("reason"),
        status=LeaveStatus(r["status"]),
        created_at=r["created_at"],
        reviewed_by=int(r["reviewed_by"]) if r.get("reviewed_by") is not None else None,
        review_comment=r.get("review_comment"),
        employee_name=r.get("employee_name"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, clauses: list[str], params: list[object], *, limit: Optional[int] = None) -> list[LeaveRequest]:
        sql = f"{_SELECT} {where_sql(clauses)} ORDER BY lr.created_at DESC, lr.request_id DESC"
        if limit is not None:
            sql += " LIMIT %s"
            params = [*params, int(limit)]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_request(r) for r in fetchall(cur)]

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        rows = self._select(["lr.request_id=%s"], [int(request_id)])
        return rows[0] if rows else None

    def list_for_user(
        self,
        user_id: int,
        date_range: Optional[DateRange] = None,
        *,
        limit: Optional[int] = None,
    ) -> Sequence[LeaveRequest]:
        clauses = ["lr.user_id=%s"]
        params: list[object] = [int(user_id)]
        range_clause("lr.start_date", date_range, clauses, params)
        return self._select(clauses, params, limit=limit)

    def list_all(self, date_range: Optional[DateRange] = None) -> Sequence[LeaveRequest]:
        clauses: list[str] = []
        params: list[object] = []
        range_clause("lr.start_date", date_range, clauses, params)
        return self._select(clauses, params)

    def count(
        self,
        *,
        user_id: Optional[int] = None,
        status: Optional[LeaveStatus] = None,
        start_range: Optional[DateRange] = None,
        created_range: Optional[DateRange] = None,
    ) -> int:
        clauses: list[str] = []
        params: list[object] = []
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(user_id))
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        range_clause("start_date", start_range, clauses, params)
        range_clause("DATE(created_at)", created_range, clauses, params)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS n FROM leave_requests {where_sql(clauses)}", tuple(params))
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def create_leave_request(
        self,
        *,
        user_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests (user_id, leave_type, start_date, end_date, reason, status)
                VALUES (%s, %s, %s, %s, %s, %s)
                """,
                (int(user_id), leave_type.value, start_date, end_date, reason, LeaveStatus.PENDING.value),
            )
            return int(cur.lastrowid)

    def set_leave_status(
        self,
        *,
        request_id: int,
        status: LeaveStatus,
        reviewer_id: int,
        review_comment: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, reviewed_by=%s, review_comment=%s
                WHERE request_id=%s AND status=%s
                """,
                (status.value, int(reviewer_id), review_comment, int(request_id), LeaveStatus.PENDING.value),
            )
            return cur.rowcount > 0
