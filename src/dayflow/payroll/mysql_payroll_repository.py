from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, where_sql
from .model import PayrollRecord
from .repository import PayrollRepository

_SELECT = """
    SELECT pr.payroll_id, pr.user_id, pr.basic_salary, pr.allowances, pr.deductions, pr.net_salary,
           pr.month, pr.year, pr.payment_date,
           CONCAT(p.first_name, ' ', p.last_name) AS employee_name, p.employee_id AS employee_code
    FROM payroll pr
    JOIN profiles p ON p.profile_id = pr.user_id
"""


def _dec(value: Any) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value or 0))


def _to_record(r: dict[str, Any]) -> PayrollRecord:
    return PayrollRecord(
        payroll_id=int(r["payroll_id"]),
        user_id=int(r["user_id"]),
        basic_salary=_dec(r["basic_salary"]),
        allowances=_dec(r["allowances"]),
        deductions=_dec(r["deductions"]),
        net_salary=_dec(r["net_salary"]),
        month=int(r["month"]),
        year=int(r["year"]),
        payment_date=r.get("payment_date"),
        employee_name=r.get("employee_name"),
        employee_code=r.get("employee_code"),
    )


def _period_filters(year: Optional[int], month: Optional[int], clauses: list[str], params: list[object]) -> None:
    if year is not None:
        clauses.append("pr.year=%s")
        params.append(int(year))
    if month is not None:
        clauses.append("pr.month=%s")
        params.append(int(month))


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, clauses: list[str], params: list[object]) -> list[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} {where_sql(clauses)} ORDER BY pr.year DESC, pr.month DESC, pr.payroll_id DESC",
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        rows = self._select(["pr.payroll_id=%s"], [int(payroll_id)])
        return rows[0] if rows else None

    def list_for_user(self, user_id: int, *, year: Optional[int] = None) -> Sequence[PayrollRecord]:
        clauses = ["pr.user_id=%s"]
        params: list[object] = [int(user_id)]
        _period_filters(year, None, clauses, params)
        return self._select(clauses, params)

    def list_all(self, *, year: Optional[int] = None, month: Optional[int] = None) -> Sequence[PayrollRecord]:
        clauses: list[str] = []
        params: list[object] = []
        _period_filters(year, month, clauses, params)
        return self._select(clauses, params)
