from __future__ import annotations

from ..common.formatting import format_currency
from ..core.exceptions import AuthorizationError, ValidationError
from ..users.model import SessionContext
from .model import PayrollRecord
from .repository import PayrollRepository
from .slip import render_salary_slip, slip_filename


def to_row(record: PayrollRecord, *, with_employee: bool = False) -> dict:
    row = {
        "id": record.payroll_id,
        "period": record.period_label,
        "basic_salary": format_currency(record.basic_salary),
        "allowances": f"+{format_currency(record.allowances)}",
        "deductions": f"-{format_currency(record.deductions)}",
        "net_salary": format_currency(record.net_salary),
        "payment_date": record.payment_date.strftime("%b %d, %Y") if record.payment_date else "-",
        "net_consistent": record.is_net_consistent,
    }
    if with_employee:
        row["employee"] = record.employee_name or "-"
        row["employee_id"] = record.employee_code or "-"
    return row


class PayrollService:
    def __init__(self, payroll: PayrollRepository):
        self._payroll = payroll

    def salary_slip(self, session: SessionContext, *, payroll_id: int) -> tuple[str, str]:
        """Return ``(filename, text)`` for a record the caller may see."""
        record = self._payroll.get_by_id(int(payroll_id))
        if not record:
            raise ValidationError("Payroll record not found")
        if record.user_id != session.user_id and not session.is_hr_or_admin:
            raise AuthorizationError("You can only download your own salary slips")
        return slip_filename(record), render_salary_slip(record)
