"""Plain-text salary slip.

Field order is fixed: period, basic salary, allowances, deductions,
net salary, payment date. Amounts are USD with two decimals.
"""
from __future__ import annotations

from ..common.formatting import format_currency
from ..core.constants import CURRENCY_CODE
from .model import PayrollRecord

_RULE = "-" * 40


def render_salary_slip(record: PayrollRecord, *, company: str = "Dayflow") -> str:
    payment = record.payment_date.strftime("%b %d, %Y") if record.payment_date else "-"
    lines = [
        f"{company} - Salary Slip",
        _RULE,
    ]
    if record.employee_name:
        employee = record.employee_name
        if record.employee_code:
            employee += f" ({record.employee_code})"
        lines.append(f"Employee:     {employee}")
    lines += [
        f"Period:       {record.period_label}",
        f"Currency:     {CURRENCY_CODE}",
        _RULE,
        f"Basic Salary: {format_currency(record.basic_salary)}",
        f"Allowances:   +{format_currency(record.allowances)}",
        f"Deductions:   -{format_currency(record.deductions)}",
        f"Net Salary:   {format_currency(record.net_salary)}",
        _RULE,
        f"Payment Date: {payment}",
    ]
    return "\n".join(lines) + "\n"


def slip_filename(record: PayrollRecord) -> str:
    return f"salary-slip-{record.year}-{record.month:02d}.txt"
