from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..common.datetime_utils import month_name


@dataclass(frozen=True)
class PayrollRecord:
    """Stored salary figures for one (user, month, year); never computed here."""

    payroll_id: int
    user_id: int
    basic_salary: Decimal
    allowances: Decimal
    deductions: Decimal
    net_salary: Decimal
    month: int
    year: int
    payment_date: Optional[date] = None
    employee_name: Optional[str] = None
    employee_code: Optional[str] = None

    @property
    def period_label(self) -> str:
        return f"{month_name(self.month)} {self.year}"

    @property
    def expected_net(self) -> Decimal:
        return self.basic_salary + self.allowances - self.deductions

    @property
    def is_net_consistent(self) -> bool:
        return self.expected_net == self.net_salary
