from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..common.formatting import format_currency
from ..payroll.service import to_row
from ..reports.aggregation import payroll_totals
from .base import Page
from .scope import scoped_payroll


@dataclass
class PayrollSummary:
    records: int = 0
    total_net: str = "$0.00"
    total_allowances: str = "$0.00"
    total_deductions: str = "$0.00"
    average_net: str = "$0.00"
    latest_net: str = "$0.00"


@dataclass
class PayrollView:
    records: list = field(default_factory=list)
    summary: PayrollSummary = field(default_factory=PayrollSummary)
    organization_wide: bool = False
    error: Optional[str] = None


class PayrollPage(Page[PayrollView]):
    name = "payroll"

    def empty(self, error: str) -> PayrollView:
        return PayrollView(organization_wide=self.session.is_hr_or_admin, error=error)

    def build(self) -> PayrollView:
        org = self.session.is_hr_or_admin
        records = scoped_payroll(self.session, self._c.payroll_repo)
        totals = payroll_totals(records)

        return PayrollView(
            records=[to_row(r, with_employee=org) for r in records],
            summary=PayrollSummary(
                records=totals.count,
                total_net=format_currency(totals.total_net),
                total_allowances=format_currency(totals.total_allowances),
                total_deductions=format_currency(totals.total_deductions),
                average_net=format_currency(totals.average_net),
                latest_net=format_currency(totals.latest_net),
            ),
            organization_wide=org,
        )

    def salary_slip(self, payroll_id: int) -> tuple[str, str]:
        return self._c.payroll_service.salary_slip(self.session, payroll_id=payroll_id)
