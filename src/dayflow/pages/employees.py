from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..users.model import Profile
from ..users.service import SessionProvider, distinct_departments, filter_employees
from .base import MutationResult, Page


def employee_row(p: Profile) -> dict:
    return {
        "id": p.profile_id,
        "employee_id": p.employee_id,
        "name": p.full_name,
        "initials": p.initials,
        "email": p.email,
        "phone": p.phone or "-",
        "department": p.department or "-",
        "designation": p.designation or "-",
        "date_of_joining": p.date_of_joining.isoformat() if p.date_of_joining else None,
        "role": SessionProvider.pick_role(set(p.roles)).value,
    }


@dataclass
class EmployeesView:
    employees: list = field(default_factory=list)
    departments: list = field(default_factory=list)
    query: str = ""
    department: str = "all"
    total: int = 0
    error: Optional[str] = None


class EmployeesPage(Page[EmployeesView]):
    name = "employees"
    requires_hr_or_admin = True

    def __init__(self, *args, query: str = "", department: str = "all", **kwargs):
        super().__init__(*args, **kwargs)
        self.query = query or ""
        self.department = department or "all"

    def empty(self, error: str) -> EmployeesView:
        return EmployeesView(query=self.query, department=self.department, error=error)

    def build(self) -> EmployeesView:
        profiles = self._c.profile_service.list_employees(self.session)
        matches = filter_employees(profiles, query=self.query, department=self.department)
        return EmployeesView(
            employees=[employee_row(p) for p in matches],
            departments=distinct_departments(profiles),
            query=self.query,
            department=self.department,
            total=len(profiles),
        )

    def update_job_fields(
        self,
        profile_id: int,
        *,
        department: Optional[str],
        designation: Optional[str],
        date_of_joining: Optional[date],
    ) -> MutationResult:
        return self.mutate(
            f"profile:{int(profile_id)}",
            lambda: self._c.profile_service.update_job_fields(
                self.session,
                profile_id=profile_id,
                department=department,
                designation=designation,
                date_of_joining=date_of_joining,
            ),
            success="Employee details updated",
        )
