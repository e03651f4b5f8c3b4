from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Profile:
    """Identity record of one employee.

    Note: ``password_hash`` stays on the domain object for sign-in only and is
    never copied into a view model.
    """

    profile_id: int
    employee_id: str
    email: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    address: Optional[str] = None
    department: Optional[str] = None
    designation: Optional[str] = None
    date_of_joining: Optional[date] = None
    avatar_url: Optional[str] = None
    roles: tuple[Role, ...] = ()
    password_hash: str = field(default="", repr=False)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def initials(self) -> str:
        return f"{self.first_name[:1]}{self.last_name[:1]}".upper()


@dataclass(frozen=True)
class SessionContext:
    """Resolved identity passed explicitly into every page and service call."""

    user_id: int
    email: str
    role: Role
    full_name: str = ""

    @property
    def is_hr_or_admin(self) -> bool:
        return self.role.is_hr_or_admin
