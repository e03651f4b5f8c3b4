from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Profile


class ProfileRepository(Protocol):
    """Read/write access to profiles.

    Note (DIP): services depend on this interface, not on a concrete store.
    """

    def get_by_id(self, profile_id: int) -> Optional[Profile]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Profile]:
        raise NotImplementedError

    def get_by_employee_id(self, employee_id: str) -> Optional[Profile]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Profile]:
        """All profiles with their roles, ordered by first name."""

        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError

    def create_profile(
        self,
        *,
        employee_id: str,
        email: str,
        password_hash: str,
        first_name: str,
        last_name: str,
        role: Role,
    ) -> int:
        raise NotImplementedError

    def update_contact_info(self, profile_id: int, *, phone: Optional[str], address: Optional[str]) -> bool:
        raise NotImplementedError

    def update_job_fields(
        self,
        profile_id: int,
        *,
        department: Optional[str],
        designation: Optional[str],
        date_of_joining: Optional[date],
    ) -> bool:
        raise NotImplementedError


class RoleRepository(Protocol):
    def roles_for_user(self, user_id: int) -> set[Role]:
        raise NotImplementedError
