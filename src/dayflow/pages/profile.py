from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .base import MutationResult, Page


@dataclass
class ProfileView:
    profile: Optional[dict] = None
    editable_fields: tuple = ("phone", "address")
    error: Optional[str] = None


class ProfilePage(Page[ProfileView]):
    name = "profile"

    def empty(self, error: str) -> ProfileView:
        return ProfileView(error=error)

    def build(self) -> ProfileView:
        p = self._c.profile_service.get_own(self.session)
        if p is None:
            return ProfileView(error="Profile not found")
        return ProfileView(
            profile={
                "id": p.profile_id,
                "employee_id": p.employee_id,
                "email": p.email,
                "first_name": p.first_name,
                "last_name": p.last_name,
                "initials": p.initials,
                "phone": p.phone,
                "address": p.address,
                "department": p.department,
                "designation": p.designation,
                "date_of_joining": p.date_of_joining.isoformat() if p.date_of_joining else None,
                "avatar_url": p.avatar_url,
                "role": self.session.role.value,
            }
        )

    def save_contact_info(self, *, phone: Optional[str], address: Optional[str]) -> MutationResult:
        return self.mutate(
            "profile",
            lambda: self._c.profile_service.update_contact_info(
                self.session,
                profile_id=self.session.user_id,
                phone=phone,
                address=address,
            ),
            success="Profile updated successfully",
        )
