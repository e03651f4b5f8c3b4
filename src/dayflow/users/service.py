from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import optional_text, require_email, require_min_length, require_non_empty
from ..core.constants import SIGN_IN_MIN_PASSWORD, SIGN_UP_MIN_PASSWORD
from ..core.enums import ROLE_PRECEDENCE, Role
from ..core.exceptions import AuthenticationError, AuthorizationError, DataAccessError, ValidationError
from .model import Profile, SessionContext
from .repository import ProfileRepository, RoleRepository

logger = logging.getLogger(__name__)

SELF_SERVICE_ROLES = {Role.EMPLOYEE, Role.HR}


class SessionProvider:
    """Resolve ``{user_id, email, role}`` for an authenticated principal.

    Role lookup failures fall back to ``Role.EMPLOYEE``, never to an
    elevated role.
    """

    def __init__(self, profiles: ProfileRepository, roles: RoleRepository):
        self._profiles = profiles
        self._roles = roles

    @staticmethod
    def pick_role(assigned: set[Role]) -> Role:
        for role in reversed(ROLE_PRECEDENCE):
            if role in assigned:
                return role
        return Role.EMPLOYEE

    def resolve(self, user_id: Optional[int]) -> SessionContext:
        if user_id is None:
            raise AuthenticationError("Please sign in to continue")

        profile = self._profiles.get_by_id(int(user_id))
        if not profile:
            raise AuthenticationError("Please sign in to continue")

        try:
            role = self.pick_role(self._roles.roles_for_user(profile.profile_id))
        except (DataAccessError, ValueError):
            logger.warning("Role lookup failed for user %s; using employee", profile.profile_id, exc_info=True)
            role = Role.EMPLOYEE

        return SessionContext(user_id=profile.profile_id, email=profile.email, role=role, full_name=profile.full_name)


class AuthService:
    """Use cases: sign up and sign in."""

    def __init__(self, profiles: ProfileRepository, sessions: SessionProvider):
        self._profiles = profiles
        self._sessions = sessions

    def sign_up(
        self,
        *,
        employee_id: str,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        role: Role | str = Role.EMPLOYEE,
    ) -> SessionContext:
        employee_id = require_non_empty(employee_id, "employee_id")
        first_name = require_non_empty(first_name, "first_name")
        last_name = require_non_empty(last_name, "last_name")
        email = require_email(email)
        require_min_length(password, "password", SIGN_UP_MIN_PASSWORD)

        try:
            role = Role(role)
        except ValueError:
            raise ValidationError("Unknown role", field="role")
        if role not in SELF_SERVICE_ROLES:
            raise ValidationError("Role cannot be self-assigned", field="role")

        if self._profiles.get_by_email(email):
            raise ValidationError("Email is already registered", field="email")
        if self._profiles.get_by_employee_id(employee_id):
            raise ValidationError("Employee ID is already registered", field="employee_id")

        profile_id = self._profiles.create_profile(
            employee_id=employee_id,
            email=email,
            password_hash=generate_password_hash(password),
            first_name=first_name,
            last_name=last_name,
            role=role,
        )
        logger.info("Signed up %s as %s", email, role.value)
        return self._sessions.resolve(profile_id)

    def sign_in(self, email: str, password: str) -> SessionContext:
        email = require_email(email)
        require_min_length(password, "password", SIGN_IN_MIN_PASSWORD)

        profile = self._profiles.get_by_email(email)
        if not profile:
            logger.info("Sign-in failed for %s", email)
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(profile.password_hash, password)
        except (ValueError, TypeError):
            # e.g. placeholder or corrupted hashes
            ok = False

        if not ok:
            logger.info("Sign-in failed for %s", email)
            raise AuthenticationError("Invalid email or password")

        logger.info("Signed in %s", email)
        return self._sessions.resolve(profile.profile_id)


class ProfileService:
    """Use cases: read and edit profiles."""

    def __init__(self, profiles: ProfileRepository):
        self._profiles = profiles

    def get_own(self, session: SessionContext) -> Optional[Profile]:
        return self._profiles.get_by_id(session.user_id)

    def list_employees(self, session: SessionContext) -> Sequence[Profile]:
        if not session.is_hr_or_admin:
            raise AuthorizationError("You do not have access to the employee directory")
        return self._profiles.list_all()

    def count_employees(self) -> int:
        return self._profiles.count()

    def update_contact_info(
        self,
        session: SessionContext,
        *,
        profile_id: int,
        phone: Optional[str],
        address: Optional[str],
    ) -> None:
        if int(profile_id) != session.user_id:
            raise AuthorizationError("You can only edit your own contact details")

        phone = optional_text(phone, "phone")
        if phone is not None and len(phone) > 50:
            raise ValidationError("Phone number is too long", field="phone")
        address = optional_text(address, "address")

        if not self._profiles.update_contact_info(int(profile_id), phone=phone, address=address):
            raise ValidationError("Profile not found")
        logger.info("Profile %s updated contact info", profile_id)

    def update_job_fields(
        self,
        session: SessionContext,
        *,
        profile_id: int,
        department: Optional[str],
        designation: Optional[str],
        date_of_joining: Optional[date],
    ) -> None:
        if not session.is_hr_or_admin:
            raise AuthorizationError("Only HR can change job details")

        if not self._profiles.update_job_fields(
            int(profile_id),
            department=optional_text(department, "department"),
            designation=optional_text(designation, "designation"),
            date_of_joining=date_of_joining,
        ):
            raise ValidationError("Profile not found")
        logger.info("Profile %s job fields updated by %s", profile_id, session.user_id)


def filter_employees(profiles: Sequence[Profile], *, query: str = "", department: str = "all") -> list[Profile]:
    """Case-insensitive search plus exact department filter (``all`` = no filter)."""
    needle = (query or "").strip().lower()

    def matches(p: Profile) -> bool:
        if department and department != "all" and p.department != department:
            return False
        if not needle:
            return True
        haystack = (p.first_name, p.last_name, p.email, p.employee_id, p.department or "")
        return any(needle in v.lower() for v in haystack)

    return [p for p in profiles if matches(p)]


def distinct_departments(profiles: Sequence[Profile]) -> list[str]:
    return sorted({p.department for p in profiles if p.department})
