from __future__ import annotations

from datetime import date
from typing import Any, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Profile
from .repository import ProfileRepository

_COLUMNS = """
    p.profile_id, p.employee_id, p.email, p.password_hash, p.first_name, p.last_name,
    p.phone, p.address, p.department, p.designation, p.date_of_joining, p.avatar_url,
    GROUP_CONCAT(ur.role ORDER BY ur.role) AS roles
"""


def _to_profile(r: dict[str, Any]) -> Profile:
    roles = tuple(Role(v) for v in (r.get("roles") or "").split(",") if v)
    return Profile(
        profile_id=int(r["profile_id"]),
        employee_id=r["employee_id"],
        email=r["email"],
        first_name=r["first_name"],
        last_name=r["last_name"],
        phone=r.get("phone"),
        address=r.get("address"),
        department=r.get("department"),
        designation=r.get("designation"),
        date_of_joining=r.get("date_of_joining"),
        avatar_url=r.get("avatar_url"),
        roles=roles,
        password_hash=r.get("password_hash") or "",
    )


class MySQLProfileRepository(ProfileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, column: str, value: object) -> Optional[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM profiles p
                LEFT JOIN user_roles ur ON ur.user_id = p.profile_id
                WHERE p.{column}=%s
                GROUP BY p.profile_id
                """,
                (value,),
            )
            r = fetchone(cur)
            return _to_profile(r) if r else None

    def get_by_id(self, profile_id: int) -> Optional[Profile]:
        return self._get_one("profile_id", int(profile_id))

    def get_by_email(self, email: str) -> Optional[Profile]:
        return self._get_one("email", email)

    def get_by_employee_id(self, employee_id: str) -> Optional[Profile]:
        return self._get_one("employee_id", employee_id)

    def list_all(self) -> Sequence[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM profiles p
                LEFT JOIN user_roles ur ON ur.user_id = p.profile_id
                GROUP BY p.profile_id
                ORDER BY p.first_name ASC, p.last_name ASC
                """
            )
            return [_to_profile(r) for r in fetchall(cur)]

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM profiles")
            r = fetchone(cur)
            return int(r["n"]) if r else 0

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO profiles (employee_id, email, password_hash, first_name, last_name)
                VALUES (%s, %s, %s, %s, %s)
                """,
                (employee_id, email, password_hash, first_name, last_name),
            )
            profile_id = int(cur.lastrowid)
            cur.execute("INSERT INTO user_roles (user_id, role) VALUES (%s, %s)", (profile_id, role.value))
            return profile_id

    def update_contact_info(self, profile_id: int, *, phone: Optional[str], address: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE profiles SET phone=%s, address=%s WHERE profile_id=%s",
                (phone, address, int(profile_id)),
            )
            return cur.rowcount > 0

    def update_job_fields(
        self,
        profile_id: int,
        *,
        department: Optional[str],
        designation: Optional[str],
        date_of_joining: Optional[date],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE profiles
                SET department=%s, designation=%s, date_of_joining=%s
                WHERE profile_id=%s
                """,
                (department, designation, date_of_joining, int(profile_id)),
            )
            return cur.rowcount > 0
