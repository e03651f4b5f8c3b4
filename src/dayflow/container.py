from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.inflight import InFlightRegistry
from .core.constants import DEFAULT_ANNUAL_LEAVE_ALLOTMENT, DEFAULT_TREND_MONTHS, DEFAULT_TREND_WORKERS
from .database.connection import DBConfig, DatabaseConnection
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.repository import PayrollRepository
from .payroll.service import PayrollService
from .reports.trend import MonthlyTrendBuilder
from .users.mysql_profile_repository import MySQLProfileRepository
from .users.mysql_role_repository import MySQLRoleRepository
from .users.repository import ProfileRepository, RoleRepository
from .users.service import AuthService, ProfileService, SessionProvider


@dataclass(frozen=True)
class Container:
    profiles_repo: ProfileRepository
    roles_repo: RoleRepository
    attendance_repo: AttendanceRepository
    leaves_repo: LeaveRepository
    payroll_repo: PayrollRepository

    session_provider: SessionProvider
    auth_service: AuthService
    profile_service: ProfileService
    attendance_service: AttendanceService
    leave_service: LeaveService
    payroll_service: PayrollService
    trend_builder: MonthlyTrendBuilder

    leave_allotment: int = DEFAULT_ANNUAL_LEAVE_ALLOTMENT
    trend_months: int = DEFAULT_TREND_MONTHS
    conn: Optional[DatabaseConnection] = None
    in_flight: InFlightRegistry = field(default_factory=InFlightRegistry)


def assemble(
    *,
    profiles_repo: ProfileRepository,
    roles_repo: RoleRepository,
    attendance_repo: AttendanceRepository,
    leaves_repo: LeaveRepository,
    payroll_repo: PayrollRepository,
    leave_allotment: int = DEFAULT_ANNUAL_LEAVE_ALLOTMENT,
    trend_months: int = DEFAULT_TREND_MONTHS,
    trend_workers: int = DEFAULT_TREND_WORKERS,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over any set of repositories (MySQL or in-memory)."""
    session_provider = SessionProvider(profiles_repo, roles_repo)

    return Container(
        profiles_repo=profiles_repo,
        roles_repo=roles_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        payroll_repo=payroll_repo,
        session_provider=session_provider,
        auth_service=AuthService(profiles_repo, session_provider),
        profile_service=ProfileService(profiles_repo),
        attendance_service=AttendanceService(attendance_repo),
        leave_service=LeaveService(leaves_repo),
        payroll_service=PayrollService(payroll_repo),
        trend_builder=MonthlyTrendBuilder(attendance_repo, leaves_repo, max_workers=trend_workers),
        leave_allotment=int(leave_allotment),
        trend_months=int(trend_months),
        conn=conn,
    )


def build_container(
    *,
    db_config: dict,
    leave_allotment: int = DEFAULT_ANNUAL_LEAVE_ALLOTMENT,
    trend_months: int = DEFAULT_TREND_MONTHS,
    trend_workers: int = DEFAULT_TREND_WORKERS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return assemble(
        profiles_repo=MySQLProfileRepository(conn),
        roles_repo=MySQLRoleRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        payroll_repo=MySQLPayrollRepository(conn),
        leave_allotment=leave_allotment,
        trend_months=trend_months,
        trend_workers=trend_workers,
        conn=conn,
    )
