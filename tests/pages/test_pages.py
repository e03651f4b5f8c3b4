from __future__ import annotations

import threading
from datetime import date, datetime

import pytest

from dayflow.core.enums import AttendanceStatus, LeaveStatus, Role
from dayflow.core.exceptions import DataAccessError
from dayflow.pages.attendance import AttendancePage
from dayflow.pages.base import KIND_BUSY, KIND_FORBIDDEN, KIND_VALIDATION, KIND_WRITE_FAILED, REDIRECT_DASHBOARD
from dayflow.pages.dashboard import DashboardPage, greeting
from dayflow.pages.employees import EmployeesPage
from dayflow.pages.leaves import LeavesPage
from dayflow.pages.payroll import PayrollPage
from dayflow.pages.profile import ProfilePage
from dayflow.pages.reports import ReportsPage

from fakes import (
    EmployeeOnlyAttendanceRepo,
    EmployeeOnlyLeavesRepo,
    EmployeeOnlyPayrollRepo,
    FakeAttendanceRepo,
    FakeLeavesRepo,
    FakePayrollRepo,
    FakeProfilesRepo,
    day,
    make_container,
    session_for,
)

NOW = datetime(2025, 3, 14, 9, 30)


def open_page(page_cls, container, session, **kwargs):
    page = page_cls(container, session, now=NOW, **kwargs)
    assert page.activate() is None
    return page


@pytest.fixture
def org():
    profiles = FakeProfilesRepo()
    eli = profiles.add(first_name="Eli", last_name="Turner", department="Engineering")
    mia = profiles.add(first_name="Mia", last_name="Park", department="Sales")
    hana = profiles.add(first_name="Hana", last_name="Reyes", department="Human Resources", role=Role.HR)
    return profiles, session_for(eli), session_for(mia), session_for(hana)


class TestEmployeeScope:
    @pytest.fixture
    def container(self, org):
        profiles, eli, mia, _ = org
        attendance = EmployeeOnlyAttendanceRepo()
        attendance.add(user_id=eli.user_id, work_date=day(3))
        attendance.add(user_id=eli.user_id, work_date=day(4), status=AttendanceStatus.ABSENT)
        attendance.add(user_id=mia.user_id, work_date=day(3))
        leaves = EmployeeOnlyLeavesRepo()
        leaves.add(user_id=eli.user_id, start_date=day(10), end_date=day(12), status=LeaveStatus.APPROVED)
        leaves.add(user_id=mia.user_id, start_date=day(10), end_date=day(12))
        payroll = EmployeeOnlyPayrollRepo()
        payroll.add(user_id=eli.user_id, month=2, year=2025)
        payroll.add(user_id=mia.user_id, month=2, year=2025)
        return make_container(profiles=profiles, attendance=attendance, leaves=leaves, payroll=payroll)

    def test_attendance_page_shows_only_own_rows(self, org, container):
        eli = org[1]
        view = open_page(AttendancePage, container, eli).load()

        assert len(view.records) == 2
        assert view.stats.present == 1
        assert view.attendance_rate == 50
        assert view.action == "check_in"
        assert not view.organization_wide

    def test_leaves_page_shows_own_balance(self, org, container):
        view = open_page(LeavesPage, container, org[1]).load()

        assert view.stats.total == 1
        assert (view.balance.used, view.balance.remaining) == (3, 17)
        assert "employee" not in view.requests[0]

    def test_payroll_page_shows_own_records(self, org, container):
        view = open_page(PayrollPage, container, org[1]).load()

        assert view.summary.records == 1
        assert view.summary.latest_net == "$3,250.00"

    def test_dashboard_uses_personal_stats(self, org, container):
        view = open_page(DashboardPage, container, org[1]).load()

        assert view.organization is None
        assert view.personal.present_days_this_month == 1
        assert view.personal.leave_remaining == 17
        assert len(view.recent_leaves) == 1
        assert view.greeting == "Good morning"


class TestGates:
    @pytest.mark.parametrize("page_cls", [EmployeesPage, ReportsPage])
    def test_employee_is_sent_to_dashboard(self, org, page_cls):
        page = page_cls(make_container(profiles=org[0]), org[1], now=NOW)

        assert page.activate() == REDIRECT_DASHBOARD
        assert not page.is_active

    def test_hr_sees_directory(self, org):
        hr = org[3]
        view = open_page(EmployeesPage, make_container(profiles=org[0]), hr, department="Sales").load()

        assert [e["name"] for e in view.employees] == ["Mia Park"]
        assert view.total == 3
        assert view.departments == ["Engineering", "Human Resources", "Sales"]

    def test_directory_search(self, org):
        view = open_page(EmployeesPage, make_container(profiles=org[0]), org[3], query="reyes").load()
        assert [(e["name"], e["role"]) for e in view.employees] == [("Hana Reyes", "hr")]


class TestOrganizationViews:
    @pytest.fixture
    def container(self, org):
        profiles, eli, mia, _ = org
        attendance = FakeAttendanceRepo()
        attendance.add(user_id=eli.user_id, work_date=day(14))
        attendance.add(user_id=mia.user_id, work_date=day(14), status=AttendanceStatus.HALF_DAY)
        attendance.add(user_id=mia.user_id, work_date=day(13))
        leaves = FakeLeavesRepo()
        leaves.add(user_id=eli.user_id, start_date=day(20), end_date=day(21))
        leaves.add(user_id=mia.user_id, start_date=day(24), end_date=day(24), status=LeaveStatus.APPROVED)
        payroll = FakePayrollRepo()
        payroll.add(user_id=eli.user_id, month=3, year=2025, basic="1000", allowances="0", deductions="0")
        payroll.add(user_id=mia.user_id, month=3, year=2025, basic="2000", allowances="0", deductions="0")
        payroll.add(user_id=mia.user_id, month=2, year=2025, basic="2000", allowances="0", deductions="0")
        return make_container(profiles=profiles, attendance=attendance, leaves=leaves, payroll=payroll)

    def test_dashboard_organization_stats(self, org, container):
        view = open_page(DashboardPage, container, org[3]).load()

        assert view.personal is None
        assert view.organization.total_employees == 3
        assert view.organization.present_today == 1
        assert view.organization.pending_leaves == 1
        assert view.organization.monthly_payroll == "$3,000.00"

    def test_reports_distributions_and_trend(self, org, container):
        view = open_page(ReportsPage, container, org[3]).load()

        assert view.attendance.total == 3
        assert view.attendance_rate == 67
        assert (view.leaves.total, view.leaves.pending, view.leaves.approved) == (2, 1, 1)
        assert [p.label for p in view.trend] == ["Oct", "Nov", "Dec", "Jan", "Feb", "Mar"]
        assert view.trend[-1].present_day_count == 2
        assert view.trend[-1].approved_leave_count == 1

    def test_hr_attendance_includes_employee_names(self, org, container):
        view = open_page(AttendancePage, container, org[3]).load()

        assert view.organization_wide
        assert view.today is None
        assert all("employee" in r for r in view.records)

    def test_hr_payroll_totals(self, org, container):
        view = open_page(PayrollPage, container, org[3]).load()

        assert view.summary.records == 3
        assert view.summary.total_net == "$5,000.00"
        assert view.summary.average_net == "$1,666.67"


class TestMutations:
    def test_check_in_reloads_view(self, org):
        container = make_container(profiles=org[0])
        page = open_page(DashboardPage, container, org[1])
        page.load()
        assert page.view.action == "check_in"

        result = page.check_in()

        assert result.ok
        assert page.view.action == "check_out"
        assert page.view.today["check_in"] == "09:30 AM"

    def test_invalid_leave_reports_field(self, org):
        container = make_container(profiles=org[0])
        page = open_page(LeavesPage, container, org[1])

        result = page.submit(leave_type="paid", start_date=day(10), end_date=day(9))

        assert not result.ok
        assert result.kind == KIND_VALIDATION
        assert result.field == "end_date"
        assert container.leaves_repo.writes == 0

    def test_employee_review_is_forbidden(self, org):
        container = make_container(profiles=org[0])
        req = container.leaves_repo.add(user_id=org[2].user_id, start_date=day(10), end_date=day(10))

        result = open_page(LeavesPage, container, org[1]).approve(req.request_id)

        assert result.kind == KIND_FORBIDDEN
        assert container.leaves_repo.get_by_id(req.request_id).status is LeaveStatus.PENDING

    def test_hr_review_updates_row(self, org):
        container = make_container(profiles=org[0])
        req = container.leaves_repo.add(user_id=org[1].user_id, start_date=day(10), end_date=day(10))
        page = open_page(LeavesPage, container, org[3])

        assert page.reject(req.request_id).ok
        assert page.view.requests[0]["status"] == "rejected"
        assert page.view.requests[0]["can_review"] is False

    def test_profile_contact_edit(self, org):
        container = make_container(profiles=org[0])
        page = open_page(ProfilePage, container, org[1])

        assert page.save_contact_info(phone="555-0100", address="1 Main St").ok
        assert page.view.profile["phone"] == "555-0100"

    def test_write_failure_is_reported(self, org):
        class BrokenLeavesRepo(FakeLeavesRepo):
            def create_leave_request(self, **kwargs):
                raise DataAccessError("insert failed")

        container = make_container(profiles=org[0], leaves=BrokenLeavesRepo())
        result = open_page(LeavesPage, container, org[1]).submit(
            leave_type="paid", start_date=day(10), end_date=day(10)
        )

        assert result.kind == KIND_WRITE_FAILED

    def test_second_submit_from_another_page_while_in_flight_is_refused(self, org):
        started = threading.Event()
        release = threading.Event()

        class SlowLeavesRepo(FakeLeavesRepo):
            def create_leave_request(self, **kwargs):
                started.set()
                release.wait(5)
                return super().create_leave_request(**kwargs)

        container = make_container(profiles=org[0], leaves=SlowLeavesRepo())
        page = open_page(LeavesPage, container, org[1])
        results = []
        worker = threading.Thread(
            target=lambda: results.append(page.submit(leave_type="paid", start_date=day(10), end_date=day(10)))
        )
        worker.start()
        assert started.wait(5)

        second = open_page(LeavesPage, container, org[1]).submit(leave_type="paid", start_date=day(10), end_date=day(10))
        release.set()
        worker.join(5)

        assert second.kind == KIND_BUSY
        assert results[0].ok
        assert container.leaves_repo.writes == 1


class TestLifecycle:
    def test_read_failure_renders_empty_view(self, org):
        class BrokenAttendanceRepo(FakeAttendanceRepo):
            def list_for_user(self, user_id, date_range=None):
                raise DataAccessError("timeout")

        container = make_container(profiles=org[0], attendance=BrokenAttendanceRepo())
        view = open_page(AttendancePage, container, org[1]).load()

        assert view.error
        assert view.records == []
        assert view.period_start == "2025-03-01"

    def test_result_arriving_after_deactivate_is_discarded(self, org):
        entered = threading.Event()
        release = threading.Event()

        class SlowPayrollRepo(FakePayrollRepo):
            def list_for_user(self, user_id, *, year=None):
                entered.set()
                release.wait(5)
                return super().list_for_user(user_id, year=year)

        container = make_container(profiles=org[0], payroll=SlowPayrollRepo())
        page = open_page(PayrollPage, container, org[1])
        results = []
        worker = threading.Thread(target=lambda: results.append(page.load()))
        worker.start()
        assert entered.wait(5)

        page.deactivate()
        release.set()
        worker.join(5)

        assert results == [None]
        assert page.view is None

    def test_load_requires_activation(self, org):
        page = ProfilePage(make_container(profiles=org[0]), org[1], now=NOW)
        with pytest.raises(RuntimeError):
            page.load()


@pytest.mark.parametrize("hour,expected", [(8, "Good morning"), (12, "Good afternoon"), (19, "Good evening")])
def test_greeting(hour, expected):
    assert greeting(hour) == expected


def test_leave_balance_uses_current_year_only(org):
    container = make_container(profiles=org[0], leave_allotment=5)
    eli = org[1]
    container.leaves_repo.add(
        user_id=eli.user_id, start_date=date(2024, 12, 1), end_date=date(2024, 12, 10), status=LeaveStatus.APPROVED
    )
    container.leaves_repo.add(user_id=eli.user_id, start_date=day(1), end_date=day(7), status=LeaveStatus.APPROVED)

    view = open_page(LeavesPage, container, eli).load()

    assert view.balance.used == 7
    assert view.balance.remaining == 0
    assert view.balance.over_allotment
