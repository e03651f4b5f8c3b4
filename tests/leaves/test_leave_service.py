from __future__ import annotations

import pytest

from dayflow.core.enums import LeaveStatus, Role
from dayflow.core.exceptions import AuthorizationError, ValidationError
from dayflow.leaves.service import LeaveService, to_row

from fakes import FakeLeavesRepo, FakeProfilesRepo, day, session_for


@pytest.fixture
def people():
    profiles = FakeProfilesRepo()
    employee = session_for(profiles.add(first_name="Eli", last_name="Turner"))
    hr = session_for(profiles.add(first_name="Hana", last_name="Reyes", role=Role.HR))
    return employee, hr


def test_end_before_start_rejected_without_write(people):
    employee, _ = people
    repo = FakeLeavesRepo()

    with pytest.raises(ValidationError) as exc:
        LeaveService(repo).create(employee, leave_type="paid", start_date=day(10), end_date=day(9))

    assert exc.value.field == "end_date"
    assert repo.writes == 0


@pytest.mark.parametrize(
    "kwargs,field",
    [
        ({"leave_type": "vacation", "start_date": day(1), "end_date": day(2)}, "leave_type"),
        ({"leave_type": "sick", "start_date": None, "end_date": day(2)}, "start_date"),
        ({"leave_type": "sick", "start_date": day(1), "end_date": None}, "end_date"),
    ],
)
def test_invalid_request_rejected_without_write(people, kwargs, field):
    employee, _ = people
    repo = FakeLeavesRepo()

    with pytest.raises(ValidationError) as exc:
        LeaveService(repo).create(employee, **kwargs)

    assert exc.value.field == field
    assert repo.writes == 0


def test_new_request_is_pending(people):
    employee, _ = people
    repo = FakeLeavesRepo()

    rid = LeaveService(repo).create(employee, leave_type="sick", start_date=day(3), end_date=day(3), reason="  flu ")

    req = repo.get_by_id(rid)
    assert req.status is LeaveStatus.PENDING
    assert req.user_id == employee.user_id
    assert req.reason == "flu"
    assert req.days == 1


def test_hr_approves_pending_request(people):
    employee, hr = people
    repo = FakeLeavesRepo()
    req = repo.add(user_id=employee.user_id, start_date=day(3), end_date=day(5))

    LeaveService(repo).approve(hr, request_id=req.request_id, comment="ok")

    decided = repo.get_by_id(req.request_id)
    assert decided.status is LeaveStatus.APPROVED
    assert decided.reviewed_by == hr.user_id
    assert decided.review_comment == "ok"


def test_decided_request_cannot_be_decided_again(people):
    employee, hr = people
    repo = FakeLeavesRepo()
    req = repo.add(user_id=employee.user_id, start_date=day(3), end_date=day(5), status=LeaveStatus.REJECTED)

    with pytest.raises(ValidationError):
        LeaveService(repo).approve(hr, request_id=req.request_id)
    assert repo.get_by_id(req.request_id).status is LeaveStatus.REJECTED


def test_employee_cannot_review(people):
    employee, _ = people
    repo = FakeLeavesRepo()
    req = repo.add(user_id=employee.user_id, start_date=day(3), end_date=day(5))

    with pytest.raises(AuthorizationError):
        LeaveService(repo).reject(employee, request_id=req.request_id)
    assert repo.writes == 0


def test_unknown_request(people):
    _, hr = people
    with pytest.raises(ValidationError):
        LeaveService(FakeLeavesRepo()).reject(hr, request_id=99)


def test_review_row_only_offers_actions_for_pending():
    repo = FakeLeavesRepo()
    pending = repo.add(user_id=1, start_date=day(3), end_date=day(5))
    approved = repo.add(user_id=1, start_date=day(6), end_date=day(6), status=LeaveStatus.APPROVED)

    assert to_row(pending, with_employee=True)["can_review"] is True
    assert to_row(approved, with_employee=True)["can_review"] is False
    assert "can_review" not in to_row(pending)
