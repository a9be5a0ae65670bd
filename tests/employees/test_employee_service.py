from __future__ import annotations

import pytest
from werkzeug.security import check_password_hash

from src.hr_admin.hr_admin.core.enums import RecordStatus
from src.hr_admin.hr_admin.core.exceptions import NotFoundError, ValidationError
from src.hr_admin.hr_admin.employees.model import EmployeeFilters, EmployeeInput
from src.hr_admin.hr_admin.employees.service import EmployeeService, search_employees


def new_employee(email: str = "ann.lee@test.com", manager_id: int = 42) -> EmployeeInput:
    return EmployeeInput("Ann", "Lee", "5551234", email, manager_id)


@pytest.fixture
def service(employees_repo, users_repo):
    return EmployeeService(employees_repo, users_repo, default_password="TestPass1234")


def test_create_employee_also_creates_login(service, users_repo):
    employee_id = service.create_employee(new_employee())

    employee = service.get_employee(employee_id)
    assert employee.status is RecordStatus.ACTIVE
    assert employee.manager_name == "Grace Hopper"
    user = users_repo.get_by_username("ann.lee@test.com")
    assert user.employee_id == employee_id
    assert check_password_hash(user.password_hash, "TestPass1234")


def test_create_with_unknown_manager_fails(service, employees_repo):
    with pytest.raises(NotFoundError, match="No manager record found"):
        service.create_employee(new_employee(manager_id=999))
    assert len(employees_repo.employees) == 1


def test_create_with_taken_email_fails(service):
    service.create_employee(new_employee())

    with pytest.raises(ValidationError):
        service.create_employee(new_employee())


def test_update_is_idempotent(service):
    employee_id = service.create_employee(new_employee())
    data = EmployeeInput("Annie", "Lee", "5559999", "ann.lee@test.com", 42, RecordStatus.INACTIVE)

    service.update_employee(employee_id, data)
    once = service.get_employee(employee_id)
    service.update_employee(employee_id, data)

    assert service.get_employee(employee_id) == once
    assert once.first_name == "Annie"
    assert once.status is RecordStatus.INACTIVE


def test_update_missing_employee(service):
    with pytest.raises(NotFoundError):
        service.update_employee(999, new_employee())


def test_toggle_twice_restores_status(service):
    employee_id = service.create_employee(new_employee())

    assert service.toggle_status(employee_id) is RecordStatus.INACTIVE
    assert service.toggle_status(employee_id) is RecordStatus.ACTIVE
    assert service.get_employee(employee_id).is_active


def test_toggle_missing_employee_does_not_write(service, employees_repo):
    with pytest.raises(NotFoundError, match="Employee record not found"):
        service.toggle_status(999)
    assert employees_repo.set_status_calls == 0


def test_list_filters_and_search(service):
    ann = service.create_employee(new_employee())
    bob = service.create_employee(EmployeeInput("Bob", "Stone", "5550001", "bob@test.com", 42))
    service.toggle_status(bob)

    inactive = service.list_employees(EmployeeFilters(status=RecordStatus.INACTIVE))
    assert [e.employee_id for e in inactive] == [bob]
    assert [e.employee_id for e in service.list_employees(search="ann l")] == [ann]
    assert {ann, bob} <= {e.employee_id for e in service.list_employees(search="HOPPER")}


def test_search_with_blank_term_keeps_everything(service):
    service.create_employee(new_employee())
    records = service.list_employees()

    assert search_employees(records, "  ") == records


def test_failed_login_insert_stores_no_employee(service, employees_repo, users_repo, monkeypatch):
    def refuse(**kwargs):
        raise RuntimeError("duplicate username")

    monkeypatch.setattr(users_repo, "create_user", refuse)
    before = dict(employees_repo.employees)

    for _ in range(2):
        with pytest.raises(RuntimeError):
            service.create_employee(new_employee())

    assert employees_repo.employees == before
    assert users_repo.get_by_username("ann.lee@test.com") is None
