from __future__ import annotations

import pytest

from src.hr_admin.hr_admin.core.enums import RecordStatus
from src.hr_admin.hr_admin.core.exceptions import NotFoundError
from src.hr_admin.hr_admin.departments.model import DepartmentFilters, DepartmentInput
from src.hr_admin.hr_admin.departments.service import DepartmentService


@pytest.fixture
def service(departments_repo, employees_repo):
    return DepartmentService(departments_repo, employees_repo)


def test_create_and_get(service):
    department_id = service.create_department(DepartmentInput("Payroll", 42))

    department = service.get_department(department_id)
    assert department.name == "Payroll"
    assert department.status is RecordStatus.ACTIVE
    assert department.form_values() == {"name": "Payroll", "managerId": 42, "status": RecordStatus.ACTIVE}


def test_create_requires_existing_manager(service, departments_repo):
    with pytest.raises(NotFoundError):
        service.create_department(DepartmentInput("Payroll", 7))
    assert departments_repo.departments == {}


def test_update_keeps_status_when_not_given(service):
    department_id = service.create_department(DepartmentInput("Payroll", 42))
    service.toggle_status(department_id)

    service.update_department(department_id, DepartmentInput("Payroll and Benefits", 42))

    department = service.get_department(department_id)
    assert department.name == "Payroll and Benefits"
    assert department.status is RecordStatus.INACTIVE


def test_update_missing_department(service):
    with pytest.raises(NotFoundError):
        service.update_department(5, DepartmentInput("Payroll", 42))


def test_toggle_twice_restores_status(service):
    department_id = service.create_department(DepartmentInput("Payroll", 42))

    service.toggle_status(department_id)
    service.toggle_status(department_id)

    assert service.get_department(department_id).is_active


def test_list_by_status_and_search(service):
    payroll = service.create_department(DepartmentInput("Payroll", 42))
    legal = service.create_department(DepartmentInput("Legal", 42))
    service.toggle_status(legal)

    assert [d.department_id for d in service.list_departments(DepartmentFilters(RecordStatus.ACTIVE))] == [payroll]
    assert [d.department_id for d in service.list_departments(search="leg")] == [legal]
    assert len(service.list_departments(search="grace")) == 2
