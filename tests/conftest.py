from __future__ import annotations

from dataclasses import replace
from typing import Dict, List, Optional

import pytest
from werkzeug.security import generate_password_hash

from src.hr_admin.hr_admin.container import Container
from src.hr_admin.hr_admin.core.enums import RecordStatus
from src.hr_admin.hr_admin.departments.model import Department, DepartmentFilters, DepartmentInput
from src.hr_admin.hr_admin.departments.service import DepartmentService
from src.hr_admin.hr_admin.employees.model import Employee, EmployeeFilters, EmployeeInput, Manager
from src.hr_admin.hr_admin.employees.service import EmployeeService
from src.hr_admin.hr_admin.main import create_app
from src.hr_admin.hr_admin.users.model import User
from src.hr_admin.hr_admin.users.service import AuthService

ADMIN_PASSWORD = "TestPass1234"


class InMemoryUsers:
    def __init__(self, users: Optional[List[User]] = None):
        self.users: Dict[int, User] = {u.user_id: u for u in users or []}

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.username == username), None)

    def create_user(self, *, username: str, password_hash: str, employee_id: Optional[int] = None) -> int:
        user_id = max(self.users, default=0) + 1
        self.users[user_id] = User(user_id, username, password_hash, employee_id)
        return user_id


class InMemoryEmployees:
    """Employees table; logins go to the shared users fake, as one unit."""

    def __init__(self, users: InMemoryUsers):
        self._users = users
        self.employees: Dict[int, Employee] = {}
        self.managers: Dict[int, Manager] = {}
        self.set_status_calls = 0

    def add_manager(self, manager_id: int, first_name: str, last_name: str) -> Manager:
        employee_id = self.add_employee(
            EmployeeInput(first_name, last_name, "5550000", f"{first_name}@test.com".lower(), 0),
            status=RecordStatus.ACTIVE,
        )
        manager = Manager(manager_id=manager_id, employee_id=employee_id, name=f"{first_name} {last_name}")
        self.managers[manager_id] = manager
        return manager

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self.employees.get(employee_id)

    def list_employees(self, filters: EmployeeFilters) -> List[Employee]:
        out = list(self.employees.values())
        if filters.status is not None:
            out = [e for e in out if e.status == filters.status]
        if filters.manager_id is not None:
            out = [e for e in out if e.manager_id == filters.manager_id]
        return out

    def add_employee(self, data: EmployeeInput, *, status: RecordStatus = RecordStatus.ACTIVE) -> int:
        employee_id = max(self.employees, default=0) + 1
        manager = self.managers.get(data.manager_id)
        self.employees[employee_id] = Employee(
            employee_id=employee_id,
            first_name=data.first_name,
            last_name=data.last_name,
            phone=data.phone,
            email=data.email,
            status=status,
            manager_id=data.manager_id or None,
            manager_name=manager.name if manager else "",
        )
        return employee_id

    def create_employee_with_login(self, data: EmployeeInput, *, status: RecordStatus, password_hash: str) -> int:
        # The login is written first: if it fails, no employee row is left behind.
        employee_id = max(self.employees, default=0) + 1
        self._users.create_user(username=data.email, password_hash=password_hash, employee_id=employee_id)
        return self.add_employee(data, status=status)

    def update_employee(self, employee_id: int, data: EmployeeInput) -> bool:
        current = self.employees.get(employee_id)
        if current is None:
            return False
        self.employees[employee_id] = replace(
            current,
            first_name=data.first_name,
            last_name=data.last_name,
            phone=data.phone,
            email=data.email,
            status=data.status or current.status,
            manager_id=data.manager_id,
            manager_name=self.managers[data.manager_id].name,
        )
        return True

    def set_status(self, employee_id: int, status: RecordStatus) -> bool:
        self.set_status_calls += 1
        current = self.employees.get(employee_id)
        if current is None:
            return False
        self.employees[employee_id] = replace(current, status=status)
        return True

    def list_managers(self) -> List[Manager]:
        return list(self.managers.values())

    def get_manager(self, manager_id: int) -> Optional[Manager]:
        return self.managers.get(manager_id)


class InMemoryDepartments:
    def __init__(self, managers: InMemoryEmployees):
        self.departments: Dict[int, Department] = {}
        self._managers = managers

    def get_by_id(self, department_id: int) -> Optional[Department]:
        return self.departments.get(department_id)

    def list_departments(self, filters: DepartmentFilters) -> List[Department]:
        out = list(self.departments.values())
        if filters.status is not None:
            out = [d for d in out if d.status == filters.status]
        return out

    def create_department(self, data: DepartmentInput, *, status: RecordStatus) -> int:
        department_id = max(self.departments, default=0) + 1
        self.departments[department_id] = Department(
            department_id=department_id,
            name=data.name,
            manager_id=data.manager_id,
            status=status,
            manager_name=self._managers.get_manager(data.manager_id).name,
        )
        return department_id

    def update_department(self, department_id: int, data: DepartmentInput) -> bool:
        current = self.departments.get(department_id)
        if current is None:
            return False
        self.departments[department_id] = replace(
            current,
            name=data.name,
            manager_id=data.manager_id,
            status=data.status or current.status,
        )
        return True

    def set_status(self, department_id: int, status: RecordStatus) -> bool:
        current = self.departments.get(department_id)
        if current is None:
            return False
        self.departments[department_id] = replace(current, status=status)
        return True


@pytest.fixture
def users_repo():
    return InMemoryUsers([User(1, "hradmin@test.com", generate_password_hash(ADMIN_PASSWORD))])


@pytest.fixture
def employees_repo(users_repo):
    repo = InMemoryEmployees(users_repo)
    repo.add_manager(42, "Grace", "Hopper")
    return repo


@pytest.fixture
def departments_repo(employees_repo):
    return InMemoryDepartments(employees_repo)


@pytest.fixture
def container(users_repo, employees_repo, departments_repo):
    return Container(
        conn=None,
        users_repo=users_repo,
        employees_repo=employees_repo,
        departments_repo=departments_repo,
        auth_service=AuthService(users_repo),
        employee_service=EmployeeService(employees_repo, users_repo, default_password=ADMIN_PASSWORD),
        department_service=DepartmentService(departments_repo, employees_repo),
    )


@pytest.fixture
def app(container):
    return create_app(container, settings_module="config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_client(client):
    with client.session_transaction() as sess:
        sess["user_id"] = 1
        sess["username"] = "hradmin@test.com"
    return client
