from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from ..core.constants import DEFAULT_PASSWORD
from ..core.enums import RecordStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..users.repository import UserRepository
from ..users.service import hash_password
from .model import Employee, EmployeeFilters, EmployeeInput, Manager
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


def search_employees(employees: Iterable[Employee], term: str) -> List[Employee]:
    """Free-text search over name, manager and status."""
    term = (term or "").strip().casefold()
    if not term:
        return list(employees)
    return [
        e
        for e in employees
        if term in e.full_name.casefold()
        or term in e.manager_name.casefold()
        or term in e.status.value.casefold()
    ]


class EmployeeService:
    """Use case: manage employee records."""

    def __init__(self, employees: EmployeeRepository, users: UserRepository, *, default_password: str = DEFAULT_PASSWORD):
        self._employees = employees
        self._users = users
        self._default_password = default_password

    def list_employees(self, filters: Optional[EmployeeFilters] = None, *, search: str = "") -> List[Employee]:
        records = self._employees.list_employees(filters or EmployeeFilters())
        return search_employees(records, search)

    def list_managers(self) -> Sequence[Manager]:
        return self._employees.list_managers()

    def get_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee record not found")
        return employee

    def _require_manager(self, manager_id: int) -> Manager:
        manager = self._employees.get_manager(manager_id)
        if not manager:
            raise NotFoundError("No manager record found")
        return manager

    def create_employee(self, data: EmployeeInput) -> int:
        self._require_manager(data.manager_id)
        if self._users.get_by_username(data.email):
            raise ValidationError("A user with this email already exists")

        employee_id = self._employees.create_employee_with_login(
            data,
            status=RecordStatus.ACTIVE,
            password_hash=hash_password(self._default_password),
        )
        logger.info("Created employee %s (%s)", employee_id, data.email)
        return employee_id

    def update_employee(self, employee_id: int, data: EmployeeInput) -> None:
        if not self._employees.get_by_id(employee_id):
            raise NotFoundError("No employee record found")
        self._require_manager(data.manager_id)
        if not self._employees.update_employee(employee_id, data):
            raise NotFoundError("No employee record found")
        logger.info("Updated employee %s", employee_id)

    def toggle_status(self, employee_id: int) -> RecordStatus:
        employee = self.get_employee(employee_id)
        status = employee.status.toggled()
        if not self._employees.set_status(employee_id, status):
            raise NotFoundError("Employee record not found")
        logger.info("Employee %s is now %s", employee_id, status.value)
        return status
