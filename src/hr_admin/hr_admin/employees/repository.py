from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import RecordStatus
from .model import Employee, EmployeeFilters, EmployeeInput, Manager


class ManagerLookup(Protocol):
    def list_managers(self) -> Sequence[Manager]:
        raise NotImplementedError

    def get_manager(self, manager_id: int) -> Optional[Manager]:
        raise NotImplementedError


class EmployeeRepository(ManagerLookup, Protocol):
    """Employee persistence, plus the manager lookups the forms need."""

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_employees(self, filters: EmployeeFilters) -> Sequence[Employee]:
        raise NotImplementedError

    def create_employee_with_login(self, data: EmployeeInput, *, status: RecordStatus, password_hash: str) -> int:
        """Store the employee, its manager link and a login named after its email, atomically."""
        raise NotImplementedError

    def update_employee(self, employee_id: int, data: EmployeeInput) -> bool:
        raise NotImplementedError

    def set_status(self, employee_id: int, status: RecordStatus) -> bool:
        raise NotImplementedError
