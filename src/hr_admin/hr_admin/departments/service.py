from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from ..core.enums import RecordStatus
from ..core.exceptions import NotFoundError
from ..employees.repository import ManagerLookup
from .model import Department, DepartmentFilters, DepartmentInput
from .repository import DepartmentRepository

logger = logging.getLogger(__name__)


def search_departments(departments: Iterable[Department], term: str) -> List[Department]:
    term = (term or "").strip().casefold()
    if not term:
        return list(departments)
    return [
        d
        for d in departments
        if term in d.name.casefold() or term in d.manager_name.casefold() or term in d.status.value.casefold()
    ]


class DepartmentService:
    """Use case: manage departments."""

    def __init__(self, departments: DepartmentRepository, managers: ManagerLookup):
        self._departments = departments
        self._managers = managers

    def list_departments(self, filters: Optional[DepartmentFilters] = None, *, search: str = "") -> List[Department]:
        records = self._departments.list_departments(filters or DepartmentFilters())
        return search_departments(records, search)

    def list_managers(self):
        return self._managers.list_managers()

    def get_department(self, department_id: int) -> Department:
        department = self._departments.get_by_id(department_id)
        if not department:
            raise NotFoundError("Department record not found")
        return department

    def _require_manager(self, manager_id: int) -> None:
        if not self._managers.get_manager(manager_id):
            raise NotFoundError("No manager record found")

    def create_department(self, data: DepartmentInput) -> int:
        self._require_manager(data.manager_id)
        department_id = self._departments.create_department(data, status=RecordStatus.ACTIVE)
        logger.info("Created department %s (%s)", department_id, data.name)
        return department_id

    def update_department(self, department_id: int, data: DepartmentInput) -> None:
        self._require_manager(data.manager_id)
        if not self._departments.update_department(department_id, data):
            raise NotFoundError("No department record found")
        logger.info("Updated department %s", department_id)

    def toggle_status(self, department_id: int) -> RecordStatus:
        department = self.get_department(department_id)
        status = department.status.toggled()
        if not self._departments.set_status(department_id, status):
            raise NotFoundError("Department record not found")
        logger.info("Department %s is now %s", department_id, status.value)
        return status
