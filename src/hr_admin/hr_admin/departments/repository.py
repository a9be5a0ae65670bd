from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import RecordStatus
from .model import Department, DepartmentFilters, DepartmentInput


class DepartmentRepository(Protocol):
    def get_by_id(self, department_id: int) -> Optional[Department]:
        raise NotImplementedError

    def list_departments(self, filters: DepartmentFilters) -> Sequence[Department]:
        raise NotImplementedError

    def create_department(self, data: DepartmentInput, *, status: RecordStatus) -> int:
        raise NotImplementedError

    def update_department(self, department_id: int, data: DepartmentInput) -> bool:
        raise NotImplementedError

    def set_status(self, department_id: int, status: RecordStatus) -> bool:
        raise NotImplementedError
