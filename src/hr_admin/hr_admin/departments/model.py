from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from ..common.validators import get_validated_id, parse_status
from ..core.enums import RecordStatus


@dataclass(frozen=True)
class Department:
    department_id: int
    name: str
    manager_id: int
    status: RecordStatus
    manager_name: str = ""

    @property
    def is_active(self) -> bool:
        return self.status == RecordStatus.ACTIVE

    def form_values(self) -> Dict[str, Any]:
        return {"name": self.name, "managerId": self.manager_id, "status": self.status}


@dataclass(frozen=True)
class DepartmentInput:
    name: str
    manager_id: int
    status: Optional[RecordStatus] = None

    @classmethod
    def from_form(cls, value: Mapping[str, Any]) -> "DepartmentInput":
        return cls(
            name=value["name"],
            manager_id=get_validated_id(value["managerId"], label="Manager"),
            status=parse_status(value.get("status")),
        )


@dataclass(frozen=True)
class DepartmentFilters:
    status: Optional[RecordStatus] = None

    @classmethod
    def from_form(cls, value: Mapping[str, Any]) -> "DepartmentFilters":
        return cls(status=parse_status(value.get("status")))
