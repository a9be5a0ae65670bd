from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from ..common.validators import get_validated_id, optional_id, parse_status
from ..core.enums import RecordStatus


@dataclass(frozen=True)
class Employee:
    """An employee record with its (optional) manager link."""

    employee_id: int
    first_name: str
    last_name: str
    phone: str
    email: str
    status: RecordStatus
    manager_id: Optional[int] = None
    manager_name: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_active(self) -> bool:
        return self.status == RecordStatus.ACTIVE

    def form_values(self) -> Dict[str, Any]:
        return {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "phone": self.phone,
            "email": self.email,
            "managerId": self.manager_id,
            "status": self.status,
        }


@dataclass(frozen=True)
class Manager:
    manager_id: int
    employee_id: int
    name: str


@dataclass(frozen=True)
class EmployeeInput:
    """Validated create/edit form, converted to domain types."""

    first_name: str
    last_name: str
    phone: str
    email: str
    manager_id: int
    status: Optional[RecordStatus] = None

    @classmethod
    def from_form(cls, value: Mapping[str, Any]) -> "EmployeeInput":
        return cls(
            first_name=value["firstName"],
            last_name=value["lastName"],
            phone=value["phone"],
            email=value["email"],
            manager_id=get_validated_id(value["managerId"], label="Manager"),
            status=parse_status(value.get("status")),
        )


@dataclass(frozen=True)
class EmployeeFilters:
    status: Optional[RecordStatus] = None
    department_id: Optional[int] = None
    manager_id: Optional[int] = None

    @classmethod
    def from_form(cls, value: Mapping[str, Any]) -> "EmployeeFilters":
        return cls(
            status=parse_status(value.get("status")),
            department_id=optional_id(value.get("departmentId")),
            manager_id=optional_id(value.get("managerId")),
        )
