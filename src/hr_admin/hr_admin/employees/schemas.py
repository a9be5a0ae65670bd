from __future__ import annotations

from ..core.schemas import id_filter_field, status_field, status_filter_field
from ..forms import Email, MinLength, Schema, string

_EMPLOYEE_FIELDS = (
    string("firstName", MinLength(3)),
    string("lastName", MinLength(3)),
    string("phone", MinLength(6)),
    string("email", Email()),
    string("managerId", MinLength(1)),
)

CreateEmployeeSchema = Schema(*_EMPLOYEE_FIELDS, name="create_employee")

EditEmployeeSchema = Schema(*_EMPLOYEE_FIELDS, status_field(), name="edit_employee")

EmployeeFilterSchema = Schema(
    status_filter_field(),
    id_filter_field("departmentId"),
    id_filter_field("managerId"),
    string("q", optional=True, allow_empty=True),
    name="employee_filters",
)

ToggleEmployeeSchema = Schema(string("employeeId", MinLength(1)), name="toggle_employee")
