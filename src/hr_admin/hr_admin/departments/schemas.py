from __future__ import annotations

from ..core.schemas import status_field, status_filter_field
from ..forms import MinLength, Schema, string

CreateDepartmentSchema = Schema(
    string("name", MinLength(3)),
    string("managerId", MinLength(1)),
    name="create_department",
)

EditDepartmentSchema = Schema(*CreateDepartmentSchema.fields, status_field(), name="edit_department")

DepartmentFilterSchema = Schema(
    status_filter_field(),
    string("q", optional=True, allow_empty=True),
    name="department_filters",
)

ToggleDepartmentSchema = Schema(string("departmentId", MinLength(1)), name="toggle_department")
