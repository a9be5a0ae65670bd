from __future__ import annotations


class AppLinks:
    HOME = "/"
    LOGIN = "/login"
    LOGOUT = "/logout"

    EMPLOYEES = "/employees"
    CREATE_EMPLOYEE = "/employees/create"
    DEPARTMENTS = "/departments"
    CREATE_DEPARTMENT = "/departments/create"

    @staticmethod
    def edit_employee(employee_id: int) -> str:
        return f"/employees/{employee_id}/edit"

    @staticmethod
    def edit_department(department_id: int) -> str:
        return f"/departments/{department_id}/edit"
