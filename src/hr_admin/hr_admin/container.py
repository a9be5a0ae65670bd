from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .core.constants import DEFAULT_PASSWORD
from .database.connection import DBConfig, DatabaseConnection
from .departments.mysql_department_repository import MySQLDepartmentRepository
from .departments.service import DepartmentService
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.service import EmployeeService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    users_repo: MySQLUserRepository
    employees_repo: MySQLEmployeeRepository
    departments_repo: MySQLDepartmentRepository

    auth_service: AuthService
    employee_service: EmployeeService
    department_service: DepartmentService


def build_container(*, db_config: Mapping[str, Any], default_password: str = DEFAULT_PASSWORD) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    users_repo = MySQLUserRepository(conn)
    employees_repo = MySQLEmployeeRepository(conn)
    departments_repo = MySQLDepartmentRepository(conn)

    return Container(
        conn=conn,
        users_repo=users_repo,
        employees_repo=employees_repo,
        departments_repo=departments_repo,
        auth_service=AuthService(users_repo),
        employee_service=EmployeeService(employees_repo, users_repo, default_password=default_password),
        department_service=DepartmentService(departments_repo, employees_repo),
    )
