from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from ..core.enums import RecordStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee, EmployeeFilters, EmployeeInput, Manager
from .repository import EmployeeRepository

_EMPLOYEE_SELECT = """
    SELECT e.employee_id, e.first_name, e.last_name, e.phone, e.email, e.status,
           em.manager_id,
           me.first_name AS manager_first_name, me.last_name AS manager_last_name
    FROM employees e
    LEFT JOIN employee_managers em ON em.employee_id = e.employee_id
    LEFT JOIN managers m ON m.manager_id = em.manager_id
    LEFT JOIN employees me ON me.employee_id = m.employee_id
"""

_MANAGER_SELECT = """
    SELECT m.manager_id, m.employee_id, e.first_name, e.last_name
    FROM managers m
    JOIN employees e ON e.employee_id = m.employee_id
"""


def _to_employee(row: Dict[str, Any]) -> Employee:
    manager_name = ""
    if row.get("manager_first_name"):
        manager_name = f"{row['manager_first_name']} {row['manager_last_name']}"
    return Employee(
        employee_id=int(row["employee_id"]),
        first_name=row["first_name"],
        last_name=row["last_name"],
        phone=row["phone"],
        email=row["email"],
        status=RecordStatus(row["status"]),
        manager_id=int(row["manager_id"]) if row.get("manager_id") is not None else None,
        manager_name=manager_name,
    )


def _to_manager(row: Dict[str, Any]) -> Manager:
    return Manager(
        manager_id=int(row["manager_id"]),
        employee_id=int(row["employee_id"]),
        name=f"{row['first_name']} {row['last_name']}",
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_EMPLOYEE_SELECT + " WHERE e.employee_id=%s LIMIT 1", (employee_id,))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def list_employees(self, filters: EmployeeFilters) -> Sequence[Employee]:
        where: List[str] = []
        params: List[Any] = []
        if filters.status is not None:
            where.append("e.status=%s")
            params.append(filters.status.value)
        if filters.manager_id is not None:
            where.append("em.manager_id=%s")
            params.append(filters.manager_id)
        if filters.department_id is not None:
            where.append(
                "EXISTS (SELECT 1 FROM departments d WHERE d.manager_id = em.manager_id AND d.department_id=%s)"
            )
            params.append(filters.department_id)

        sql = _EMPLOYEE_SELECT
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY e.last_name, e.first_name, e.employee_id"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_employee(r) for r in fetchall(cur)]

    def create_employee_with_login(self, data: EmployeeInput, *, status: RecordStatus, password_hash: str) -> int:
        # Employee, manager link and login commit together or not at all.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(first_name, last_name, phone, email, status)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (data.first_name, data.last_name, data.phone, data.email, status.value),
            )
            employee_id = int(cur.lastrowid)
            cur.execute(
                "INSERT INTO employee_managers(employee_id, manager_id) VALUES(%s,%s)",
                (employee_id, data.manager_id),
            )
            cur.execute(
                "INSERT INTO users(username, password_hash, employee_id) VALUES(%s,%s,%s)",
                (data.email, password_hash, employee_id),
            )
            return employee_id

    def update_employee(self, employee_id: int, data: EmployeeInput) -> bool:
        # One transaction: the record and its manager link change together.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT employee_id FROM employees WHERE employee_id=%s", (employee_id,))
            if not fetchone(cur):
                return False
            cur.execute(
                """
                UPDATE employees
                SET first_name=%s, last_name=%s, phone=%s, email=%s, status=COALESCE(%s, status)
                WHERE employee_id=%s
                """,
                (
                    data.first_name,
                    data.last_name,
                    data.phone,
                    data.email,
                    data.status.value if data.status else None,
                    employee_id,
                ),
            )
            cur.execute("DELETE FROM employee_managers WHERE employee_id=%s", (employee_id,))
            cur.execute(
                "INSERT INTO employee_managers(employee_id, manager_id) VALUES(%s,%s)",
                (employee_id, data.manager_id),
            )
            return True

    def set_status(self, employee_id: int, status: RecordStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE employees SET status=%s WHERE employee_id=%s", (status.value, employee_id))
            return cur.rowcount > 0

    def list_managers(self) -> Sequence[Manager]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_MANAGER_SELECT + " ORDER BY e.last_name, e.first_name")
            return [_to_manager(r) for r in fetchall(cur)]

    def get_manager(self, manager_id: int) -> Optional[Manager]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_MANAGER_SELECT + " WHERE m.manager_id=%s", (manager_id,))
            row = fetchone(cur)
            return _to_manager(row) if row else None
