from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from ..core.enums import RecordStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Department, DepartmentFilters, DepartmentInput
from .repository import DepartmentRepository

_DEPARTMENT_SELECT = """
    SELECT d.department_id, d.name, d.manager_id, d.status,
           e.first_name AS manager_first_name, e.last_name AS manager_last_name
    FROM departments d
    LEFT JOIN managers m ON m.manager_id = d.manager_id
    LEFT JOIN employees e ON e.employee_id = m.employee_id
"""


def _to_department(row: Dict[str, Any]) -> Department:
    manager_name = ""
    if row.get("manager_first_name"):
        manager_name = f"{row['manager_first_name']} {row['manager_last_name']}"
    return Department(
        department_id=int(row["department_id"]),
        name=row["name"],
        manager_id=int(row["manager_id"]),
        status=RecordStatus(row["status"]),
        manager_name=manager_name,
    )


class MySQLDepartmentRepository(DepartmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, department_id: int) -> Optional[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_DEPARTMENT_SELECT + " WHERE d.department_id=%s", (department_id,))
            row = fetchone(cur)
            return _to_department(row) if row else None

    def list_departments(self, filters: DepartmentFilters) -> Sequence[Department]:
        where: List[str] = []
        params: List[Any] = []
        if filters.status is not None:
            where.append("d.status=%s")
            params.append(filters.status.value)

        sql = _DEPARTMENT_SELECT
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY d.name, d.department_id"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_department(r) for r in fetchall(cur)]

    def create_department(self, data: DepartmentInput, *, status: RecordStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO departments(name, manager_id, status) VALUES(%s,%s,%s)",
                (data.name, data.manager_id, status.value),
            )
            return int(cur.lastrowid)

    def update_department(self, department_id: int, data: DepartmentInput) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT department_id FROM departments WHERE department_id=%s", (department_id,))
            if not fetchone(cur):
                return False
            cur.execute(
                """
                UPDATE departments
                SET name=%s, manager_id=%s, status=COALESCE(%s, status)
                WHERE department_id=%s
                """,
                (data.name, data.manager_id, data.status.value if data.status else None, department_id),
            )
            return True

    def set_status(self, department_id: int, status: RecordStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE departments SET status=%s WHERE department_id=%s", (status.value, department_id))
            return cur.rowcount > 0
