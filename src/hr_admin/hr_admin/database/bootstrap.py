from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from itertools import cycle
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Mapping, Union

from werkzeug.security import generate_password_hash

from ..core.constants import DEFAULT_PASSWORD, SEED_MANAGERS, SEED_RECORDS_PER_MANAGER
from ..core.enums import RecordStatus
from .connection import DBConfig, DatabaseConnection

logger = logging.getLogger(__name__)

ADMIN_USERNAME = "hradmin@test.com"

_FIRST_NAMES = ("Amelia", "Bruno", "Chiara", "Dmitri", "Elena", "Farid", "Greta", "Hiro", "Ines", "Jonas", "Kamala")
_LAST_NAMES = ("Alvarez", "Brennan", "Castillo", "Dubois", "Eriksen", "Fujita", "Gallagher", "Horvat", "Iyer")
_DEPARTMENT_NAMES = (
    "Accounts", "Benefits", "Compliance", "Design", "Engineering", "Facilities", "Finance",
    "Legal", "Logistics", "Marketing", "Operations", "Payroll", "Procurement", "Recruiting",
    "Research", "Sales", "Security", "Support", "Training", "Warehouse",
)


def _strip_create_db_and_use(sql: str) -> str:
    # schema.sql names its own database; the configured one wins.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a SQL script on ``;`` outside of quoted strings."""
    buf: List[str] = []
    quote = None
    escape = False

    for ch in sql:
        buf.append(ch)
        if escape:
            escape = False
        elif ch == "\\":
            escape = True
        elif quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf[:-1]).strip()
            buf.clear()
            if stmt:
                yield stmt

    tail = "".join(buf).strip()
    if tail:
        yield tail


@contextmanager
def _connect(db_config: Mapping[str, Any], *, with_database: bool = True, dictionary: bool = False) -> Iterator:
    conn = DatabaseConnection(DBConfig.from_mapping(db_config)).connect(with_database=with_database)
    try:
        cur = conn.cursor(dictionary=dictionary)
        yield cur
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(db_config: Mapping[str, Any]) -> None:
    config = DBConfig.from_mapping(db_config)
    with _connect(db_config, with_database=False) as cur:
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )


def apply_schema(db_config: Mapping[str, Any], *, schema_path: Union[str, Path]) -> None:
    ensure_database_exists(db_config)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))
    with _connect(db_config) as cur:
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
    logger.info("Applied %s to %s", schema_path, DBConfig.from_mapping(db_config).describe())


def list_tables(db_config: Mapping[str, Any]) -> List[str]:
    with _connect(db_config) as cur:
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]


def demo_people(count: int, offset: int = 0) -> List[dict]:
    """Deterministic employee rows, unique by email across one seed run."""
    people = []
    firsts, lasts = cycle(_FIRST_NAMES), cycle(_LAST_NAMES)
    for _ in range(offset):
        next(firsts), next(lasts)
    for i in range(offset, offset + count):
        first, last = next(firsts), next(lasts)
        people.append(
            {
                "first_name": first,
                "last_name": last,
                "phone": f"555{i:07d}",
                "email": f"{first}.{last}.{i}@test.com".lower(),
            }
        )
    return people


def seed_demo_data(
    db_config: Mapping[str, Any],
    *,
    default_password: str = DEFAULT_PASSWORD,
    managers: int = SEED_MANAGERS,
    per_manager: int = SEED_RECORDS_PER_MANAGER,
) -> None:
    """Replace all records with the demo dataset.

    One admin login, then ``managers`` managers, each owning ``per_manager``
    departments and ``per_manager`` employees. Every employee gets a login
    named after their email.
    """
    password_hash = generate_password_hash(default_password)
    active = RecordStatus.ACTIVE.value

    with _connect(db_config) as cur:
        for table in ("departments", "employee_managers", "managers", "users", "employees"):
            cur.execute(f"DELETE FROM {table}")

        cur.execute(
            "INSERT INTO users(username, password_hash) VALUES(%s,%s)",
            (ADMIN_USERNAME, password_hash),
        )

        def insert_employee(person: dict) -> int:
            cur.execute(
                "INSERT INTO employees(first_name, last_name, phone, email, status) VALUES(%s,%s,%s,%s,%s)",
                (person["first_name"], person["last_name"], person["phone"], person["email"], active),
            )
            employee_id = int(cur.lastrowid)
            cur.execute(
                "INSERT INTO users(username, password_hash, employee_id) VALUES(%s,%s,%s)",
                (person["email"], password_hash, employee_id),
            )
            return employee_id

        names = cycle(_DEPARTMENT_NAMES)
        offset = 0
        for _ in range(managers):
            (boss,) = demo_people(1, offset)
            offset += 1
            cur.execute("INSERT INTO managers(employee_id) VALUES(%s)", (insert_employee(boss),))
            manager_id = int(cur.lastrowid)

            for person in demo_people(per_manager, offset):
                employee_id = insert_employee(person)
                cur.execute(
                    "INSERT INTO employee_managers(employee_id, manager_id) VALUES(%s,%s)",
                    (employee_id, manager_id),
                )
            offset += per_manager

            for _ in range(per_manager):
                cur.execute(
                    "INSERT INTO departments(name, manager_id, status) VALUES(%s,%s,%s)",
                    (next(names), manager_id, active),
                )

    logger.info(
        "Seeded %s managers x %s records into %s",
        managers,
        per_manager,
        DBConfig.from_mapping(db_config).describe(),
    )
