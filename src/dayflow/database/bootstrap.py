from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig

logger = logging.getLogger(__name__)

DEMO_ACCOUNTS = (
    # employee_id, first, last, email, password, role, department, designation
    ("ADM-001", "Ada", "Admin", "admin@dayflow.local", "admin1234", "admin", "Management", "Administrator"),
    ("HR-001", "Hana", "Reyes", "hr@dayflow.local", "hrpass1234", "hr", "Human Resources", "HR Manager"),
    ("EMP-001", "Eli", "Turner", "employee@dayflow.local", "employee1234", "employee", "Engineering", "Developer"),
)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_comments(sql: str) -> str:
    return re.sub(r"(?m)^\s*--.*$", "", sql)


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema/seed files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(host=target.host, port=target.port, user=target.user, password=target.password, use_pure=True)
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _run_sql_file(db_config: dict, path: str | Path) -> None:
    target = DBConfig.from_dict(db_config)
    sql = _strip_create_db_and_use(_strip_comments(Path(path).read_text(encoding="utf-8")))

    conn = _connect(target)
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _run_sql_file(db_config, schema_path)
    logger.info("Applied schema from %s", schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    _run_sql_file(db_config, seed_path)
    logger.info("Applied seed data from %s", seed_path)


def ensure_demo_users(db_config: dict) -> None:
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor(dictionary=True)

        for employee_id, first, last, email, password, role, department, designation in DEMO_ACCOUNTS:
            password_hash = generate_password_hash(password)
            cur.execute("SELECT profile_id FROM profiles WHERE email=%s", (email,))
            existing = cur.fetchone()
            if existing:
                profile_id = int(existing["profile_id"])
                cur.execute(
                    """
                    UPDATE profiles
                    SET first_name=%s, last_name=%s, password_hash=%s, department=%s, designation=%s
                    WHERE profile_id=%s
                    """,
                    (first, last, password_hash, department, designation, profile_id),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO profiles (employee_id, email, password_hash, first_name, last_name,
                                          department, designation, date_of_joining)
                    VALUES (%s, %s, %s, %s, %s, %s, %s, CURDATE())
                    """,
                    (employee_id, email, password_hash, first, last, department, designation),
                )
                profile_id = int(cur.lastrowid)

            cur.execute("DELETE FROM user_roles WHERE user_id=%s", (profile_id,))
            cur.execute("INSERT INTO user_roles (user_id, role) VALUES (%s, %s)", (profile_id, role))

        conn.commit()
        logger.info("Demo accounts ready (%d)", len(DEMO_ACCOUNTS))
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
