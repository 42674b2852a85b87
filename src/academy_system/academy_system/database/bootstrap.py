from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable

import mysql.connector

from .connection import DBConfig


def _connect(db_config: dict, *, with_database: bool = True):
    kwargs = DBConfig.from_dict(db_config).connect_kwargs(with_database=with_database)
    return mysql.connector.connect(use_pure=True, **kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # the target database comes from DB_CONFIG, not from the file
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    return re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)


def _iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on top-level semicolons; quoted semicolons are kept."""
    start = 0
    quote = None
    i = 0
    while i < len(sql):
        ch = sql[i]
        if quote:
            if ch == "\\":
                i += 1
            elif ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = sql[start:i].strip()
            if stmt:
                yield stmt
            start = i + 1
        i += 1

    tail = sql[start:].strip()
    if tail:
        yield tail


def _exec_sql(cur, sql: str) -> None:
    for stmt in _iter_sql_statements(sql):
        cur.execute(stmt)


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(db_config, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def _apply_sql_file(db_config: dict, path: str | Path) -> None:
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))
    conn = _connect(db_config)
    try:
        cur = conn.cursor()
        _exec_sql(cur, sql)
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _apply_sql_file(db_config, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    _apply_sql_file(db_config, seed_path)


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(db_config)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()


DEMO_STUDENTS = (
    {"name": "Alice Johnson", "currentLesson": "Long Stick", "status": "Active", "feesPaid": True, "classId": "Class 1"},
    {"name": "Bob Smith", "currentLesson": "Middle Stick", "status": "Probation", "feesPaid": False, "classId": "Class 1"},
    {"name": "Charlie Brown", "currentLesson": "Sword", "status": "Active", "feesPaid": True, "classId": "Class 2"},
)


def seed_demo_students(student_service) -> int:
    """Same rows as seed.sql, for stores without SQL (memory backend). Returns rows added."""
    existing = {s.name for s in student_service.list_students()}
    added = 0
    for payload in DEMO_STUDENTS:
        if payload["name"] not in existing:
            student_service.create_student(payload)
            added += 1
    return added
