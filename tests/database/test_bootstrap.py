from __future__ import annotations

from src.academy_system.academy_system.database.bootstrap import (
    DEMO_STUDENTS,
    _iter_sql_statements,
    _strip_create_db_and_use,
    seed_demo_students,
)
from src.academy_system.academy_system.database.connection import DBConfig


def test_splitter_keeps_semicolons_inside_quotes():
    sql = "INSERT INTO t VALUES ('a;b');\nINSERT INTO t VALUES (\"it\\\"s;\");\n\nSELECT 1"

    assert list(_iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        'INSERT INTO t VALUES ("it\\"s;")',
        "SELECT 1",
    ]


def test_create_database_and_use_lines_are_dropped():
    sql = "CREATE DATABASE IF NOT EXISTS x;\nUSE x;\nCREATE TABLE t (id INT);\n"

    assert list(_iter_sql_statements(_strip_create_db_and_use(sql))) == ["CREATE TABLE t (id INT)"]


def test_db_config_defaults_and_description():
    config = DBConfig.from_dict({"host": "db", "password": None})

    assert config.port == 3306
    assert config.database == "academy_db"
    assert config.describe() == "root@db:3306/academy_db"
    assert "database" not in config.connect_kwargs(with_database=False)


def test_seed_demo_students_is_idempotent(container):
    assert seed_demo_students(container.student_service) == len(DEMO_STUDENTS)
    assert seed_demo_students(container.student_service) == 0

    names = [s.name for s in container.student_service.list_students()]
    assert names == ["Alice Johnson", "Bob Smith", "Charlie Brown"]
