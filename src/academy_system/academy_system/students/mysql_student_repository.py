from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..core.enums import StudentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Student
from .repository import StudentRepository
from .schema import StudentInput

_COLUMNS = "student_id, name, current_lesson, status, fees_paid, class_id"
_UPDATABLE = ("name", "current_lesson", "status", "fees_paid", "class_id")


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _to_student(row: dict) -> Student:
    return Student(
        student_id=int(row["student_id"]),
        name=row["name"],
        current_lesson=row["current_lesson"],
        status=StudentStatus(row["status"]),
        fees_paid=bool(row.get("fees_paid")),
        class_id=row["class_id"],
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, *, search: Optional[str] = None) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            if search:
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM students
                    WHERE LOWER(name) LIKE %s
                    ORDER BY name ASC, student_id ASC
                    """,
                    (f"%{_escape_like(search.lower())}%",),
                )
            else:
                cur.execute(f"SELECT {_COLUMNS} FROM students ORDER BY name ASC, student_id ASC")
            return [_to_student(r) for r in fetchall(cur)]

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE student_id=%s", (int(student_id),))
            row = fetchone(cur)
            return _to_student(row) if row else None

    def create(self, data: StudentInput) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO students(name, current_lesson, status, fees_paid, class_id)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (data.name, data.current_lesson, data.status.value, int(data.fees_paid), data.class_id),
            )
            return int(cur.lastrowid)

    def update(self, student_id: int, changes: Mapping[str, Any]) -> bool:
        columns = [c for c in _UPDATABLE if c in changes]
        if not columns:
            return self.get_by_id(student_id) is not None

        params: list[object] = []
        for c in columns:
            value = changes[c]
            if isinstance(value, StudentStatus):
                value = value.value
            elif isinstance(value, bool):
                value = int(value)
            params.append(value)
        params.append(int(student_id))

        assignments = ", ".join(f"{c}=%s" for c in columns)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE students SET {assignments} WHERE student_id=%s", tuple(params))
            # rowcount is 0 when the values were already current, so check existence instead.
            cur.execute("SELECT 1 AS found FROM students WHERE student_id=%s", (int(student_id),))
            return fetchone(cur) is not None

    def delete_by_id(self, student_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE student_id=%s", (int(student_id),))
            return cur.rowcount > 0
