from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import DailyLog
from .repository import DailyLogRepository

_COLUMNS = "log_id, student_id, log_date, attended, lesson_summary"


def _to_log(row: dict) -> DailyLog:
    return DailyLog(
        log_id=int(row["log_id"]),
        student_id=int(row["student_id"]),
        date=row["log_date"],
        attended=bool(row.get("attended")),
        lesson_summary=row.get("lesson_summary"),
    )


class MySQLDailyLogRepository(DailyLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_student(self, student_id: int) -> Sequence[DailyLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM daily_logs
                WHERE student_id=%s
                ORDER BY log_date DESC, log_id DESC
                """,
                (int(student_id),),
            )
            return [_to_log(r) for r in fetchall(cur)]

    def list_between(self, start: datetime, end: datetime) -> Sequence[DailyLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM daily_logs
                WHERE log_date BETWEEN %s AND %s
                ORDER BY log_date ASC, log_id ASC
                """,
                (start, end),
            )
            return [_to_log(r) for r in fetchall(cur)]

    def get_by_id(self, log_id: int) -> Optional[DailyLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM daily_logs WHERE log_id=%s", (int(log_id),))
            row = fetchone(cur)
            return _to_log(row) if row else None

    def create(
        self,
        *,
        student_id: int,
        date: datetime,
        attended: bool = True,
        lesson_summary: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO daily_logs(student_id, log_date, attended, lesson_summary)
                VALUES(%s,%s,%s,%s)
                """,
                (int(student_id), date, int(attended), lesson_summary),
            )
            return int(cur.lastrowid)

    def delete_by_id(self, log_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM daily_logs WHERE log_id=%s", (int(log_id),))
            return cur.rowcount > 0
