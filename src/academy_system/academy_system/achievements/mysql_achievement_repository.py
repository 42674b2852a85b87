from __future__ import annotations

from typing import Sequence

from ..core.enums import AchievementLevel, Medal
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Achievement
from .repository import AchievementRepository
from .schema import AchievementInput


class MySQLAchievementRepository(AchievementRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_student(self, student_id: int) -> Sequence[Achievement]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT achievement_id, student_id, level, medal, description
                FROM achievements
                WHERE student_id=%s
                ORDER BY achievement_id ASC
                """,
                (int(student_id),),
            )
            return [
                Achievement(
                    achievement_id=int(r["achievement_id"]),
                    student_id=int(r["student_id"]),
                    level=AchievementLevel(r["level"]),
                    medal=Medal(r["medal"]),
                    description=r.get("description"),
                )
                for r in fetchall(cur)
            ]

    def create(self, student_id: int, data: AchievementInput) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO achievements(student_id, level, medal, description)
                VALUES(%s,%s,%s,%s)
                """,
                (int(student_id), data.level.value, data.medal.value, data.description),
            )
            return int(cur.lastrowid)
