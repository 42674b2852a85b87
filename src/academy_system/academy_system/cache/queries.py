"""Cached reads and invalidating mutations over the services.

Controllers talk to :class:`AcademyQueries` only. Reads go through the
:class:`QueryCache`; each successful mutation drops the query keys it can
affect so the next read is served by the store.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from ..achievements.model import Achievement
from ..achievements.service import AchievementService
from ..common.datetime_utils import day_key
from ..daily_logs.model import DailyLog
from ..daily_logs.service import DailyLogService
from ..students.model import Student
from ..students.service import StudentService
from . import keys
from .query_cache import QueryCache, QueryKey


class AcademyQueries:
    def __init__(
        self,
        cache: QueryCache,
        students: StudentService,
        logs: DailyLogService,
        achievements: AchievementService,
    ):
        self.cache = cache
        self._students = students
        self._logs = logs
        self._achievements = achievements

    # --- reads ---

    def students(self, search: Optional[str] = None) -> list[Student]:
        return self.cache.fetch(keys.students_key(search), lambda: list(self._students.list_students(search)))

    def student(self, student_id: int) -> Optional[Student]:
        return self.cache.fetch(keys.student_key(student_id), lambda: self._students.get_student(student_id))

    def student_logs(self, student_id: int) -> list[DailyLog]:
        return self.cache.fetch(
            keys.student_logs_key(student_id), lambda: list(self._logs.list_for_student(student_id))
        )

    def logs_by_date(self, day: date | datetime) -> list[DailyLog]:
        return self.cache.fetch(keys.logs_by_date_key(day), lambda: list(self._logs.list_by_date(day)))

    def logs_range(self, start: date | datetime, end: date | datetime) -> list[DailyLog]:
        return self.cache.fetch(keys.logs_range_key(start, end), lambda: list(self._logs.list_range(start, end)))

    def achievements(self, student_id: int) -> list[Achievement]:
        return self.cache.fetch(
            keys.achievements_key(student_id), lambda: list(self._achievements.list_for_student(student_id))
        )

    # --- mutations ---

    def create_student(self, payload: Any) -> Student:
        student = self._students.create_student(payload)
        self.cache.invalidate_prefix((keys.STUDENTS,))
        # a previous lookup may have cached this id as absent
        self.cache.invalidate(keys.student_key(student.student_id))
        return student

    def update_student(self, student_id: int, payload: Any) -> Student:
        student = self._students.update_student(student_id, payload)
        self.cache.invalidate_prefix((keys.STUDENTS,))
        self.cache.invalidate(keys.student_key(student_id))
        return student

    def delete_student(self, student_id: int) -> None:
        self._students.delete_student(student_id)
        self.cache.invalidate_prefix((keys.STUDENTS,))
        self.cache.invalidate(keys.student_key(student_id))
        self.cache.invalidate(keys.student_logs_key(student_id))
        self.cache.invalidate(keys.achievements_key(student_id))

    def create_log(self, student_id: int, payload: Any) -> DailyLog:
        log = self._logs.create_log(student_id, payload)
        self.invalidate_logs(student_id, log.date)
        return log

    def delete_log(self, log_id: int) -> DailyLog:
        log = self._logs.delete_log(log_id)
        self.invalidate_logs(log.student_id, log.date)
        return log

    def create_achievement(self, student_id: int, payload: Any) -> Achievement:
        achievement = self._achievements.create_achievement(student_id, payload)
        self.cache.invalidate(keys.achievements_key(student_id))
        return achievement

    def invalidate_logs(self, student_id: int, day: date | datetime) -> None:
        """Drop every log query that can contain a log of ``student_id`` on ``day``."""
        target = day_key(day)

        def affected(key: QueryKey) -> bool:
            if key[0] != keys.DAILY_LOGS:
                return False
            if key[1] == "date":
                return key[2] == target
            return key[2] <= target <= key[3]

        self.cache.invalidate(keys.student_logs_key(student_id))
        self.cache.invalidate_where(affected)
