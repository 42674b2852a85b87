from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Optional, Sequence

from ..common.datetime_utils import end_of_day, now_local, start_of_day
from ..core.exceptions import NotFoundError
from ..students.repository import StudentRepository
from .model import DailyLog
from .repository import DailyLogRepository
from .schema import parse_daily_log_input

logger = logging.getLogger(__name__)


class DailyLogService:
    """Use case: record and query daily attendance logs."""

    def __init__(self, logs: DailyLogRepository, students: StudentRepository):
        self._logs = logs
        self._students = students

    def _require_student(self, student_id: int) -> None:
        if not self._students.get_by_id(student_id):
            raise NotFoundError("Student not found")

    def list_for_student(self, student_id: int) -> Sequence[DailyLog]:
        self._require_student(student_id)
        return self._logs.list_for_student(student_id)

    def create_log(self, student_id: int, payload: Any, *, now: Optional[datetime] = None) -> DailyLog:
        data = parse_daily_log_input(payload)
        return self.record_attendance(
            student_id,
            log_date=data.date or now or now_local(),
            attended=data.attended,
            lesson_summary=data.lesson_summary,
        )

    def record_attendance(
        self,
        student_id: int,
        *,
        log_date: datetime,
        attended: bool = True,
        lesson_summary: Optional[str] = None,
    ) -> DailyLog:
        self._require_student(student_id)
        log_id = self._logs.create(
            student_id=student_id,
            date=log_date,
            attended=attended,
            lesson_summary=lesson_summary,
        )
        logger.info("Recorded log %s for student %s on %s", log_id, student_id, log_date.date())
        return DailyLog(
            log_id=log_id,
            student_id=int(student_id),
            date=log_date,
            attended=attended,
            lesson_summary=lesson_summary,
        )

    def list_by_date(self, day: date | datetime) -> Sequence[DailyLog]:
        return self._logs.list_between(start_of_day(day), end_of_day(day))

    def list_range(self, start: date | datetime, end: date | datetime) -> Sequence[DailyLog]:
        return self._logs.list_between(start_of_day(start), end_of_day(end))

    def delete_log(self, log_id: int) -> DailyLog:
        """Delete a log and return what was removed (callers invalidate by its date)."""
        log = self._logs.get_by_id(log_id)
        if not log or not self._logs.delete_by_id(log_id):
            raise NotFoundError("Log not found")
        logger.info("Deleted log %s of student %s", log_id, log.student_id)
        return log
