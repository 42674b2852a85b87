from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import day_key
from .query_cache import QueryKey

STUDENTS = "students"
STUDENT = "student"
STUDENT_LOGS = "student_logs"
DAILY_LOGS = "daily_logs"
ACHIEVEMENTS = "achievements"


def students_key(search: Optional[str] = None) -> QueryKey:
    return (STUDENTS, (search or "").lower())


def student_key(student_id: int) -> QueryKey:
    return (STUDENT, int(student_id))


def student_logs_key(student_id: int) -> QueryKey:
    return (STUDENT_LOGS, int(student_id))


def logs_by_date_key(day: date | datetime) -> QueryKey:
    return (DAILY_LOGS, "date", day_key(day))


def logs_range_key(start: date | datetime, end: date | datetime) -> QueryKey:
    return (DAILY_LOGS, "range", day_key(start), day_key(end))


def achievements_key(student_id: int) -> QueryKey:
    return (ACHIEVEMENTS, int(student_id))
