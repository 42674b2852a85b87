"""Monthly attendance grid: students grouped by class, one cell per day.

A student counts as present on a day when at least one log exists for that
day. The ``attended`` flag of the log is not consulted.
"""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Sequence

from ..common.datetime_utils import day_key
from ..daily_logs.model import DailyLog
from ..students.model import Student


@dataclass(frozen=True)
class AttendanceRow:
    student: Student
    cells: tuple[bool, ...]
    present_days: int
    total_days: int
    percentage: int


@dataclass(frozen=True)
class ClassGroup:
    class_id: str
    rows: tuple[AttendanceRow, ...]


@dataclass(frozen=True)
class AttendanceMatrix:
    days: tuple[date, ...]
    groups: tuple[ClassGroup, ...]


def attendance_percentage(present_days: int, total_days: int) -> int:
    """``present/total*100`` rounded half up; 0 for an empty range."""
    if total_days <= 0:
        return 0
    return (present_days * 200 + total_days) // (2 * total_days)


def presence_index(logs: Iterable[DailyLog]) -> dict[int, set[str]]:
    index: dict[int, set[str]] = defaultdict(set)
    for log in logs:
        index[log.student_id].add(day_key(log.date))
    return index


def build_attendance_matrix(
    students: Sequence[Student],
    logs: Iterable[DailyLog],
    days: Sequence[date],
) -> AttendanceMatrix:
    index = presence_index(logs)
    day_keys = [day_key(d) for d in days]

    by_class: dict[str, list[AttendanceRow]] = defaultdict(list)
    for student in students:
        present = index.get(student.student_id, set())
        cells = tuple(k in present for k in day_keys)
        present_days = sum(cells)
        by_class[student.class_id].append(
            AttendanceRow(
                student=student,
                cells=cells,
                present_days=present_days,
                total_days=len(day_keys),
                percentage=attendance_percentage(present_days, len(day_keys)),
            )
        )

    groups = tuple(ClassGroup(class_id=c, rows=tuple(by_class[c])) for c in sorted(by_class))
    return AttendanceMatrix(days=tuple(days), groups=groups)
