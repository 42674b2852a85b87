from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..cache.queries import AcademyQueries
from ..common.datetime_utils import day_key, month_day_range, now_local
from .matrix import AttendanceMatrix, build_attendance_matrix

CSV_FIELDS_PREFIX = ["class_id", "student_id", "name"]
CSV_FIELDS_SUFFIX = ["present_days", "total_days", "percentage"]


@dataclass(frozen=True)
class MonthHistory:
    month: date
    is_current_month: bool
    matrix: AttendanceMatrix


class AttendanceHistoryService:
    """Builds the monthly history grid from cached student and log queries."""

    def __init__(self, queries: AcademyQueries):
        self._queries = queries

    def month_history(
        self,
        month: date,
        *,
        class_id: Optional[str] = None,
        today: Optional[date] = None,
    ) -> MonthHistory:
        today = today or now_local().date()
        days = month_day_range(month, today)

        students = self._queries.students()
        if class_id:
            students = [s for s in students if s.class_id == class_id]
        logs = self._queries.logs_range(days[0], days[-1])

        first = month.replace(day=1)
        return MonthHistory(
            month=first,
            is_current_month=(first.year, first.month) == (today.year, today.month),
            matrix=build_attendance_matrix(students, logs, days),
        )

    @staticmethod
    def csv_rows(history: MonthHistory) -> tuple[list[str], list[dict]]:
        """Flatten the grid for export: one row per student, one column per day."""
        day_columns = [day_key(d) for d in history.matrix.days]
        rows: list[dict] = []
        for group in history.matrix.groups:
            for row in group.rows:
                out = {
                    "class_id": group.class_id,
                    "student_id": row.student.student_id,
                    "name": row.student.name,
                }
                out.update({k: ("P" if present else "") for k, present in zip(day_columns, row.cells)})
                out.update(
                    {
                        "present_days": row.present_days,
                        "total_days": row.total_days,
                        "percentage": row.percentage,
                    }
                )
                rows.append(out)
        return CSV_FIELDS_PREFIX + day_columns + CSV_FIELDS_SUFFIX, rows
