from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import DailyLog


class DailyLogRepository(Protocol):
    def list_for_student(self, student_id: int) -> Sequence[DailyLog]:
        """Most recent first."""

        raise NotImplementedError

    def list_between(self, start: datetime, end: datetime) -> Sequence[DailyLog]:
        """Logs of every student with ``start <= date <= end``."""

        raise NotImplementedError

    def get_by_id(self, log_id: int) -> Optional[DailyLog]:
        raise NotImplementedError

    def create(
        self,
        *,
        student_id: int,
        date: datetime,
        attended: bool = True,
        lesson_summary: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def delete_by_id(self, log_id: int) -> bool:
        raise NotImplementedError
