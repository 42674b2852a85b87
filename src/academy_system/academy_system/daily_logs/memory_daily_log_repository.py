from __future__ import annotations

import threading
from datetime import datetime
from itertools import count
from typing import Optional, Sequence

from .model import DailyLog
from .repository import DailyLogRepository


class InMemoryDailyLogRepository(DailyLogRepository):
    def __init__(self):
        self._rows: dict[int, DailyLog] = {}
        self._ids = count(1)
        self._lock = threading.Lock()

    def _snapshot(self) -> list[DailyLog]:
        with self._lock:
            return list(self._rows.values())

    def list_for_student(self, student_id: int) -> Sequence[DailyLog]:
        items = [r for r in self._snapshot() if r.student_id == int(student_id)]
        items.sort(key=lambda r: (r.date, r.log_id), reverse=True)
        return items

    def list_between(self, start: datetime, end: datetime) -> Sequence[DailyLog]:
        items = [r for r in self._snapshot() if start <= r.date <= end]
        items.sort(key=lambda r: (r.date, r.log_id))
        return items

    def get_by_id(self, log_id: int) -> Optional[DailyLog]:
        with self._lock:
            return self._rows.get(int(log_id))

    def create(
        self,
        *,
        student_id: int,
        date: datetime,
        attended: bool = True,
        lesson_summary: Optional[str] = None,
    ) -> int:
        with self._lock:
            log_id = next(self._ids)
            self._rows[log_id] = DailyLog(
                log_id=log_id,
                student_id=int(student_id),
                date=date,
                attended=attended,
                lesson_summary=lesson_summary,
            )
            return log_id

    def delete_by_id(self, log_id: int) -> bool:
        with self._lock:
            return self._rows.pop(int(log_id), None) is not None
