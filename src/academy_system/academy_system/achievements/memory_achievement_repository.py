from __future__ import annotations

import threading
from itertools import count
from typing import Sequence

from .model import Achievement
from .repository import AchievementRepository
from .schema import AchievementInput


class InMemoryAchievementRepository(AchievementRepository):
    def __init__(self):
        self._rows: dict[int, Achievement] = {}
        self._ids = count(1)
        self._lock = threading.Lock()

    def list_for_student(self, student_id: int) -> Sequence[Achievement]:
        with self._lock:
            items = [a for a in self._rows.values() if a.student_id == int(student_id)]
        items.sort(key=lambda a: a.achievement_id)
        return items

    def create(self, student_id: int, data: AchievementInput) -> int:
        with self._lock:
            achievement_id = next(self._ids)
            self._rows[achievement_id] = Achievement(
                achievement_id=achievement_id,
                student_id=int(student_id),
                level=data.level,
                medal=data.medal,
                description=data.description,
            )
            return achievement_id
