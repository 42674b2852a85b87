from __future__ import annotations

from typing import Protocol, Sequence

from .model import Achievement
from .schema import AchievementInput


class AchievementRepository(Protocol):
    def list_for_student(self, student_id: int) -> Sequence[Achievement]:
        raise NotImplementedError

    def create(self, student_id: int, data: AchievementInput) -> int:
        raise NotImplementedError
