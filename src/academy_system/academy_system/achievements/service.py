from __future__ import annotations

import logging
from typing import Any, Sequence

from ..core.exceptions import NotFoundError
from ..students.repository import StudentRepository
from .model import Achievement
from .repository import AchievementRepository
from .schema import parse_achievement_input

logger = logging.getLogger(__name__)


class AchievementService:
    def __init__(self, achievements: AchievementRepository, students: StudentRepository):
        self._achievements = achievements
        self._students = students

    def _require_student(self, student_id: int) -> None:
        if not self._students.get_by_id(student_id):
            raise NotFoundError("Student not found")

    def list_for_student(self, student_id: int) -> Sequence[Achievement]:
        self._require_student(student_id)
        return self._achievements.list_for_student(student_id)

    def create_achievement(self, student_id: int, payload: Any) -> Achievement:
        data = parse_achievement_input(payload)
        self._require_student(student_id)
        achievement_id = self._achievements.create(student_id, data)
        logger.info("Recorded %s %s medal for student %s", data.level.value, data.medal.value, student_id)
        return Achievement(
            achievement_id=achievement_id,
            student_id=int(student_id),
            level=data.level,
            medal=data.medal,
            description=data.description,
        )
