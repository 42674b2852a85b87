from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import AchievementLevel, Medal


@dataclass(frozen=True)
class Achievement:
    """Domain entity: a single competition result of a student."""

    achievement_id: int
    student_id: int
    level: AchievementLevel
    medal: Medal
    description: Optional[str] = None
