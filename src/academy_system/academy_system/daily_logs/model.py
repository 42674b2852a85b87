from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class DailyLog:
    """Domain entity: one day's attendance/notes entry for one student."""

    log_id: int
    student_id: int
    date: datetime
    attended: bool = True
    lesson_summary: Optional[str] = None
