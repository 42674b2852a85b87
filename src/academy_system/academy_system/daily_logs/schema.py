from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..common.validators import optional_text, require_bool, require_datetime, require_mapping


@dataclass(frozen=True)
class DailyLogInput:
    date: Optional[datetime] = None
    attended: bool = True
    lesson_summary: Optional[str] = None


def parse_daily_log_input(payload: Any) -> DailyLogInput:
    """Validate the add-log form. ``studentId`` comes from the URL, not the body."""
    data = require_mapping(payload)

    log_date = None
    if data.get("date") is not None:
        log_date = require_datetime(data["date"], "date")

    attended = True
    if data.get("attended") is not None:
        attended = require_bool(data["attended"], "attended")

    return DailyLogInput(
        date=log_date,
        attended=attended,
        lesson_summary=optional_text(data.get("lessonSummary"), "lessonSummary"),
    )
