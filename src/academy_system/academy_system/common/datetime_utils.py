from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta
from typing import Optional, Union

from ..core.constants import DATE_KEY_FORMAT, MONTH_KEY_FORMAT

DateLike = Union[date, datetime]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_KEY_FORMAT).date()


def parse_month(value: str) -> date:
    """Parse YYYY-MM string into the first day of that month."""
    return datetime.strptime(value, MONTH_KEY_FORMAT).date()


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 date or datetime string.

    Timezone-aware values are converted to naive local time, which is how
    timestamps are stored.
    """
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def _as_date(value: DateLike) -> date:
    return value.date() if isinstance(value, datetime) else value


def start_of_day(value: DateLike) -> datetime:
    return datetime.combine(_as_date(value), time.min)


def end_of_day(value: DateLike) -> datetime:
    return datetime.combine(_as_date(value), time.max)


def day_key(value: DateLike) -> str:
    return _as_date(value).strftime(DATE_KEY_FORMAT)


def month_day_range(month: DateLike, today: Optional[date] = None) -> list[date]:
    """Days shown for a month in the attendance history.

    Past months cover the whole month. The current month stops at ``today`` so
    future days are never listed.
    """
    today = _as_date(today) if today is not None else now_local().date()
    first = _as_date(month).replace(day=1)
    last = first.replace(day=calendar.monthrange(first.year, first.month)[1])
    if (first.year, first.month) == (today.year, today.month) and last > today:
        last = today
    return [first + timedelta(days=i) for i in range((last - first).days + 1)]
