from __future__ import annotations

from datetime import date, datetime, time

from src.academy_system.academy_system.common.datetime_utils import (
    end_of_day,
    month_day_range,
    parse_iso_datetime,
    start_of_day,
)


def test_current_month_stops_at_today():
    days = month_day_range(date(2024, 6, 1), today=date(2024, 6, 5))

    assert days[0] == date(2024, 6, 1)
    assert days[-1] == date(2024, 6, 5)
    assert len(days) == 5


def test_first_of_current_month_is_a_single_day():
    assert month_day_range(date(2024, 6, 20), today=date(2024, 6, 1)) == [date(2024, 6, 1)]


def test_past_month_covers_whole_month():
    days = month_day_range(date(2024, 2, 14), today=date(2024, 6, 5))

    assert days[0] == date(2024, 2, 1)
    assert days[-1] == date(2024, 2, 29)


def test_day_bounds():
    moment = datetime(2024, 6, 5, 13, 45)

    assert start_of_day(moment) == datetime(2024, 6, 5, 0, 0)
    assert end_of_day(date(2024, 6, 5)) == datetime.combine(date(2024, 6, 5), time.max)


def test_parse_iso_datetime_accepts_plain_dates():
    assert parse_iso_datetime("2024-06-05") == datetime(2024, 6, 5)
    assert parse_iso_datetime("2024-06-05T08:30:00").hour == 8
    assert parse_iso_datetime("2024-06-05T08:30:00Z").tzinfo is None
