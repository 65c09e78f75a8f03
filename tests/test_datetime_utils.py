from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from src.attendance_ledger.attendance_ledger.common.datetime_utils import (
    format_duration,
    is_last_day_of_month,
    month_bounds,
    parse_date,
    parse_instant,
)


def test_parse_date_formats():
    assert parse_date("2024-06-03") == date(2024, 6, 3)
    assert parse_date("03-06-2024") == date(2024, 6, 3)
    assert parse_date("2024-06-03T10:00:00Z") == date(2024, 6, 3)
    assert parse_date("not a date") is None
    assert parse_date(None) is None


def test_parse_instant_degrades_to_none():
    assert parse_instant("2024-06-03T09:15:00") == datetime(2024, 6, 3, 9, 15)
    assert parse_instant("garbage") is None


def test_parse_instant_normalises_to_zone():
    tz = ZoneInfo("Asia/Kolkata")

    local = parse_instant("2024-06-03T09:15:00", tz)
    assert local == datetime(2024, 6, 3, 9, 15, tzinfo=tz)

    utc = parse_instant("2024-06-03T03:45:00Z", tz)
    assert utc == local
    assert utc.utcoffset() == timedelta(hours=5, minutes=30)

    assert parse_instant(datetime(2024, 6, 3, 3, 45, tzinfo=timezone.utc), tz) == local


def test_month_helpers():
    assert month_bounds(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))
    assert is_last_day_of_month(date(2024, 12, 31))
    assert not is_last_day_of_month(date(2024, 6, 29))


def test_format_duration():
    assert format_duration(0) == "00:00:00"
    assert format_duration(30601) == "08:30:01"
    assert format_duration(-5) == "00:00:00"
