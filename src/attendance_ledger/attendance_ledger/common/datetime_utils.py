from __future__ import annotations

import calendar
import re
from datetime import date, datetime, timedelta, tzinfo
from typing import Optional, Union

from dateutil.relativedelta import relativedelta

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_DMY_DATE = re.compile(r"^\d{1,2}-\d{1,2}-\d{4}$")
_HHMM = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_date(value) -> Optional[date]:
    """Parse a calendar day from yyyy-mm-dd, dd-mm-yyyy or an ISO timestamp.

    Returns None for anything unparseable; historical rows are not always clean.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        return None
    try:
        if _ISO_DATE.match(text):
            return parse_iso_date(text)
        if _DMY_DATE.match(text):
            day, month, year = (int(p) for p in text.split("-"))
            return date(year, month, day)
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def parse_instant(value, tz: Optional[tzinfo] = None) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp. Unparseable input gives None.

    With ``tz`` the result is expressed in that zone: naive wall times are
    taken as local to it, offset-carrying timestamps are converted.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return None
    return in_zone(parsed, tz)


def in_zone(value: datetime, tz: Optional[tzinfo]) -> datetime:
    if tz is None:
        return value
    return value.replace(tzinfo=tz) if value.tzinfo is None else value.astimezone(tz)


def parse_hhmm(value: Optional[str]) -> Optional[int]:
    """Minutes since midnight for an HH:mm string, or None if absent/invalid."""
    m = _HHMM.match((value or "").strip())
    if not m:
        return None
    hours, minutes = int(m.group(1)), int(m.group(2))
    if hours > 23 or minutes > 59:
        return None
    return hours * 60 + minutes


def seconds_between(start: Optional[datetime], end: Optional[datetime]) -> int:
    """Whole seconds from start to end, clamped at zero."""
    if start is None or end is None:
        return 0
    try:
        return max(0, int((end - start).total_seconds()))
    except TypeError:
        # naive vs aware timestamps from mixed sources
        return 0


def add_months(start: date, months: int) -> date:
    """Calendar-aware month addition (Jan 31 + 1 month = Feb 28/29)."""
    return start + relativedelta(months=int(months))


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last)


def is_last_day_of_month(day: date) -> bool:
    return (day + timedelta(days=1)).month != day.month


def previous_month(year: int, month: int) -> tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1


def iter_days(start: date, end: date):
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def as_date(value: Union[date, datetime]) -> date:
    return value.date() if isinstance(value, datetime) else value


def format_duration(seconds: Optional[float]) -> str:
    """HH:MM:SS for a (non-negative) number of seconds."""
    total = max(0, int(seconds or 0))
    h, rem = divmod(total, 3600)
    m, s = divmod(rem, 60)
    return f"{h:02d}:{m:02d}:{s:02d}"


def format_dd_mm_yyyy(value: Optional[date]) -> str:
    return value.strftime("%d-%m-%Y") if value else "-"


def now_local(tz: Optional[tzinfo] = None) -> datetime:
    """Current time, aware when ``tz`` is given.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(tz)
