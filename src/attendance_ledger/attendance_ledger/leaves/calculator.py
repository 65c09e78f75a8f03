"""Chargeable leave days and extra-time leave hours."""
from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Optional

from ..common.datetime_utils import iter_days, parse_hhmm
from ..core.constants import EXTRA_TIME_FALLBACK_HOURS_PER_DAY, HALF_DAY_LEAVE_DAYS
from ..core.enums import HolidayStatus, LeaveCategory
from .model import CompanyHoliday, LeaveRequest

log = logging.getLogger(__name__)

SUNDAY = 6


def holiday_dates(holidays: Iterable) -> frozenset[date]:
    """Accept CompanyHoliday records or plain dates."""
    out = set()
    for h in holidays or ():
        out.add(h.holiday_date if isinstance(h, CompanyHoliday) else h)
    return frozenset(out)


def working_days(start: date, end: date, holidays: Iterable = ()) -> int:
    """Days in [start, end] that are neither Sundays nor holidays. Reversed range -> 0."""
    if start > end:
        return 0
    off = holiday_dates(holidays)
    return sum(1 for d in iter_days(start, end) if d.weekday() != SUNDAY and d not in off)


def leave_days(start: date, end: date, holidays: Iterable = (), category: Optional[LeaveCategory] = None) -> float:
    if category == LeaveCategory.HALF_DAY:
        return HALF_DAY_LEAVE_DAYS
    return float(working_days(start, end, holidays))


def window_hours(start_time: Optional[str], end_time: Optional[str]) -> Optional[float]:
    """Length of an HH:mm window in hours; an end before the start crosses midnight."""
    start_m = parse_hhmm(start_time)
    end_m = parse_hhmm(end_time)
    if start_m is None or end_m is None:
        return None
    diff = end_m - start_m
    if diff < 0:
        diff += 24 * 60
    return diff / 60


def extra_time_leave_hours(
    leave: LeaveRequest,
    holidays: Iterable = (),
    *,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> float:
    """Hours of extra-time leave, optionally clipped to [start, end].

    Without a usable time window each working day counts as a flat 8.25 hours.
    That estimate is kept as-is for compatibility with existing balances.
    """
    first = max(leave.start_date, start) if start else leave.start_date
    last = min(leave.end_date, end) if end else leave.end_date
    days = working_days(first, last, holidays)

    per_day = window_hours(leave.start_time, leave.end_time)
    if per_day is None:
        log.warning(
            "leave %s has no valid time window (%r-%r); using %.2fh/day estimate",
            leave.request_id,
            leave.start_time,
            leave.end_time,
            EXTRA_TIME_FALLBACK_HOURS_PER_DAY,
        )
        per_day = EXTRA_TIME_FALLBACK_HOURS_PER_DAY
    return per_day * days


def overlaps(leave: LeaveRequest, start: date, end: date) -> bool:
    return leave.start_date <= end and leave.end_date >= start


def covers(leave: LeaveRequest, day: date) -> bool:
    return leave.start_date <= day <= leave.end_date


def holiday_status(holiday: CompanyHoliday, today: date) -> HolidayStatus:
    return HolidayStatus.PAST if holiday.holiday_date < today else HolidayStatus.UPCOMING
