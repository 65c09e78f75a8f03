from __future__ import annotations

from datetime import date, datetime

import pytest

from src.attendance_ledger.attendance_ledger.common.datetime_utils import parse_hhmm
from src.attendance_ledger.attendance_ledger.core.enums import HolidayStatus, LeaveCategory, RequestStatus
from src.attendance_ledger.attendance_ledger.leaves.calculator import (
    extra_time_leave_hours,
    holiday_status,
    leave_days,
    window_hours,
)
from src.attendance_ledger.attendance_ledger.leaves.model import CompanyHoliday, LeaveRequest


def _extra_leave(start: date, end: date, start_time=None, end_time=None) -> LeaveRequest:
    return LeaveRequest(
        request_id=9,
        user_id=1,
        start_date=start,
        end_date=end,
        category=LeaveCategory.EXTRA_TIME,
        reason="errand",
        status=RequestStatus.APPROVED,
        created_at=datetime(2024, 6, 1),
        start_time=start_time,
        end_time=end_time,
    )


def test_week_without_sunday():
    # Mon 2024-06-03 .. Sun 2024-06-09
    assert leave_days(date(2024, 6, 3), date(2024, 6, 9)) == 6


def test_holidays_are_excluded():
    holidays = [CompanyHoliday(date(2024, 6, 5), "Founders day")]
    assert leave_days(date(2024, 6, 3), date(2024, 6, 9), holidays) == 5
    assert leave_days(date(2024, 6, 3), date(2024, 6, 9), [date(2024, 6, 5), date(2024, 6, 9)]) == 5


def test_reversed_range_is_zero():
    assert leave_days(date(2024, 6, 9), date(2024, 6, 3)) == 0


def test_half_day_is_always_half():
    assert leave_days(date(2024, 6, 3), date(2024, 6, 3), category=LeaveCategory.HALF_DAY) == 0.5
    assert leave_days(date(2024, 6, 3), date(2024, 6, 7), category=LeaveCategory.HALF_DAY) == 0.5


def test_holiday_order_does_not_matter():
    hs = [date(2024, 6, 4), date(2024, 6, 6)]
    assert leave_days(date(2024, 6, 3), date(2024, 6, 30), hs) == leave_days(
        date(2024, 6, 3), date(2024, 6, 30), list(reversed(hs))
    )


def test_extending_the_range_never_decreases_days():
    start = date(2024, 6, 3)
    previous = 0.0
    for day in range(3, 31):
        current = leave_days(start, date(2024, 6, day))
        assert current >= previous
        previous = current


@pytest.mark.parametrize(
    "value, expected",
    [("09:30", 570), ("00:00", 0), ("23:59", 1439), ("24:00", None), ("9:75", None), ("", None), (None, None), ("ab:cd", None)],
)
def test_parse_hhmm(value, expected):
    assert parse_hhmm(value) == expected


def test_window_wraps_past_midnight():
    assert window_hours("22:00", "02:00") == 4
    assert window_hours("10:00", "14:30") == 4.5
    assert window_hours("10:00", None) is None


def test_extra_time_hours_use_window_times_working_days():
    leave = _extra_leave(date(2024, 6, 3), date(2024, 6, 4), "10:00", "14:30")
    assert extra_time_leave_hours(leave) == 9.0

    overnight = _extra_leave(date(2024, 6, 3), date(2024, 6, 3), "22:00", "02:00")
    assert extra_time_leave_hours(overnight) == 4.0


def test_extra_time_hours_fall_back_to_flat_day(caplog):
    leave = _extra_leave(date(2024, 6, 3), date(2024, 6, 4))
    with caplog.at_level("WARNING"):
        assert extra_time_leave_hours(leave) == pytest.approx(16.5)
    assert "estimate" in caplog.text


def test_extra_time_hours_clipped_to_window():
    # Fri 28, Sat 29, Sun 30 June fall inside the window; Sunday is not counted.
    leave = _extra_leave(date(2024, 6, 28), date(2024, 7, 2))
    hours = extra_time_leave_hours(leave, start=date(2024, 6, 1), end=date(2024, 6, 30))
    assert hours == pytest.approx(16.5)


def test_holiday_status():
    h = CompanyHoliday(date(2024, 6, 5), "Founders day")
    assert holiday_status(h, date(2024, 6, 6)) == HolidayStatus.PAST
    assert holiday_status(h, date(2024, 6, 5)) == HolidayStatus.UPCOMING
