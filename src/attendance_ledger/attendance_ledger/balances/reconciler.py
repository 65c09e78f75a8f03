"""Leave-balance reconciliation.

Paid leave is counted in days against the employee's allocation. Extra-time
leave is counted in hours and offset by the month's net worked surplus; what
is left at month end carries into the next month as low time.
"""
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..attendance.engine import summarize_month
from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import as_date, is_last_day_of_month, month_bounds
from ..core.constants import (
    EXTRA_TIME_LEAVE_MARKER,
    HALF_DAY_EXTRA_TIME_HOURS,
    HALF_DAY_LEAVE_DAYS,
    PAID_LEAVE_MARKER,
)
from ..core.enums import HalfDayChargeType, LeaveCategory, RequestStatus
from ..core.exceptions import InsufficientBalanceError
from ..leaves.calculator import extra_time_leave_hours, leave_days, overlaps
from ..leaves.model import LeaveRequest
from ..users.model import Employee
from .model import EmployeeBalance, PaidLeaveBalance

log = logging.getLogger(__name__)


def half_day_charge_type(leave: LeaveRequest) -> Optional[HalfDayChargeType]:
    """Balance a half-day leave draws from.

    Older records carry the choice only as a marker inside the reason text.
    """
    if leave.category != LeaveCategory.HALF_DAY:
        return None
    if leave.half_day_charge_type is not None:
        return leave.half_day_charge_type
    reason = leave.reason or ""
    if PAID_LEAVE_MARKER in reason:
        return HalfDayChargeType.PAID
    if EXTRA_TIME_LEAVE_MARKER in reason:
        return HalfDayChargeType.EXTRA_TIME
    return None


def _approved(leaves: Iterable[LeaveRequest]) -> list[LeaveRequest]:
    return [lv for lv in leaves if lv.status == RequestStatus.APPROVED]


def used_paid_leave_days(leaves: Iterable[LeaveRequest], holidays: Iterable = ()) -> float:
    holidays = tuple(holidays)
    used = 0.0
    for lv in _approved(leaves):
        if lv.category == LeaveCategory.PAID:
            used += leave_days(lv.start_date, lv.end_date, holidays, lv.category)
        elif half_day_charge_type(lv) == HalfDayChargeType.PAID:
            used += HALF_DAY_LEAVE_DAYS
    return used


def paid_leave_balance(leaves: Iterable[LeaveRequest], allocation: Optional[int], holidays: Iterable = ()) -> PaidLeaveBalance:
    alloc = int(allocation or 0)
    used = used_paid_leave_days(leaves, holidays)
    return PaidLeaveBalance(allocation=alloc, used_days=used, available_days=alloc - used)


def requested_paid_days(leave: LeaveRequest, holidays: Iterable = ()) -> float:
    """Paid-leave days a (not yet approved) request would consume."""
    if leave.category == LeaveCategory.PAID:
        return leave_days(leave.start_date, leave.end_date, holidays, leave.category)
    if half_day_charge_type(leave) == HalfDayChargeType.PAID:
        return HALF_DAY_LEAVE_DAYS
    return 0.0


def ensure_paid_leave_available(requested_days: float, balance: PaidLeaveBalance) -> None:
    if requested_days <= 0:
        return
    if balance.available_days < requested_days:
        raise InsufficientBalanceError(
            f"Requested {requested_days:g} paid leave day(s) but only {balance.available_days:g} available"
        )


def extra_time_leave_hours_taken(
    leaves: Iterable[LeaveRequest],
    holidays: Iterable = (),
    *,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> float:
    holidays = tuple(holidays)
    hours = 0.0
    for lv in _approved(leaves):
        if start and end and not overlaps(lv, start, end):
            continue
        if lv.category == LeaveCategory.EXTRA_TIME:
            hours += extra_time_leave_hours(lv, holidays, start=start, end=end)
        elif half_day_charge_type(lv) == HalfDayChargeType.EXTRA_TIME:
            hours += HALF_DAY_EXTRA_TIME_HOURS
    return hours


def extra_time_worked_hours(total_extra_seconds: int, total_low_seconds: int) -> float:
    return (total_extra_seconds - total_low_seconds) / 3600


def remaining_extra_time_leave_hours(taken_hours: float, total_extra_seconds: int, total_low_seconds: int) -> float:
    worked = extra_time_worked_hours(total_extra_seconds, total_low_seconds)
    return max(0.0, taken_hours - max(0.0, worked))


def reconcile(
    employee: Employee,
    leaves: Sequence[LeaveRequest],
    records: Sequence[AttendanceRecord],
    holidays: Iterable,
    now: datetime,
    *,
    prior_carryover_low_time_seconds: int = 0,
) -> EmployeeBalance:
    """Balance for the month containing ``now``.

    Carryover figures are only produced when ``now`` falls on the last day of
    its month; on any other day they are zero.
    """
    today = as_date(now)
    first, last = month_bounds(today.year, today.month)
    holidays = tuple(holidays)

    mine = [lv for lv in leaves if lv.user_id == employee.user_id]
    approved = _approved(mine)
    own_records = [r for r in records if r.user_id == employee.user_id]

    paid = paid_leave_balance(approved, employee.paid_leave_allocation, holidays)
    summary = summarize_month(
        own_records,
        approved,
        year=today.year,
        month=today.month,
        carryover_low_time_seconds=prior_carryover_low_time_seconds,
    )
    taken = extra_time_leave_hours_taken(approved, holidays, start=first, end=last)

    low = summary.total_low_time_seconds
    extra = summary.total_extra_time_seconds
    remaining = remaining_extra_time_leave_hours(taken, extra, low)

    month_end = is_last_day_of_month(today)
    carry_extra = remaining if month_end and remaining > 0 else 0.0
    net = extra - low
    carry_low = -net if month_end and net < 0 else 0

    if month_end and (carry_extra or carry_low):
        log.info(
            "user %s %04d-%02d carryover: extra-time leave %.2fh, low time %ss",
            employee.user_id,
            today.year,
            today.month,
            carry_extra,
            carry_low,
        )

    return EmployeeBalance(
        user_id=employee.user_id,
        year=today.year,
        month=today.month,
        paid_leave=paid,
        extra_time_leave_hours_taken=taken,
        total_low_time_seconds=low,
        total_extra_time_seconds=extra,
        extra_time_worked_hours=extra_time_worked_hours(extra, low),
        remaining_extra_time_leave_hours=remaining,
        carryover_extra_time_leave=carry_extra,
        carryover_low_time=carry_low,
        is_month_end=month_end,
        time_summary=summary,
    )
