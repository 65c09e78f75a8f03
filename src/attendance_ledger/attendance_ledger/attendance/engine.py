"""Time accounting for attendance records.

Every function here is pure: the caller passes ``now`` explicitly, so the same
inputs always give the same answer. Dashboards, reports and the attendance
service all go through these functions instead of keeping their own copies of
the arithmetic.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import format_duration, month_bounds, seconds_between
from ..core.constants import EMPTY_DISPLAY
from ..core.enums import RequestStatus
from ..leaves.calculator import covers
from ..leaves.model import LeaveRequest
from .factory import ClassificationStrategyFactory
from .model import AttendanceRecord, Break, DaySummary, LiveTimer, MonthlyTimeSummary, TimeDecision

log = logging.getLogger(__name__)

_default_factory = ClassificationStrategyFactory()


def completed_break_seconds(b: Break) -> int:
    if b.end is None:
        return 0
    if b.duration_seconds:
        return max(0, int(b.duration_seconds))
    return seconds_between(b.start, b.end)


def break_seconds(breaks: Iterable[Break]) -> int:
    """Sum of completed breaks. An open break contributes nothing here."""
    return sum(completed_break_seconds(b) for b in breaks)


def net_worked_seconds(record: AttendanceRecord) -> int:
    """Authoritative worked time for a closed session: (out - in) - breaks, never negative."""
    if record.check_in is None or record.check_out is None:
        return 0
    session = seconds_between(record.check_in, record.check_out)
    return max(0, session - break_seconds(record.breaks))


def live_timer(record: AttendanceRecord, now: datetime) -> LiveTimer:
    """Work/break counters for presentation, recomputed on every tick."""
    if record.check_in is None:
        return LiveTimer(worked_seconds=0, break_seconds=0, on_break=False, is_running=False)

    if record.check_out is not None:
        return LiveTimer(
            worked_seconds=net_worked_seconds(record),
            break_seconds=break_seconds(record.breaks),
            on_break=False,
            is_running=False,
        )

    open_break = record.open_break
    done = break_seconds(record.breaks)
    running = seconds_between(open_break.start, now) if open_break else 0
    worked = seconds_between(record.check_in, now) - done - running
    return LiveTimer(
        worked_seconds=max(0, worked),
        break_seconds=done + running,
        on_break=open_break is not None,
        is_running=True,
    )


def classify(net_seconds: int, *, factory: Optional[ClassificationStrategyFactory] = None) -> TimeDecision:
    factory = factory or _default_factory
    strategy = factory.for_worked_seconds(int(net_seconds))
    return strategy.decide(net_seconds=int(net_seconds), min_normal=factory.min_normal, max_normal=factory.max_normal)


def classify_record(record: AttendanceRecord, *, factory: Optional[ClassificationStrategyFactory] = None) -> Optional[TimeDecision]:
    """None while the session is incomplete (no check-in or no check-out)."""
    if record.check_in is None or record.check_out is None:
        return None
    return classify(net_worked_seconds(record), factory=factory)


def summarize_day(record: AttendanceRecord, now: datetime) -> DaySummary:
    if record.check_in is None:
        return DaySummary(
            work_date=record.work_date,
            status="Absent",
            break_seconds=0,
            net_worked_seconds=0,
            break_display=EMPTY_DISPLAY,
            worked_display=EMPTY_DISPLAY,
        )

    if record.check_out is None:
        timer = live_timer(record, now)
        return DaySummary(
            work_date=record.work_date,
            status="In Progress",
            break_seconds=timer.break_seconds,
            net_worked_seconds=timer.worked_seconds,
            break_display=format_duration(timer.break_seconds) if timer.break_seconds else EMPTY_DISPLAY,
            worked_display=format_duration(timer.worked_seconds),
        )

    brk = break_seconds(record.breaks)
    net = net_worked_seconds(record)
    decision = classify(net)
    return DaySummary(
        work_date=record.work_date,
        status=decision.classification.value,
        break_seconds=brk,
        net_worked_seconds=net,
        break_display=format_duration(brk) if brk > 0 else EMPTY_DISPLAY,
        worked_display=format_duration(net) if net > 0 else EMPTY_DISPLAY,
        decision=decision,
    )


def summarize_month(
    records: Sequence[AttendanceRecord],
    leaves: Sequence[LeaveRequest],
    *,
    year: int,
    month: int,
    carryover_low_time_seconds: int = 0,
    factory: Optional[ClassificationStrategyFactory] = None,
) -> MonthlyTimeSummary:
    """Aggregate low/extra time for one month.

    Days covered by an approved leave are left out of the low/extra totals and
    listed in ``inconsistent_dates`` when they also carry a completed session.
    ``carryover_low_time_seconds`` seeds the low-time total with last month's debt.
    """
    first, last = month_bounds(year, month)
    approved = [lv for lv in leaves if lv.status == RequestStatus.APPROVED]

    days_present = 0
    total_worked = 0
    total_break = 0
    total_low = max(0, int(carryover_low_time_seconds))
    total_extra = 0
    low_days = 0
    extra_days = 0
    inconsistent = []

    for r in sorted(records, key=lambda x: x.work_date):
        if not (first <= r.work_date <= last):
            continue
        if r.check_in is None or r.check_out is None:
            continue

        if any(covers(lv, r.work_date) for lv in approved):
            log.warning(
                "attendance %s on %s overlaps an approved leave; excluded from monthly totals",
                r.attendance_id,
                r.work_date,
            )
            inconsistent.append(r.work_date)
            continue

        days_present += 1
        net = net_worked_seconds(r)
        total_worked += net
        total_break += break_seconds(r.breaks)

        decision = classify(net, factory=factory)
        if decision.shortage_seconds:
            low_days += 1
            total_low += decision.shortage_seconds
        elif decision.surplus_seconds:
            extra_days += 1
            total_extra += decision.surplus_seconds

    return MonthlyTimeSummary(
        year=year,
        month=month,
        days_present=days_present,
        total_worked_seconds=total_worked,
        total_break_seconds=total_break,
        total_low_time_seconds=total_low,
        total_extra_time_seconds=total_extra,
        low_time_days=low_days,
        extra_time_days=extra_days,
        inconsistent_dates=tuple(inconsistent),
    )
