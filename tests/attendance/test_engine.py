from __future__ import annotations

from datetime import date, datetime

import pytest

from src.attendance_ledger.attendance_ledger.attendance.engine import (
    break_seconds,
    classify,
    classify_record,
    live_timer,
    net_worked_seconds,
    summarize_day,
    summarize_month,
)
from src.attendance_ledger.attendance_ledger.attendance.model import AttendanceRecord, Break
from src.attendance_ledger.attendance_ledger.core.enums import BreakType, LeaveCategory, RequestStatus, TimeClassification
from src.attendance_ledger.attendance_ledger.leaves.model import LeaveRequest


def _record(day: date, check_in=None, check_out=None, breaks=(), rid=1) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=rid,
        user_id=7,
        work_date=day,
        check_in=check_in,
        check_out=check_out,
        breaks=tuple(breaks),
    )


def _leave(start: date, end: date, status=RequestStatus.APPROVED) -> LeaveRequest:
    return LeaveRequest(
        request_id=1,
        user_id=7,
        start_date=start,
        end_date=end,
        category=LeaveCategory.SICK,
        reason="flu",
        status=status,
        created_at=datetime(2024, 6, 1, 9, 0),
    )


@pytest.mark.parametrize(
    "seconds, expected, shortage, surplus",
    [
        (29699, TimeClassification.LOW, 1, 0),
        (29700, TimeClassification.NORMAL, 0, 0),
        (30600, TimeClassification.NORMAL, 0, 0),
        (30601, TimeClassification.EXTRA, 0, 1),
        (0, TimeClassification.LOW, 29700, 0),
    ],
)
def test_classify_boundaries(seconds, expected, shortage, surplus):
    decision = classify(seconds)
    assert decision.classification == expected
    assert decision.shortage_seconds == shortage
    assert decision.surplus_seconds == surplus


def test_net_worked_subtracts_completed_breaks():
    day = date(2024, 6, 3)
    rec = _record(
        day,
        datetime(2024, 6, 3, 9, 0),
        datetime(2024, 6, 3, 18, 0),
        [Break(start=datetime(2024, 6, 3, 13, 0), end=datetime(2024, 6, 3, 14, 0))],
    )
    assert break_seconds(rec.breaks) == 3600
    assert net_worked_seconds(rec) == 8 * 3600
    assert classify_record(rec).shortage_seconds == 900


def test_precomputed_break_duration_wins_over_timestamps():
    b = Break(start=datetime(2024, 6, 3, 13, 0), end=datetime(2024, 6, 3, 13, 15), duration_seconds=600)
    assert break_seconds([b]) == 600


def test_open_break_does_not_count_in_completed_total():
    b = Break(start=datetime(2024, 6, 3, 13, 0))
    assert break_seconds([b]) == 0


def test_open_break_ignores_stale_duration():
    b = Break(start=datetime(2024, 6, 3, 12, 0), duration_seconds=600)
    assert break_seconds([b]) == 0

    rec = _record(date(2024, 6, 3), datetime(2024, 6, 3, 9, 0), breaks=[b])
    timer = live_timer(rec, datetime(2024, 6, 3, 12, 30))
    assert timer.break_seconds == 1800
    assert timer.worked_seconds == 3 * 3600


def test_checkout_before_checkin_clamps_to_zero():
    rec = _record(date(2024, 6, 3), datetime(2024, 6, 3, 18, 0), datetime(2024, 6, 3, 9, 0))
    assert net_worked_seconds(rec) == 0
    assert classify_record(rec).classification == TimeClassification.LOW


def test_incomplete_session_has_no_classification():
    rec = _record(date(2024, 6, 3), datetime(2024, 6, 3, 9, 0))
    assert net_worked_seconds(rec) == 0
    assert classify_record(rec) is None


def test_live_timer_excludes_running_break_from_work():
    rec = _record(
        date(2024, 6, 3),
        datetime(2024, 6, 3, 9, 0),
        breaks=[
            Break(start=datetime(2024, 6, 3, 10, 0), end=datetime(2024, 6, 3, 10, 15)),
            Break(start=datetime(2024, 6, 3, 12, 0), type=BreakType.EXTRA, reason="call"),
        ],
    )
    timer = live_timer(rec, datetime(2024, 6, 3, 12, 30))

    assert timer.is_running
    assert timer.on_break
    assert timer.break_seconds == 900 + 1800
    assert timer.worked_seconds == 12600 - 900 - 1800


def test_live_timer_is_idempotent_for_same_now():
    rec = _record(date(2024, 6, 3), datetime(2024, 6, 3, 9, 0))
    now = datetime(2024, 6, 3, 11, 0)
    assert live_timer(rec, now) == live_timer(rec, now)


def test_live_timer_after_checkout_uses_completed_figures():
    rec = _record(date(2024, 6, 3), datetime(2024, 6, 3, 9, 0), datetime(2024, 6, 3, 17, 0))
    timer = live_timer(rec, datetime(2024, 6, 3, 23, 0))
    assert not timer.is_running
    assert timer.worked_seconds == 8 * 3600


def test_summarize_day_labels():
    day = date(2024, 6, 3)
    now = datetime(2024, 6, 3, 12, 0)

    assert summarize_day(_record(day), now).status == "Absent"
    assert summarize_day(_record(day), now).worked_display == "-"
    assert summarize_day(_record(day, datetime(2024, 6, 3, 9, 0)), now).status == "In Progress"

    done = summarize_day(_record(day, datetime(2024, 6, 3, 9, 0), datetime(2024, 6, 3, 17, 30)), now)
    assert done.status == "Normal"
    assert done.worked_display == "08:30:00"
    assert done.break_display == "-"


def test_summarize_month_excludes_leave_days_and_seeds_carryover():
    records = [
        _record(date(2024, 6, 3), datetime(2024, 6, 3, 9, 0), datetime(2024, 6, 3, 18, 0), rid=1),
        _record(date(2024, 6, 4), datetime(2024, 6, 4, 9, 0), datetime(2024, 6, 4, 17, 0), rid=2),
        _record(date(2024, 6, 5), datetime(2024, 6, 5, 9, 0), datetime(2024, 6, 5, 18, 0), rid=3),
        _record(date(2024, 6, 6), datetime(2024, 6, 6, 9, 0), rid=4),
        _record(date(2024, 7, 1), datetime(2024, 7, 1, 9, 0), datetime(2024, 7, 1, 12, 0), rid=5),
    ]
    leaves = [
        _leave(date(2024, 6, 5), date(2024, 6, 5)),
        _leave(date(2024, 6, 3), date(2024, 6, 3), status=RequestStatus.REJECTED),
    ]

    summary = summarize_month(records, leaves, year=2024, month=6, carryover_low_time_seconds=100)

    assert summary.days_present == 2
    assert summary.total_extra_time_seconds == 1800
    assert summary.total_low_time_seconds == 900 + 100
    assert summary.low_time_days == 1
    assert summary.extra_time_days == 1
    assert summary.total_worked_seconds == 32400 + 28800
    assert summary.final_difference_seconds == 800
    assert summary.inconsistent_dates == (date(2024, 6, 5),)
