from __future__ import annotations

from datetime import tzinfo
from typing import Optional

from ..common.datetime_utils import parse_date, parse_instant
from ..common.payload import as_int, as_optional_int, parse_enum, pick
from ..core.enums import BreakType
from .model import AttendanceRecord, Break, DaySummary, LiveTimer, MonthlyTimeSummary, TimeDecision


def break_from_dict(data: dict, tz: Optional[tzinfo] = None) -> Optional[Break]:
    start = parse_instant(pick(data, "start"), tz)
    if start is None:
        return None
    return Break(
        start=start,
        end=parse_instant(pick(data, "end"), tz),
        type=parse_enum(BreakType, pick(data, "type"), BreakType.STANDARD),
        reason=pick(data, "reason"),
        duration_seconds=as_optional_int(pick(data, "durationSeconds", "duration_seconds")),
    )


def record_from_dict(data: dict, tz: Optional[tzinfo] = None) -> Optional[AttendanceRecord]:
    """Build a record; None when neither a date nor a check-in can be read.

    Timestamps are normalised to ``tz`` when it is given.
    """
    check_in = parse_instant(pick(data, "checkIn", "check_in"), tz)
    work_date = parse_date(pick(data, "date", "workDate", "work_date")) or (check_in.date() if check_in else None)
    if work_date is None:
        return None

    breaks = tuple(b for b in (break_from_dict(x, tz) for x in pick(data, "breaks", default=[]) or []) if b)
    return AttendanceRecord(
        attendance_id=as_int(pick(data, "id", "attendanceId", "attendance_id")),
        user_id=as_int(pick(data, "userId", "user_id")),
        work_date=work_date,
        check_in=check_in,
        check_out=parse_instant(pick(data, "checkOut", "check_out"), tz),
        breaks=breaks,
        notes=pick(data, "notes"),
    )


def records_from_list(items, tz: Optional[tzinfo] = None) -> list[AttendanceRecord]:
    return [r for r in (record_from_dict(x, tz) for x in items or []) if r]


def decision_to_dict(decision: Optional[TimeDecision]) -> Optional[dict]:
    if decision is None:
        return None
    return {
        "classification": decision.classification.value,
        "shortage_seconds": decision.shortage_seconds,
        "surplus_seconds": decision.surplus_seconds,
    }


def live_timer_to_dict(timer: LiveTimer) -> dict:
    return {
        "worked_seconds": timer.worked_seconds,
        "break_seconds": timer.break_seconds,
        "on_break": timer.on_break,
        "is_running": timer.is_running,
    }


def day_summary_to_dict(summary: DaySummary) -> dict:
    return {
        "date": summary.work_date.isoformat(),
        "status": summary.status,
        "break_seconds": summary.break_seconds,
        "net_worked_seconds": summary.net_worked_seconds,
        "break": summary.break_display,
        "worked": summary.worked_display,
        "decision": decision_to_dict(summary.decision),
    }


def monthly_summary_to_dict(summary: MonthlyTimeSummary) -> dict:
    return {
        "year": summary.year,
        "month": summary.month,
        "days_present": summary.days_present,
        "total_worked_seconds": summary.total_worked_seconds,
        "total_break_seconds": summary.total_break_seconds,
        "total_low_time_seconds": summary.total_low_time_seconds,
        "total_extra_time_seconds": summary.total_extra_time_seconds,
        "low_time_days": summary.low_time_days,
        "extra_time_days": summary.extra_time_days,
        "final_difference_seconds": summary.final_difference_seconds,
        "inconsistent_dates": [d.isoformat() for d in summary.inconsistent_dates],
    }


def _iso(value) -> Optional[str]:
    return value.isoformat() if value else None


def break_to_dict(b: Break) -> dict:
    return {
        "start": _iso(b.start),
        "end": _iso(b.end),
        "type": b.type.value,
        "reason": b.reason,
        "duration_seconds": b.duration_seconds,
    }


def record_to_dict(record: AttendanceRecord) -> dict:
    return {
        "id": record.attendance_id,
        "user_id": record.user_id,
        "date": record.work_date.isoformat(),
        "check_in": _iso(record.check_in),
        "check_out": _iso(record.check_out),
        "breaks": [break_to_dict(b) for b in record.breaks],
        "notes": record.notes,
        "total_worked_seconds": record.total_worked_seconds,
        "low_time_flag": record.low_time_flag,
        "extra_time_flag": record.extra_time_flag,
    }
