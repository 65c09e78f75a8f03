from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from ..common.validators import require_non_empty
from ..core.enums import BreakType, RequestStatus
from ..core.exceptions import BreakLimitError, InvalidRangeError, InvalidStateError
from ..leaves.calculator import covers
from ..leaves.model import LeaveRequest
from .engine import classify, net_worked_seconds
from .model import AttendanceRecord, Break
from .repository import AttendanceRepository

log = logging.getLogger(__name__)

LEAVE_OVERLAP_NOTE = "Approved leave overlaps this date; excluded from low/extra totals"


def with_totals(record: AttendanceRecord) -> AttendanceRecord:
    """Refresh the stored worked-seconds and flags from the timestamps."""
    if record.check_in is None or record.check_out is None:
        return replace(record, total_worked_seconds=0, low_time_flag=False, extra_time_flag=False)
    net = net_worked_seconds(record)
    decision = classify(net)
    return replace(
        record,
        total_worked_seconds=net,
        low_time_flag=decision.shortage_seconds > 0,
        extra_time_flag=decision.surplus_seconds > 0,
    )


def _append_note(notes: Optional[str], extra: str) -> str:
    if notes and extra in notes:
        return notes
    return f"{notes.strip()} | {extra}" if notes and notes.strip() else extra


class AttendanceService:
    """Use case: clock in/out, breaks and HR corrections for one user's day.

    Every precondition is checked before the repository is written to.
    """

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def _require_open_session(self, user_id: int, today: date) -> AttendanceRecord:
        record = self._attendance.get_for_user_and_date(user_id, today)
        if not record or record.check_in is None:
            raise InvalidStateError("You have not clocked in today")
        if record.check_out is not None:
            raise InvalidStateError("You have already clocked out today")
        return record

    def clock_in(self, user_id: int, *, now: datetime) -> AttendanceRecord:
        today = now.date()
        existing = self._attendance.get_for_user_and_date(user_id, today)
        if existing and existing.check_in is not None:
            raise InvalidStateError("You have already clocked in today")

        if existing:
            record = replace(existing, check_in=now)
            self._attendance.save(record)
        else:
            record = AttendanceRecord(attendance_id=0, user_id=user_id, work_date=today, check_in=now)
            record = replace(record, attendance_id=self._attendance.create(record))
        log.info("user %s clocked in at %s", user_id, now.isoformat())
        return record

    def start_break(
        self,
        user_id: int,
        *,
        now: datetime,
        break_type: BreakType = BreakType.STANDARD,
        reason: Optional[str] = None,
    ) -> AttendanceRecord:
        record = self._require_open_session(user_id, now.date())

        if record.open_break is not None:
            raise InvalidStateError("A break is already in progress")
        if break_type == BreakType.STANDARD:
            if any(b.type == BreakType.STANDARD for b in record.breaks):
                raise BreakLimitError("The standard break has already been taken today")
            reason = (reason or "").strip() or None
        else:
            reason = require_non_empty(reason, "Reason for extra break")

        updated = replace(record, breaks=record.breaks + (Break(start=now, type=break_type, reason=reason),))
        self._attendance.save(updated)
        log.info("user %s started %s break", user_id, break_type.value)
        return updated

    def end_break(self, user_id: int, *, now: datetime) -> AttendanceRecord:
        record = self._require_open_session(user_id, now.date())
        if record.open_break is None:
            raise InvalidStateError("No break is in progress")

        updated = replace(record, breaks=self._close_breaks(record.breaks, now))
        self._attendance.save(updated)
        return updated

    def clock_out(self, user_id: int, *, now: datetime) -> AttendanceRecord:
        record = self._require_open_session(user_id, now.date())
        breaks = record.breaks
        if record.open_break is not None:
            log.info("user %s clocked out during a break; closing it at checkout", user_id)
            breaks = self._close_breaks(breaks, now)

        updated = with_totals(replace(record, check_out=now, breaks=breaks))
        self._attendance.save(updated)
        log.info("user %s clocked out, worked %ss", user_id, updated.total_worked_seconds)
        return updated

    def correct_record(
        self,
        *,
        user_id: int,
        work_date: date,
        check_in: Optional[datetime],
        check_out: Optional[datetime],
        break_minutes: Optional[int] = None,
        notes: Optional[str] = None,
        leaves: Sequence[LeaveRequest] = (),
    ) -> AttendanceRecord:
        """HR correction. A flat break_minutes replaces the recorded breaks."""
        if check_in and check_out and check_out < check_in:
            raise InvalidRangeError("Check-out cannot be earlier than check-in")
        if break_minutes is not None and int(break_minutes) < 0:
            raise InvalidRangeError("Break duration cannot be negative")

        existing = self._attendance.get_for_user_and_date(user_id, work_date)
        base = existing or AttendanceRecord(attendance_id=0, user_id=user_id, work_date=work_date)

        breaks = base.breaks
        if break_minutes is not None:
            start = check_in or datetime.combine(work_date, datetime.min.time())
            seconds = int(break_minutes) * 60
            breaks = (
                (Break(start=start, end=start + timedelta(seconds=seconds), type=BreakType.STANDARD, duration_seconds=seconds),)
                if seconds
                else ()
            )

        new_notes = notes if notes is not None else base.notes
        on_leave = any(lv.status == RequestStatus.APPROVED and covers(lv, work_date) for lv in leaves)
        if on_leave and check_in is not None:
            log.warning("correction for user %s on %s overlaps an approved leave", user_id, work_date)
            new_notes = _append_note(new_notes, LEAVE_OVERLAP_NOTE)

        updated = with_totals(replace(base, check_in=check_in, check_out=check_out, breaks=breaks, notes=new_notes))
        if existing:
            self._attendance.save(updated)
        else:
            updated = replace(updated, attendance_id=self._attendance.create(updated))
        log.info("attendance for user %s on %s corrected", user_id, work_date)
        return updated

    @staticmethod
    def _close_breaks(breaks: tuple[Break, ...], now: datetime) -> tuple[Break, ...]:
        return tuple(replace(b, end=now) if b.is_open else b for b in breaks)
