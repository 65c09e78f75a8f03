from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest

from src.attendance_ledger.attendance_ledger.attendance.model import AttendanceRecord
from src.attendance_ledger.attendance_ledger.attendance.service import LEAVE_OVERLAP_NOTE, AttendanceService
from src.attendance_ledger.attendance_ledger.core.enums import BreakType, LeaveCategory, RequestStatus
from src.attendance_ledger.attendance_ledger.core.exceptions import (
    BreakLimitError,
    InvalidRangeError,
    InvalidStateError,
    MissingRequiredFieldError,
)
from src.attendance_ledger.attendance_ledger.leaves.model import LeaveRequest


class InMemoryAttendance:
    def __init__(self):
        self._by_user_date: dict[tuple[int, date], AttendanceRecord] = {}
        self._id = 0
        self.writes = 0

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self._by_user_date.get((user_id, work_date))

    def list_for_user_between(self, user_id: int, start: date, end: date):
        return [r for (uid, d), r in self._by_user_date.items() if uid == user_id and start <= d <= end]

    def create(self, record: AttendanceRecord) -> int:
        self._id += 1
        self.writes += 1
        self._by_user_date[(record.user_id, record.work_date)] = replace(record, attendance_id=self._id)
        return self._id

    def save(self, record: AttendanceRecord) -> bool:
        self.writes += 1
        self._by_user_date[(record.user_id, record.work_date)] = record
        return True


def _at(hour: int, minute: int = 0) -> datetime:
    return datetime(2024, 6, 3, hour, minute)


def test_clock_in_twice_is_rejected():
    repo = InMemoryAttendance()
    svc = AttendanceService(repo)

    rec = svc.clock_in(1, now=_at(9))
    assert rec.attendance_id == 1
    assert rec.check_in == _at(9)

    with pytest.raises(InvalidStateError):
        svc.clock_in(1, now=_at(9, 5))
    assert repo.writes == 1


def test_break_without_clock_in_is_rejected():
    svc = AttendanceService(InMemoryAttendance())
    with pytest.raises(InvalidStateError):
        svc.start_break(1, now=_at(10))
    with pytest.raises(InvalidStateError):
        svc.clock_out(1, now=_at(18))


def test_only_one_standard_break_per_day():
    repo = InMemoryAttendance()
    svc = AttendanceService(repo)
    svc.clock_in(1, now=_at(9))
    svc.start_break(1, now=_at(12))
    svc.end_break(1, now=_at(13))

    with pytest.raises(BreakLimitError):
        svc.start_break(1, now=_at(15))

    rec = svc.start_break(1, now=_at(15), break_type=BreakType.EXTRA, reason="doctor call")
    assert len(rec.breaks) == 2
    assert rec.breaks[-1].reason == "doctor call"


def test_break_limit_is_also_an_invalid_state():
    assert issubclass(BreakLimitError, InvalidStateError)


def test_extra_break_requires_reason():
    repo = InMemoryAttendance()
    svc = AttendanceService(repo)
    svc.clock_in(1, now=_at(9))
    writes = repo.writes

    with pytest.raises(MissingRequiredFieldError):
        svc.start_break(1, now=_at(11), break_type=BreakType.EXTRA, reason="   ")
    assert repo.writes == writes


def test_second_break_while_one_is_open():
    svc = AttendanceService(InMemoryAttendance())
    svc.clock_in(1, now=_at(9))
    svc.start_break(1, now=_at(12))

    with pytest.raises(InvalidStateError):
        svc.start_break(1, now=_at(12, 10), break_type=BreakType.EXTRA, reason="call")


def test_end_break_without_open_break():
    svc = AttendanceService(InMemoryAttendance())
    svc.clock_in(1, now=_at(9))
    with pytest.raises(InvalidStateError):
        svc.end_break(1, now=_at(10))


def test_clock_out_closes_open_break_and_stores_totals():
    repo = InMemoryAttendance()
    svc = AttendanceService(repo)
    svc.clock_in(1, now=_at(9))
    svc.start_break(1, now=_at(17))

    rec = svc.clock_out(1, now=_at(18))

    assert rec.open_break is None
    assert rec.breaks[0].end == _at(18)
    assert rec.total_worked_seconds == 8 * 3600
    assert rec.low_time_flag is True
    assert rec.extra_time_flag is False
    assert repo.get_for_user_and_date(1, date(2024, 6, 3)) == rec

    with pytest.raises(InvalidStateError):
        svc.clock_out(1, now=_at(18, 5))


def test_correction_rejects_checkout_before_checkin():
    repo = InMemoryAttendance()
    svc = AttendanceService(repo)
    with pytest.raises(InvalidRangeError):
        svc.correct_record(user_id=1, work_date=date(2024, 6, 3), check_in=_at(18), check_out=_at(9))
    with pytest.raises(InvalidRangeError):
        svc.correct_record(user_id=1, work_date=date(2024, 6, 3), check_in=_at(9), check_out=_at(18), break_minutes=-5)
    assert repo.writes == 0


def test_correction_replaces_breaks_and_flags_leave_overlap():
    repo = InMemoryAttendance()
    svc = AttendanceService(repo)
    leave = LeaveRequest(
        request_id=4,
        user_id=1,
        start_date=date(2024, 6, 3),
        end_date=date(2024, 6, 4),
        category=LeaveCategory.SICK,
        reason="flu",
        status=RequestStatus.APPROVED,
        created_at=datetime(2024, 6, 1),
    )

    rec = svc.correct_record(
        user_id=1,
        work_date=date(2024, 6, 3),
        check_in=_at(9),
        check_out=_at(19, 30),
        break_minutes=30,
        notes="forgot to clock out",
        leaves=[leave],
    )

    assert rec.total_worked_seconds == 10 * 3600
    assert rec.extra_time_flag is True
    assert rec.notes == f"forgot to clock out | {LEAVE_OVERLAP_NOTE}"
