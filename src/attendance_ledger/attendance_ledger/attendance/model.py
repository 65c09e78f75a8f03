from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import BreakType, TimeClassification


@dataclass(frozen=True)
class Break:
    """Thực thể miền (domain): một lần nghỉ trong ca."""

    start: datetime
    end: Optional[datetime] = None
    type: BreakType = BreakType.STANDARD
    reason: Optional[str] = None
    duration_seconds: Optional[int] = None

    @property
    def is_open(self) -> bool:
        return self.end is None


@dataclass(frozen=True)
class AttendanceRecord:
    """Thực thể miền (domain): Bản ghi chấm công.

    total_worked_seconds / low_time_flag / extra_time_flag are stored copies;
    the engine recomputes them from check_in, check_out and breaks.
    """

    attendance_id: int
    user_id: int
    work_date: date
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    breaks: tuple[Break, ...] = field(default_factory=tuple)
    notes: Optional[str] = None
    total_worked_seconds: int = 0
    low_time_flag: bool = False
    extra_time_flag: bool = False

    @property
    def open_break(self) -> Optional[Break]:
        return next((b for b in self.breaks if b.is_open), None)


@dataclass(frozen=True)
class TimeDecision:
    classification: TimeClassification
    shortage_seconds: int = 0
    surplus_seconds: int = 0


@dataclass(frozen=True)
class LiveTimer:
    """Running work/break counters while a session is still open."""

    worked_seconds: int
    break_seconds: int
    on_break: bool
    is_running: bool


@dataclass(frozen=True)
class DaySummary:
    """Read-model for one attendance row (dashboard/export)."""

    work_date: date
    status: str
    break_seconds: int
    net_worked_seconds: int
    break_display: str
    worked_display: str
    decision: Optional[TimeDecision] = None


@dataclass(frozen=True)
class MonthlyTimeSummary:
    year: int
    month: int
    days_present: int
    total_worked_seconds: int
    total_break_seconds: int
    total_low_time_seconds: int
    total_extra_time_seconds: int
    low_time_days: int
    extra_time_days: int
    inconsistent_dates: tuple[date, ...] = ()

    @property
    def final_difference_seconds(self) -> int:
        return self.total_extra_time_seconds - self.total_low_time_seconds
