from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..attendance.model import MonthlyTimeSummary


@dataclass(frozen=True)
class PaidLeaveBalance:
    allocation: int
    used_days: float
    available_days: float


@dataclass(frozen=True)
class EmployeeBalance:
    """Derived per-user, per-month balance. Not persisted as-is."""

    user_id: int
    year: int
    month: int
    paid_leave: PaidLeaveBalance
    extra_time_leave_hours_taken: float
    total_low_time_seconds: int
    total_extra_time_seconds: int
    extra_time_worked_hours: float
    remaining_extra_time_leave_hours: float
    carryover_extra_time_leave: float
    carryover_low_time: int
    is_month_end: bool
    time_summary: MonthlyTimeSummary


@dataclass(frozen=True)
class MonthlyBalanceSnapshot:
    """Ledger row: the closed outcome of one user's month.

    The next month reads carryover_* from here as its low-time baseline.
    """

    user_id: int
    year: int
    month: int
    total_low_time_seconds: int
    total_extra_time_seconds: int
    extra_time_leave_hours_taken: float
    remaining_extra_time_leave_hours: float
    carryover_extra_time_leave_seconds: int
    carryover_low_time_seconds: int
    used_paid_leave_days: float
    available_paid_leave_days: float
    closed_at: Optional[datetime] = None

    @property
    def carryover_extra_time_leave_hours(self) -> float:
        return self.carryover_extra_time_leave_seconds / 3600

    @property
    def carryover_baseline_seconds(self) -> int:
        """Low-time seconds the following month starts with."""
        return int(self.carryover_extra_time_leave_seconds) + int(self.carryover_low_time_seconds)
