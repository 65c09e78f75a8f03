from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import as_date, is_last_day_of_month, previous_month
from ..core.exceptions import InvalidStateError
from ..leaves.model import LeaveRequest
from ..users.model import Employee
from .model import EmployeeBalance, MonthlyBalanceSnapshot
from .reconciler import reconcile
from .repository import SnapshotRepository

log = logging.getLogger(__name__)


class BalanceService:
    """Use case: monthly balances anchored on the snapshot ledger."""

    def __init__(self, snapshots: SnapshotRepository):
        self._snapshots = snapshots

    def prior_carryover_seconds(self, *, user_id: int, year: int, month: int) -> int:
        py, pm = previous_month(year, month)
        prior: Optional[MonthlyBalanceSnapshot] = self._snapshots.get(user_id=user_id, year=py, month=pm)
        return prior.carryover_baseline_seconds if prior else 0

    def current_balance(
        self,
        *,
        employee: Employee,
        leaves: Sequence[LeaveRequest],
        records: Sequence[AttendanceRecord],
        holidays: Iterable,
        now: datetime,
    ) -> EmployeeBalance:
        today = as_date(now)
        baseline = self.prior_carryover_seconds(user_id=employee.user_id, year=today.year, month=today.month)
        return reconcile(
            employee,
            leaves,
            records,
            holidays,
            now,
            prior_carryover_low_time_seconds=baseline,
        )

    def close_month(
        self,
        *,
        employee: Employee,
        leaves: Sequence[LeaveRequest],
        records: Sequence[AttendanceRecord],
        holidays: Iterable,
        now: datetime,
    ) -> MonthlyBalanceSnapshot:
        """Write this month's outcome to the ledger. Only allowed on the month's last day."""
        if not is_last_day_of_month(as_date(now)):
            raise InvalidStateError("A month can only be closed on its last calendar day")

        balance = self.current_balance(employee=employee, leaves=leaves, records=records, holidays=holidays, now=now)
        snapshot = MonthlyBalanceSnapshot(
            user_id=balance.user_id,
            year=balance.year,
            month=balance.month,
            total_low_time_seconds=balance.total_low_time_seconds,
            total_extra_time_seconds=balance.total_extra_time_seconds,
            extra_time_leave_hours_taken=balance.extra_time_leave_hours_taken,
            remaining_extra_time_leave_hours=balance.remaining_extra_time_leave_hours,
            carryover_extra_time_leave_seconds=int(round(balance.carryover_extra_time_leave * 3600)),
            carryover_low_time_seconds=balance.carryover_low_time,
            used_paid_leave_days=balance.paid_leave.used_days,
            available_paid_leave_days=balance.paid_leave.available_days,
            closed_at=now,
        )
        self._snapshots.upsert(snapshot)
        log.info("closed %04d-%02d for user %s", snapshot.year, snapshot.month, snapshot.user_id)
        return snapshot
