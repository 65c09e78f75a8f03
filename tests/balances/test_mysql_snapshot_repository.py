from __future__ import annotations

from datetime import datetime

from src.attendance_ledger.attendance_ledger.balances.model import MonthlyBalanceSnapshot
from src.attendance_ledger.attendance_ledger.balances.mysql_snapshot_repository import MySQLSnapshotRepository

COLUMNS = (
    "user_id",
    "period_year",
    "period_month",
    "total_low_time_seconds",
    "total_extra_time_seconds",
    "extra_time_leave_hours_taken",
    "remaining_extra_time_leave_hours",
    "carryover_extra_time_leave_seconds",
    "carryover_low_time_seconds",
    "used_paid_leave_days",
    "available_paid_leave_days",
    "closed_at",
)


class FakeTable:
    """Just enough of a MySQL table keyed by (user, year, month)."""

    def __init__(self):
        self.rows: dict[tuple, dict] = {}
        self.commits = 0


class FakeCursor:
    def __init__(self, table: FakeTable):
        self._table = table
        self._result = None
        self.rowcount = 0

    def execute(self, sql: str, params=()):
        if sql.strip().upper().startswith("INSERT"):
            row = dict(zip(COLUMNS, params))
            self._table.rows[params[:3]] = row
            self.rowcount = 1
        else:
            self._result = self._table.rows.get(tuple(params))

    def fetchone(self):
        return self._result

    def close(self):
        pass


class FakeConnection:
    def __init__(self, table: FakeTable):
        self._table = table

    def cursor(self, dictionary=False):
        return FakeCursor(self._table)

    def commit(self):
        self._table.commits += 1

    def rollback(self):
        pass

    def close(self):
        pass


class FakeConnectionFactory:
    def __init__(self):
        self.table = FakeTable()

    def connect(self):
        return FakeConnection(self.table)


def test_snapshot_round_trip_keeps_carryover_seconds():
    factory = FakeConnectionFactory()
    repo = MySQLSnapshotRepository(factory)
    snapshot = MonthlyBalanceSnapshot(
        user_id=3,
        year=2024,
        month=6,
        total_low_time_seconds=0,
        total_extra_time_seconds=0,
        extra_time_leave_hours_taken=0.33,
        remaining_extra_time_leave_hours=0.33,
        carryover_extra_time_leave_seconds=1200,
        carryover_low_time_seconds=45,
        used_paid_leave_days=1.5,
        available_paid_leave_days=10.5,
        closed_at=datetime(2024, 6, 30, 18, 0),
    )

    assert repo.upsert(snapshot) is True
    assert factory.table.commits == 1

    loaded = repo.get(user_id=3, year=2024, month=6)
    assert loaded == snapshot
    assert loaded.carryover_baseline_seconds == 1245
    assert repo.get(user_id=3, year=2024, month=7) is None
