from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import MonthlyBalanceSnapshot
from .repository import SnapshotRepository


class MySQLSnapshotRepository(SnapshotRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, *, user_id: int, year: int, month: int) -> Optional[MonthlyBalanceSnapshot]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, period_year, period_month,
                       total_low_time_seconds, total_extra_time_seconds,
                       extra_time_leave_hours_taken, remaining_extra_time_leave_hours,
                       carryover_extra_time_leave_seconds, carryover_low_time_seconds,
                       used_paid_leave_days, available_paid_leave_days, closed_at
                FROM monthly_balance_snapshots
                WHERE user_id=%s AND period_year=%s AND period_month=%s
                """,
                (int(user_id), int(year), int(month)),
            )
            row = fetchone(cur)
            if not row:
                return None
            return MonthlyBalanceSnapshot(
                user_id=int(row["user_id"]),
                year=int(row["period_year"]),
                month=int(row["period_month"]),
                total_low_time_seconds=int(row["total_low_time_seconds"]),
                total_extra_time_seconds=int(row["total_extra_time_seconds"]),
                extra_time_leave_hours_taken=float(row["extra_time_leave_hours_taken"]),
                remaining_extra_time_leave_hours=float(row["remaining_extra_time_leave_hours"]),
                carryover_extra_time_leave_seconds=int(row["carryover_extra_time_leave_seconds"]),
                carryover_low_time_seconds=int(row["carryover_low_time_seconds"]),
                used_paid_leave_days=float(row["used_paid_leave_days"]),
                available_paid_leave_days=float(row["available_paid_leave_days"]),
                closed_at=row.get("closed_at"),
            )

    def upsert(self, snapshot: MonthlyBalanceSnapshot) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO monthly_balance_snapshots(
                    user_id, period_year, period_month,
                    total_low_time_seconds, total_extra_time_seconds,
                    extra_time_leave_hours_taken, remaining_extra_time_leave_hours,
                    carryover_extra_time_leave_seconds, carryover_low_time_seconds,
                    used_paid_leave_days, available_paid_leave_days, closed_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    total_low_time_seconds=VALUES(total_low_time_seconds),
                    total_extra_time_seconds=VALUES(total_extra_time_seconds),
                    extra_time_leave_hours_taken=VALUES(extra_time_leave_hours_taken),
                    remaining_extra_time_leave_hours=VALUES(remaining_extra_time_leave_hours),
                    carryover_extra_time_leave_seconds=VALUES(carryover_extra_time_leave_seconds),
                    carryover_low_time_seconds=VALUES(carryover_low_time_seconds),
                    used_paid_leave_days=VALUES(used_paid_leave_days),
                    available_paid_leave_days=VALUES(available_paid_leave_days),
                    closed_at=VALUES(closed_at)
                """,
                (
                    int(snapshot.user_id),
                    int(snapshot.year),
                    int(snapshot.month),
                    int(snapshot.total_low_time_seconds),
                    int(snapshot.total_extra_time_seconds),
                    snapshot.extra_time_leave_hours_taken,
                    snapshot.remaining_extra_time_leave_hours,
                    int(snapshot.carryover_extra_time_leave_seconds),
                    int(snapshot.carryover_low_time_seconds),
                    snapshot.used_paid_leave_days,
                    snapshot.available_paid_leave_days,
                    snapshot.closed_at,
                ),
            )
            return cur.rowcount > 0
