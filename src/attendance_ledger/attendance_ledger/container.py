from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .balances.mysql_snapshot_repository import MySQLSnapshotRepository
from .balances.repository import SnapshotRepository
from .balances.service import BalanceService
from .database.connection import DBConfig, DatabaseConnection
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService


@dataclass(frozen=True)
class Container:
    """Wiring for the HTTP layer and the host application.

    The snapshot ledger is stored in MySQL. Attendance and leave storage
    belongs to the host application: it passes its repositories in and gets
    AttendanceService / LeaveService back. Without them those services are None.
    """

    conn: DatabaseConnection

    snapshots_repo: SnapshotRepository

    balance_service: BalanceService

    attendance_service: Optional[AttendanceService] = None

    leave_service: Optional[LeaveService] = None


def build_container(
    *,
    db_config: dict,
    snapshots_repo: SnapshotRepository | None = None,
    attendance_repo: AttendanceRepository | None = None,
    leaves_repo: LeaveRepository | None = None,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_settings(db_config))

    snapshots_repo = snapshots_repo or MySQLSnapshotRepository(conn)
    return Container(
        conn=conn,
        snapshots_repo=snapshots_repo,
        balance_service=BalanceService(snapshots_repo),
        attendance_service=AttendanceService(attendance_repo) if attendance_repo is not None else None,
        leave_service=LeaveService(leaves_repo) if leaves_repo is not None else None,
    )
