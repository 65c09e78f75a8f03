from __future__ import annotations

from typing import Optional, Protocol

from .model import MonthlyBalanceSnapshot


class SnapshotRepository(Protocol):
    def get(self, *, user_id: int, year: int, month: int) -> Optional[MonthlyBalanceSnapshot]:
        raise NotImplementedError

    def upsert(self, snapshot: MonthlyBalanceSnapshot) -> bool:
        """Insert or replace the row for (user_id, year, month) in one transaction."""

        raise NotImplementedError
