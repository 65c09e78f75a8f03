from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Storage boundary. Implementations serialise concurrent writers per (user, date)."""

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_user_between(self, user_id: int, start: date, end: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create(self, record: AttendanceRecord) -> int:
        raise NotImplementedError

    def save(self, record: AttendanceRecord) -> bool:
        """Replace the stored record with the same attendance_id."""

        raise NotImplementedError
