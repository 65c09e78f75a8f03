from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import HalfDayChargeType, LeaveCategory, RequestStatus
from .model import CompanyHoliday, LeaveRequest


class LeaveRepository(Protocol):
    def create_leave(
        self,
        *,
        user_id: int,
        start_date: date,
        end_date: date,
        category: LeaveCategory,
        reason: str,
        created_at: datetime,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
        half_day_charge_type: Optional[HalfDayChargeType] = None,
    ) -> int:
        raise NotImplementedError

    def get_leave(self, *, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_for_user(self, *, user_id: int, status: Optional[RequestStatus] = None) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def decide_leave(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        hr_comment: Optional[str] = None,
    ) -> bool:
        raise NotImplementedError


class HolidayRepository(Protocol):
    def list_between(self, *, start: date, end: date) -> Sequence[CompanyHoliday]:
        raise NotImplementedError
