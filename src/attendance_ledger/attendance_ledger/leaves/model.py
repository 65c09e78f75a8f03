from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import HalfDayChargeType, LeaveCategory, RequestStatus


@dataclass(frozen=True)
class LeaveRequest:
    """Thực thể miền (domain): Đơn xin nghỉ.

    start_time/end_time are "HH:mm" strings for half-day and extra-time leaves.
    """

    request_id: int
    user_id: int
    start_date: date
    end_date: date
    category: LeaveCategory
    reason: str
    status: RequestStatus
    created_at: datetime
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    half_day_charge_type: Optional[HalfDayChargeType] = None
    hr_comment: Optional[str] = None


@dataclass(frozen=True)
class CompanyHoliday:
    holiday_date: date
    description: str
