from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..common.datetime_utils import parse_date, parse_instant
from ..common.payload import as_int, parse_enum, pick
from ..core.enums import HalfDayChargeType, LeaveCategory, RequestStatus
from .model import CompanyHoliday, LeaveRequest


def leave_from_dict(data: dict) -> Optional[LeaveRequest]:
    start = parse_date(pick(data, "startDate", "start_date"))
    end = parse_date(pick(data, "endDate", "end_date")) or start
    if start is None:
        return None
    return LeaveRequest(
        request_id=as_int(pick(data, "id", "requestId", "request_id")),
        user_id=as_int(pick(data, "userId", "user_id")),
        start_date=start,
        end_date=end,
        category=parse_enum(LeaveCategory, pick(data, "category"), LeaveCategory.CASUAL),
        reason=str(pick(data, "reason", default="")),
        status=parse_enum(RequestStatus, pick(data, "status"), RequestStatus.PENDING),
        created_at=parse_instant(pick(data, "createdAt", "created_at")) or datetime.min,
        start_time=pick(data, "startTime", "start_time"),
        end_time=pick(data, "endTime", "end_time"),
        half_day_charge_type=parse_enum(HalfDayChargeType, pick(data, "halfDayChargeType", "half_day_charge_type")),
        hr_comment=pick(data, "hrComment", "hr_comment"),
    )


def leaves_from_list(items) -> list[LeaveRequest]:
    return [lv for lv in (leave_from_dict(x) for x in items or []) if lv]


def holidays_from_list(items) -> list[CompanyHoliday]:
    """Accepts {"date", "description"} objects or bare date strings."""
    out = []
    for item in items or []:
        if isinstance(item, dict):
            day = parse_date(pick(item, "date", "holidayDate", "holiday_date"))
            desc = str(pick(item, "description", default=""))
        else:
            day, desc = parse_date(item), ""
        if day:
            out.append(CompanyHoliday(holiday_date=day, description=desc))
    return out
