from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional

from ..balances.reconciler import ensure_paid_leave_available, paid_leave_balance, requested_paid_days
from ..common.datetime_utils import parse_hhmm
from ..common.validators import require_date_order, require_hhmm, require_non_empty
from ..core.enums import HalfDayChargeType, LeaveCategory, RequestStatus
from ..core.exceptions import InvalidRangeError, InvalidStateError, ValidationError
from ..users.model import Employee
from .model import LeaveRequest
from .repository import LeaveRepository

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class NewLeave:
    start_date: date
    end_date: date
    category: LeaveCategory
    reason: str
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    half_day_charge_type: Optional[HalfDayChargeType] = None


class LeaveService:
    """Use case: submit and decide leave requests.

    A request that fails validation or the balance check is never stored.
    """

    def __init__(self, leaves: LeaveRepository):
        self._leaves = leaves

    @staticmethod
    def _validate(new: NewLeave) -> NewLeave:
        reason = require_non_empty(new.reason, "Reason")
        require_date_order(new.start_date, new.end_date)

        start_time, end_time = new.start_time, new.end_time
        if new.category == LeaveCategory.EXTRA_TIME:
            require_hhmm(start_time, "Start time")
            require_hhmm(end_time, "End time")
        elif new.category == LeaveCategory.HALF_DAY:
            if new.start_date != new.end_date:
                raise InvalidRangeError("Half-day leave must start and end on the same day")
            for value, label in ((start_time, "Start time"), (end_time, "End time")):
                if value and parse_hhmm(value) is None:
                    raise InvalidRangeError(f"{label} must be a valid time (HH:mm)")
        else:
            start_time = end_time = None

        charge = new.half_day_charge_type if new.category == LeaveCategory.HALF_DAY else None
        return NewLeave(
            start_date=new.start_date,
            end_date=new.end_date,
            category=new.category,
            reason=reason,
            start_time=start_time,
            end_time=end_time,
            half_day_charge_type=charge,
        )

    def _check_paid_balance(self, employee: Employee, leave: LeaveRequest, holidays: Iterable) -> None:
        holidays = tuple(holidays)
        requested = requested_paid_days(leave, holidays)
        if not requested:
            return
        approved = self._leaves.list_for_user(user_id=employee.user_id, status=RequestStatus.APPROVED)
        balance = paid_leave_balance(approved, employee.paid_leave_allocation, holidays)
        ensure_paid_leave_available(requested, balance)

    def submit_leave(self, *, employee: Employee, new: NewLeave, holidays: Iterable = (), now: datetime) -> int:
        new = self._validate(new)
        holidays = tuple(holidays)

        draft = LeaveRequest(
            request_id=0,
            user_id=employee.user_id,
            start_date=new.start_date,
            end_date=new.end_date,
            category=new.category,
            reason=new.reason,
            status=RequestStatus.PENDING,
            created_at=now,
            start_time=new.start_time,
            end_time=new.end_time,
            half_day_charge_type=new.half_day_charge_type,
        )
        # Extra-time leave is not balance-checked: unworked hours carry into next month as low time.
        self._check_paid_balance(employee, draft, holidays)

        request_id = self._leaves.create_leave(
            user_id=employee.user_id,
            start_date=new.start_date,
            end_date=new.end_date,
            category=new.category,
            reason=new.reason,
            created_at=now,
            start_time=new.start_time,
            end_time=new.end_time,
            half_day_charge_type=new.half_day_charge_type,
        )
        log.info("leave %s submitted by user %s (%s)", request_id, employee.user_id, new.category.value)
        return request_id

    def _pending(self, request_id: int) -> LeaveRequest:
        req = self._leaves.get_leave(request_id=int(request_id))
        if not req:
            raise ValidationError("Leave request does not exist")
        if req.status != RequestStatus.PENDING:
            raise InvalidStateError("Leave request has already been decided")
        return req

    def approve_leave(self, *, employee: Employee, request_id: int, holidays: Iterable = (), hr_comment: str = "") -> None:
        req = self._pending(request_id)
        if req.user_id != employee.user_id:
            raise ValidationError("Leave request does not belong to this employee")
        self._check_paid_balance(employee, req, holidays)

        if not self._leaves.decide_leave(
            request_id=req.request_id,
            status=RequestStatus.APPROVED,
            hr_comment=(hr_comment or "").strip() or None,
        ):
            raise InvalidStateError("Leave request has already been decided")
        log.info("leave %s approved", req.request_id)

    def reject_leave(self, *, request_id: int, hr_comment: str = "") -> None:
        req = self._pending(request_id)
        if not self._leaves.decide_leave(
            request_id=req.request_id,
            status=RequestStatus.REJECTED,
            hr_comment=(hr_comment or "").strip() or None,
        ):
            raise InvalidStateError("Leave request has already been decided")
        log.info("leave %s rejected", req.request_id)
