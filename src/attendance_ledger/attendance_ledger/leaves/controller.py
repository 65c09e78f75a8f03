from __future__ import annotations

from flask import Flask, jsonify

from ..bonds.schema import employee_from_dict
from ..common.datetime_utils import parse_date
from ..common.http import json_body, request_now
from ..common.payload import parse_enum, pick
from ..core.enums import HalfDayChargeType, LeaveCategory, RequestStatus
from ..core.exceptions import InvalidRangeError, MissingRequiredFieldError
from .calculator import extra_time_leave_hours, leave_days
from .schema import holidays_from_list, leave_from_dict
from .service import LeaveService, NewLeave


def register(app: Flask, container) -> None:
    @app.route("/api/leaves/days", methods=["POST"], endpoint="leave_days")
    def leave_days_view():
        data = json_body()
        start = parse_date(pick(data, "startDate", "start_date"))
        end = parse_date(pick(data, "endDate", "end_date"))
        if start is None or end is None:
            raise InvalidRangeError("startDate and endDate must be valid dates")

        category = parse_enum(LeaveCategory, pick(data, "category"))
        holidays = holidays_from_list(pick(data, "holidays", default=[]))
        return jsonify({"days": leave_days(start, end, holidays, category)})

    @app.route("/api/leaves/extra-time-hours", methods=["POST"], endpoint="leave_extra_time_hours")
    def extra_time_hours_view():
        data = json_body()
        leave = leave_from_dict(pick(data, "leave", default={}) or {})
        if leave is None:
            raise InvalidRangeError("Leave needs a valid startDate")

        holidays = holidays_from_list(pick(data, "holidays", default=[]))
        return jsonify({"hours": round(extra_time_leave_hours(leave, holidays), 2)})

    if container.leave_service is not None:
        _register_workflow(app, container.leave_service)


def _register_workflow(app: Flask, service: LeaveService) -> None:
    @app.route("/api/leaves", methods=["POST"], endpoint="leave_submit")
    def leave_submit():
        data = json_body()
        start = parse_date(pick(data, "startDate", "start_date"))
        end = parse_date(pick(data, "endDate", "end_date"))
        if start is None or end is None:
            raise MissingRequiredFieldError("startDate and endDate are required")

        new = NewLeave(
            start_date=start,
            end_date=end,
            category=parse_enum(LeaveCategory, pick(data, "category"), LeaveCategory.CASUAL),
            reason=str(pick(data, "reason", default="")),
            start_time=pick(data, "startTime", "start_time"),
            end_time=pick(data, "endTime", "end_time"),
            half_day_charge_type=parse_enum(HalfDayChargeType, pick(data, "halfDayChargeType", "half_day_charge_type")),
        )
        request_id = service.submit_leave(
            employee=employee_from_dict(pick(data, "user", "employee", default={}) or {}),
            new=new,
            holidays=holidays_from_list(pick(data, "holidays", default=[])),
            now=request_now(data),
        )
        return jsonify({"id": request_id, "status": RequestStatus.PENDING.value}), 201

    @app.route("/api/leaves/<int:request_id>/approve", methods=["POST"], endpoint="leave_approve")
    def leave_approve(request_id: int):
        data = json_body()
        service.approve_leave(
            employee=employee_from_dict(pick(data, "user", "employee", default={}) or {}),
            request_id=request_id,
            holidays=holidays_from_list(pick(data, "holidays", default=[])),
            hr_comment=str(pick(data, "hrComment", "hr_comment", default="")),
        )
        return jsonify({"id": request_id, "status": RequestStatus.APPROVED.value})

    @app.route("/api/leaves/<int:request_id>/reject", methods=["POST"], endpoint="leave_reject")
    def leave_reject(request_id: int):
        data = json_body()
        service.reject_leave(request_id=request_id, hr_comment=str(pick(data, "hrComment", "hr_comment", default="")))
        return jsonify({"id": request_id, "status": RequestStatus.REJECTED.value})
