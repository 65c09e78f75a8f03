from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import parse_date, parse_instant
from ..common.http import app_timezone, json_body, request_now
from ..common.payload import as_int, as_optional_int, parse_enum, pick
from ..core.enums import BreakType
from ..core.exceptions import MissingRequiredFieldError, ValidationError
from ..leaves.schema import leaves_from_list
from .engine import live_timer, summarize_day, summarize_month
from .schema import (
    day_summary_to_dict,
    live_timer_to_dict,
    monthly_summary_to_dict,
    record_from_dict,
    record_to_dict,
    records_from_list,
)
from .service import AttendanceService


def register(app: Flask, container) -> None:
    @app.route("/api/attendance/summary", methods=["POST"], endpoint="attendance_summary")
    def attendance_summary():
        data = json_body()
        now = request_now(data)
        record = record_from_dict(pick(data, "record", default={}) or {}, app_timezone())
        if record is None:
            raise ValidationError("Attendance record needs a date or a check-in time")

        return jsonify(
            {
                "day": day_summary_to_dict(summarize_day(record, now)),
                "timer": live_timer_to_dict(live_timer(record, now)),
            }
        )

    @app.route("/api/attendance/monthly", methods=["POST"], endpoint="attendance_monthly")
    def attendance_monthly():
        data = json_body()
        now = request_now(data)
        year = as_int(pick(data, "year"), now.year)
        month = as_int(pick(data, "month"), now.month)
        if not 1 <= month <= 12:
            raise ValidationError("Month must be between 1 and 12")

        summary = summarize_month(
            records_from_list(pick(data, "records", default=[]), app_timezone()),
            leaves_from_list(pick(data, "leaves", default=[])),
            year=year,
            month=month,
            carryover_low_time_seconds=as_int(pick(data, "carryoverLowTimeSeconds", "carryover_low_time_seconds")),
        )
        return jsonify(monthly_summary_to_dict(summary))

    if container.attendance_service is not None:
        _register_workflow(app, container.attendance_service)


def _register_workflow(app: Flask, service: AttendanceService) -> None:
    """Clock-in/break/clock-out routes. Callers are trusted to send their own userId."""

    def _user_id(data: dict) -> int:
        user_id = as_optional_int(pick(data, "userId", "user_id"))
        if user_id is None:
            raise MissingRequiredFieldError("userId is required")
        return user_id

    @app.route("/api/attendance/clock-in", methods=["POST"], endpoint="attendance_clock_in")
    def attendance_clock_in():
        data = json_body()
        record = service.clock_in(_user_id(data), now=request_now(data))
        return jsonify(record_to_dict(record)), 201

    @app.route("/api/attendance/breaks/start", methods=["POST"], endpoint="attendance_break_start")
    def attendance_break_start():
        data = json_body()
        record = service.start_break(
            _user_id(data),
            now=request_now(data),
            break_type=parse_enum(BreakType, pick(data, "type"), BreakType.STANDARD),
            reason=pick(data, "reason"),
        )
        return jsonify(record_to_dict(record))

    @app.route("/api/attendance/breaks/end", methods=["POST"], endpoint="attendance_break_end")
    def attendance_break_end():
        data = json_body()
        return jsonify(record_to_dict(service.end_break(_user_id(data), now=request_now(data))))

    @app.route("/api/attendance/clock-out", methods=["POST"], endpoint="attendance_clock_out")
    def attendance_clock_out():
        data = json_body()
        return jsonify(record_to_dict(service.clock_out(_user_id(data), now=request_now(data))))

    @app.route("/api/attendance/correct", methods=["POST"], endpoint="attendance_correct")
    def attendance_correct():
        data = json_body()
        tz = app_timezone()
        work_date = parse_date(pick(data, "date", "workDate", "work_date"))
        if work_date is None:
            raise MissingRequiredFieldError("date is required")

        record = service.correct_record(
            user_id=_user_id(data),
            work_date=work_date,
            check_in=parse_instant(pick(data, "checkIn", "check_in"), tz),
            check_out=parse_instant(pick(data, "checkOut", "check_out"), tz),
            break_minutes=as_optional_int(pick(data, "breakMinutes", "break_minutes")),
            notes=pick(data, "notes"),
            leaves=leaves_from_list(pick(data, "leaves", default=[])),
        )
        return jsonify(record_to_dict(record))
