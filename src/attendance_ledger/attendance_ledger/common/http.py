from __future__ import annotations

import logging
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from flask import Flask, current_app, jsonify, request

from ..core.exceptions import DomainError, ValidationError
from .datetime_utils import now_local, parse_instant

log = logging.getLogger(__name__)

_STATUS = {
    "INVALID_STATE": 409,
    "BREAK_LIMIT": 409,
    "INSUFFICIENT_BALANCE": 409,
}


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def app_timezone() -> ZoneInfo:
    tz_name = current_app.config.get("TIMEZONE", "UTC")
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        log.warning("unknown TIMEZONE %r; using UTC", tz_name)
        return ZoneInfo("UTC")


def request_now(data: dict) -> datetime:
    """The boundary is the only place that reads the wall clock."""
    tz = app_timezone()
    return parse_instant(data.get("now"), tz) or now_local(tz)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def _domain(e: DomainError):
        status = _STATUS.get(e.code, 422 if isinstance(e, ValidationError) else 400)
        return jsonify({"error": e.code, "message": str(e)}), status
