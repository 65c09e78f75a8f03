from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.exceptions import InvalidRangeError, MissingRequiredFieldError
from .datetime_utils import parse_hhmm


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise MissingRequiredFieldError(f"{field_name} is required")
    return value.strip()


def require_date_order(start: date, end: date) -> None:
    if end < start:
        raise InvalidRangeError("End date must be on or after start date")


def require_hhmm(value: Optional[str], field_name: str) -> int:
    """Return minutes since midnight; missing -> MissingRequiredField, malformed -> InvalidRange."""
    if not value or not value.strip():
        raise MissingRequiredFieldError(f"{field_name} is required")
    minutes = parse_hhmm(value)
    if minutes is None:
        raise InvalidRangeError(f"{field_name} must be a valid time (HH:mm)")
    return minutes
