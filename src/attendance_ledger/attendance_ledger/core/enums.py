from __future__ import annotations

from enum import Enum


class BreakType(str, Enum):
    """Loại giờ nghỉ: Standard (1 lần/ngày) hoặc Extra (cần lý do)."""

    STANDARD = "Standard"
    EXTRA = "Extra"


class TimeClassification(str, Enum):
    """Phân loại giờ làm thực tế trong ngày."""

    LOW = "Low"
    NORMAL = "Normal"
    EXTRA = "Extra"


class LeaveCategory(str, Enum):
    PAID = "Paid Leave"
    UNPAID = "Unpaid Leave"
    HALF_DAY = "Half Day Leave"
    EXTRA_TIME = "Extra Time Leave"
    SICK = "Sick Leave"
    CASUAL = "Casual Leave"


class HalfDayChargeType(str, Enum):
    """Which balance a half-day leave draws from."""

    PAID = "Paid"
    EXTRA_TIME = "ExtraTime"


class RequestStatus(str, Enum):
    """Trạng thái luồng duyệt yêu cầu nghỉ phép."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class BondType(str, Enum):
    INTERNSHIP = "Internship"
    JOB = "Job"
    OTHER = "Other"


class HolidayStatus(str, Enum):
    PAST = "past"
    UPCOMING = "upcoming"
