from __future__ import annotations

from ..attendance.schema import monthly_summary_to_dict
from .model import EmployeeBalance, MonthlyBalanceSnapshot


def balance_to_dict(balance: EmployeeBalance) -> dict:
    return {
        "user_id": balance.user_id,
        "year": balance.year,
        "month": balance.month,
        "paid_leave": {
            "allocation": balance.paid_leave.allocation,
            "used_days": balance.paid_leave.used_days,
            "available_days": balance.paid_leave.available_days,
        },
        "extra_time_leave_hours_taken": round(balance.extra_time_leave_hours_taken, 2),
        "total_low_time_seconds": balance.total_low_time_seconds,
        "total_extra_time_seconds": balance.total_extra_time_seconds,
        "extra_time_worked_hours": round(balance.extra_time_worked_hours, 2),
        "remaining_extra_time_leave_hours": round(balance.remaining_extra_time_leave_hours, 2),
        "carryover_extra_time_leave": round(balance.carryover_extra_time_leave, 2),
        "carryover_low_time": balance.carryover_low_time,
        "is_month_end": balance.is_month_end,
        "time_summary": monthly_summary_to_dict(balance.time_summary),
    }


def snapshot_to_dict(snapshot: MonthlyBalanceSnapshot) -> dict:
    return {
        "user_id": snapshot.user_id,
        "year": snapshot.year,
        "month": snapshot.month,
        "total_low_time_seconds": snapshot.total_low_time_seconds,
        "total_extra_time_seconds": snapshot.total_extra_time_seconds,
        "extra_time_leave_hours_taken": snapshot.extra_time_leave_hours_taken,
        "remaining_extra_time_leave_hours": snapshot.remaining_extra_time_leave_hours,
        "carryover_extra_time_leave_seconds": snapshot.carryover_extra_time_leave_seconds,
        "carryover_extra_time_leave_hours": round(snapshot.carryover_extra_time_leave_hours, 2),
        "carryover_low_time_seconds": snapshot.carryover_low_time_seconds,
        "used_paid_leave_days": snapshot.used_paid_leave_days,
        "available_paid_leave_days": snapshot.available_paid_leave_days,
        "closed_at": snapshot.closed_at.isoformat() if snapshot.closed_at else None,
    }
