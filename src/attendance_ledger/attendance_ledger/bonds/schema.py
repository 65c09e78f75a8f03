from __future__ import annotations

from typing import Optional

from ..common.datetime_utils import format_dd_mm_yyyy, parse_date
from ..common.payload import as_float, as_int, as_optional_int, parse_enum, pick
from ..core.enums import BondType
from ..users.model import Employee
from .model import Bond, BondStatus, BondSummary, SalaryBreakdownRow


def _iso(value) -> Optional[str]:
    return value.isoformat() if value else None


def bonds_from_list(items) -> list[Bond]:
    """Bonds ordered by their "order" field when present."""
    raw = sorted(enumerate(items or []), key=lambda p: (as_int(pick(p[1], "order"), p[0]), p[0]))
    return [
        Bond(
            type=parse_enum(BondType, pick(item, "type"), BondType.OTHER),
            period_months=as_int(pick(item, "periodMonths", "period_months")),
            salary=as_float(pick(item, "salary")),
            start_date=parse_date(pick(item, "startDate", "start_date")),
        )
        for _, item in raw
    ]


def employee_from_dict(data: dict) -> Employee:
    return Employee(
        user_id=as_int(pick(data, "id", "userId", "user_id")),
        name=str(pick(data, "name", default="")),
        joining_date=parse_date(pick(data, "joiningDate", "joining_date")),
        paid_leave_allocation=as_optional_int(pick(data, "paidLeaveAllocation", "paid_leave_allocation")),
        bonds=tuple(bonds_from_list(pick(data, "bonds", default=[]))),
    )


def bond_status_to_dict(status: BondStatus) -> dict:
    return {
        "type": status.type.value,
        "period_months": status.period_months,
        "start_date": _iso(status.start_date),
        "end_date": _iso(status.end_date),
        "is_active": status.is_active,
        "is_expired": status.is_expired,
        "remaining": {
            "months": status.remaining.months,
            "days": status.remaining.days,
            "display": status.remaining.display,
        },
        "salary": status.salary,
    }


def bond_summary_to_dict(summary: BondSummary) -> dict:
    total = summary.total_remaining
    return {
        "bonds": [bond_status_to_dict(b) for b in summary.bonds],
        "current_bond": bond_status_to_dict(summary.current_bond) if summary.current_bond else None,
        "total_remaining": {"years": total.years, "months": total.months, "days": total.days, "display": total.display},
        "current_salary": summary.current_salary,
        "first_completion_date": _iso(summary.first_completion_date),
        "finish_date": _iso(summary.finish_date),
    }


def salary_row_to_dict(row: SalaryBreakdownRow) -> dict:
    return {
        "month": row.month,
        "year": row.year,
        "start_date": format_dd_mm_yyyy(row.start_date),
        "end_date": format_dd_mm_yyyy(row.end_date),
        "bond_type": row.bond_type.value,
        "is_partial_month": row.is_partial_month,
        "salary": row.salary,
        "display_label": row.display_label,
    }
