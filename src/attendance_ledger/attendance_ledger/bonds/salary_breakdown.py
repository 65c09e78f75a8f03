from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import month_bounds
from .model import Bond, SalaryBreakdownRow


def _row(start: date, end: date, bond: Bond, *, partial: bool) -> SalaryBreakdownRow:
    name = calendar.month_abbr[start.month]
    label = f"{name} {start.day}-{end.day}, {start.year}" if partial else f"{name} {start.year}"
    return SalaryBreakdownRow(
        month=start.month,
        year=start.year,
        start_date=start,
        end_date=end,
        bond_type=bond.type,
        is_partial_month=partial,
        salary=float(bond.salary or 0),
        display_label=label,
    )


def salary_breakdown(joining_date: Optional[date], bonds: Sequence[Bond]) -> list[SalaryBreakdownRow]:
    """Monthly salary rows for the bond chain.

    Joining after the 1st gives a partial first month (paid at the first bond's
    rate, not counted against the bond). Each bond month then runs from the
    1st to the last day of a calendar month.
    """
    if not joining_date or not bonds:
        return []

    rows: list[SalaryBreakdownRow] = []
    current = joining_date
    if current.day > 1:
        _, month_end = month_bounds(current.year, current.month)
        rows.append(_row(current, month_end, bonds[0], partial=True))
        current = month_end + timedelta(days=1)

    for bond in bonds:
        for _ in range(max(0, int(bond.period_months or 0))):
            _, month_end = month_bounds(current.year, current.month)
            rows.append(_row(current, month_end, bond, partial=False))
            current = month_end + timedelta(days=1)
    return rows
