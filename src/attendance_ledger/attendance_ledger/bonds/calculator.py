"""Bond chaining and remaining-time projections.

End dates use true calendar months. The "remaining" figures shown to people
use 30-day months. The two are not meant to agree exactly.
"""
from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Optional, Sequence, Union

from ..common.datetime_utils import add_months, as_date
from ..core.constants import DISPLAY_MONTH_DAYS
from .model import Bond, BondStatus, BondSummary, RemainingTime, TotalRemaining


def _plural(n: int, unit: str) -> str:
    return f"{n} {unit}" if n == 1 else f"{n} {unit}s"


def bond_end_date(start: date, period_months: int) -> date:
    return add_months(start, period_months)


def rechain_bonds(joining_date: Optional[date], bonds: Sequence[Bond]) -> tuple[Bond, ...]:
    """Recompute start dates: bond 0 on the joining date, bond i the day after bond i-1 ends.

    Call this whenever the joining date or an earlier bond's period changes.
    Without a joining date the first bond's stored start is kept as the anchor.
    """
    out: list[Bond] = []
    start = joining_date or (bonds[0].start_date if bonds else None)
    for bond in bonds:
        if start is None:
            out.append(bond)
            continue
        out.append(replace(bond, start_date=start))
        start = bond_end_date(start, bond.period_months) + timedelta(days=1)
    return tuple(out)


def remaining_display(months: int, days: int) -> str:
    if months == 0:
        return _plural(days, "day")
    if days == 0:
        return _plural(months, "month")
    return f"{_plural(months, 'month')} {_plural(days, 'day')}"


def total_remaining(total_days: int) -> TotalRemaining:
    months, days = divmod(max(0, total_days), DISPLAY_MONTH_DAYS)
    years, months = divmod(months, 12)

    if years and months:
        display = f"{_plural(years, 'year')} {_plural(months, 'month')}"
    elif years:
        display = _plural(years, "year")
    elif months:
        display = remaining_display(months, days)
    elif days:
        display = _plural(days, "day")
    else:
        display = "Completed"
    return TotalRemaining(years=years, months=months, days=days, display=display)


def bond_status(bond: Bond, start: date, today: date) -> BondStatus:
    end = bond_end_date(start, bond.period_months)
    is_active = start <= today < end
    is_expired = end <= today

    if is_active:
        diff = (end - today).days
        months, days = divmod(diff, DISPLAY_MONTH_DAYS)
        remaining = RemainingTime(months=months, days=days, display=remaining_display(months, days))
    elif is_expired:
        ago = (today - end).days
        remaining = RemainingTime(months=0, days=0, display=f"Expired {_plural(ago, 'day')} ago")
    else:
        until = (start - today).days
        remaining = RemainingTime(months=0, days=0, display=f"Starts in {_plural(until, 'day')}")

    return BondStatus(
        type=bond.type,
        period_months=bond.period_months,
        start_date=start,
        end_date=end,
        is_active=is_active,
        is_expired=is_expired,
        remaining=remaining,
        salary=float(bond.salary or 0),
    )


def calculate_bond_remaining(
    bonds: Sequence[Bond],
    joining_date: Optional[date],
    now: Union[date, datetime],
) -> BondSummary:
    if not bonds:
        return BondSummary()

    today = as_date(now)
    chained = rechain_bonds(joining_date, bonds)

    statuses: list[BondStatus] = []
    total_days = 0
    for bond in chained:
        st = bond_status(bond, bond.start_date or today, today)
        statuses.append(st)
        if st.is_active:
            total_days += (st.end_date - today).days
        elif not st.is_expired:
            total_days += (st.end_date - st.start_date).days

    current = next((s for s in statuses if s.is_active), None)
    return BondSummary(
        bonds=tuple(statuses),
        current_bond=current,
        total_remaining=total_remaining(total_days),
        current_salary=current.salary if current else 0.0,
        first_completion_date=statuses[0].end_date,
        finish_date=statuses[-1].end_date,
    )
