from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import BondType


@dataclass(frozen=True)
class Bond:
    """A contractual employment period.

    start_date is derived by chaining from the joining date; any stored value
    is overwritten by rechain_bonds().
    """

    type: BondType
    period_months: int
    salary: float = 0.0
    start_date: Optional[date] = None


@dataclass(frozen=True)
class RemainingTime:
    months: int
    days: int
    display: str


@dataclass(frozen=True)
class BondStatus:
    type: BondType
    period_months: int
    start_date: date
    end_date: date
    is_active: bool
    is_expired: bool
    remaining: RemainingTime
    salary: float = 0.0


@dataclass(frozen=True)
class TotalRemaining:
    years: int
    months: int
    days: int
    display: str


@dataclass(frozen=True)
class BondSummary:
    bonds: tuple[BondStatus, ...] = field(default_factory=tuple)
    current_bond: Optional[BondStatus] = None
    total_remaining: TotalRemaining = TotalRemaining(0, 0, 0, "-")
    current_salary: float = 0.0
    first_completion_date: Optional[date] = None
    finish_date: Optional[date] = None


@dataclass(frozen=True)
class SalaryBreakdownRow:
    month: int
    year: int
    start_date: date
    end_date: date
    bond_type: BondType
    is_partial_month: bool
    salary: float
    display_label: str
