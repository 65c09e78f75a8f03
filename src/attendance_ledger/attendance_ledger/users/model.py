from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..bonds.model import Bond


@dataclass(frozen=True)
class Employee:
    """Thực thể miền (domain): nhân viên, chỉ các trường engine cần.

    paid_leave_allocation None means no allocation (treated as 0, never defaulted).
    """

    user_id: int
    name: str
    joining_date: Optional[date] = None
    paid_leave_allocation: Optional[int] = None
    bonds: tuple[Bond, ...] = field(default_factory=tuple)

    @property
    def allocation(self) -> int:
        return int(self.paid_leave_allocation or 0)
