from __future__ import annotations

from ...core.enums import TimeClassification
from ..model import TimeDecision
from .base import ClassificationStrategy


class ExtraTimeStrategy(ClassificationStrategy):
    """Worked past the maximum normal threshold."""

    def decide(self, *, net_seconds: int, min_normal: int, max_normal: int) -> TimeDecision:
        return TimeDecision(
            classification=TimeClassification.EXTRA,
            surplus_seconds=net_seconds - max_normal,
        )
