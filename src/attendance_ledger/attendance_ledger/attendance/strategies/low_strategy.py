from __future__ import annotations

from ...core.enums import TimeClassification
from ..model import TimeDecision
from .base import ClassificationStrategy


class LowTimeStrategy(ClassificationStrategy):
    """Worked less than the minimum normal threshold."""

    def decide(self, *, net_seconds: int, min_normal: int, max_normal: int) -> TimeDecision:
        return TimeDecision(
            classification=TimeClassification.LOW,
            shortage_seconds=min_normal - net_seconds,
        )
