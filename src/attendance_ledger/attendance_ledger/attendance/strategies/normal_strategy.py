from __future__ import annotations

from ...core.enums import TimeClassification
from ..model import TimeDecision
from .base import ClassificationStrategy


class NormalTimeStrategy(ClassificationStrategy):
    """Inside the normal band (both ends inclusive)."""

    def decide(self, *, net_seconds: int, min_normal: int, max_normal: int) -> TimeDecision:
        return TimeDecision(classification=TimeClassification.NORMAL)
