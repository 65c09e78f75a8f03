from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import MAX_NORMAL_SECONDS, MIN_NORMAL_SECONDS
from .strategies.base import ClassificationStrategy
from .strategies.extra_strategy import ExtraTimeStrategy
from .strategies.low_strategy import LowTimeStrategy
from .strategies.normal_strategy import NormalTimeStrategy


@dataclass
class ClassificationStrategyFactory:
    """Factory Pattern: choose the classification strategy for a net worked time."""

    min_normal: int = MIN_NORMAL_SECONDS
    max_normal: int = MAX_NORMAL_SECONDS

    def for_worked_seconds(self, net_seconds: int) -> ClassificationStrategy:
        if net_seconds < self.min_normal:
            return LowTimeStrategy()
        if net_seconds > self.max_normal:
            return ExtraTimeStrategy()
        return NormalTimeStrategy()
