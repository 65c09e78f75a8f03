from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import TimeDecision


class ClassificationStrategy(ABC):
    """Strategy Pattern: encapsulate how a day's net worked time is classified."""

    @abstractmethod
    def decide(self, *, net_seconds: int, min_normal: int, max_normal: int) -> TimeDecision:
        raise NotImplementedError
