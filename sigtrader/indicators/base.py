from __future__ import annotations

from abc import ABC, abstractmethod
from collections import deque


class Indicator(ABC):
    """A derived value computed from the most recent prices of one instrument.

    ``calculate`` returns None while fewer than ``warmup_period`` prices are held.
    """

    name: str
    warmup_period: int

    @abstractmethod
    def calculate(self, prices: deque[float]) -> float | None: ...

    @staticmethod
    def latest(prices: deque[float], count: int) -> list[float]:
        """Most recent ``count`` prices, oldest first."""
        if count <= 0:
            return []
        return list(prices)[-count:]
