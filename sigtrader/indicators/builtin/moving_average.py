from __future__ import annotations

from collections import deque

from sigtrader.indicators.base import Indicator


class SMA(Indicator):
    def __init__(self, period: int) -> None:
        self.name = "SMA"
        self.warmup_period = period
        self.period = period

    def calculate(self, prices: deque[float]) -> float | None:
        if len(prices) < self.period:
            return None
        return sum(self.latest(prices, self.period)) / self.period
