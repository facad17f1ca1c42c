from __future__ import annotations

import math
from collections import deque

from sigtrader.indicators.base import Indicator


class Volatility(Indicator):
    """Sample standard deviation (n - 1) of the most recent ``period`` prices."""

    def __init__(self, period: int = 20) -> None:
        self.name = "VOLATILITY"
        self.warmup_period = period
        self.period = period

    def calculate(self, prices: deque[float]) -> float | None:
        if len(prices) < self.period or self.period < 2:
            return None
        window = self.latest(prices, self.period)
        mean = sum(window) / len(window)
        variance = sum((p - mean) ** 2 for p in window) / (len(window) - 1)
        return math.sqrt(variance)


class OutlierDetector:
    """Z-score test of the current price against the recent window.

    The mean is taken over up to ``lookback`` recent prices (fewer while the
    window is filling), the deviation from ``volatility``. With no volatility
    estimate yet, or a zero one, nothing is flagged.
    """

    def __init__(
        self,
        volatility: Volatility,
        lookback: int = 20,
        min_history: int = 4,
        threshold: float = 4.0,
    ) -> None:
        self.volatility = volatility
        self.lookback = lookback
        self.min_history = min_history
        self.threshold = threshold

    def is_outlier(self, price: float, prices: deque[float]) -> bool:
        if len(prices) < self.min_history:
            return False
        vol = self.volatility.calculate(prices)
        if not vol:
            return False
        recent = Indicator.latest(prices, self.lookback)
        mean = sum(recent) / len(recent)
        return abs(price - mean) / vol > self.threshold


class BollingerBands(Indicator):
    def __init__(self, period: int = 20, num_std: float = 2.0) -> None:
        self.name = "BBANDS"
        self.period = period
        self.num_std = num_std
        self.warmup_period = period

    def calculate(self, prices: deque[float]) -> dict | None:
        if len(prices) < self.period:
            return None

        window = self.latest(prices, self.period)
        middle = sum(window) / self.period
        variance = sum((p - middle) ** 2 for p in window) / self.period
        stdev = math.sqrt(variance)

        upper = middle + self.num_std * stdev
        lower = middle - self.num_std * stdev

        return {
            "upper": upper,
            "middle": middle,
            "lower": lower,
        }
