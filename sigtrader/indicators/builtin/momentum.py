from __future__ import annotations

from collections import deque

from sigtrader.indicators.base import Indicator


class SmoothedRSI(Indicator):
    """RSI with exponentially smoothed gains and losses.

    The smoothing is recomputed on every call over only the last ``period``
    price changes, seeded with the oldest change in that window. It does not
    carry a running average across the whole history, so values differ from
    Wilder's RSI.
    """

    def __init__(self, period: int = 14) -> None:
        self.name = "RSI"
        self.warmup_period = period + 1
        self.period = period
        self.alpha = 2.0 / (period + 1)

    def calculate(self, prices: deque[float]) -> float | None:
        if len(prices) < self.warmup_period:
            return None
        window = self.latest(prices, self.period + 1)
        deltas = [window[i] - window[i - 1] for i in range(1, len(window))]
        gains = [d if d > 0 else 0.0 for d in deltas]
        losses = [-d if d < 0 else 0.0 for d in deltas]

        avg_gain = gains[0]
        avg_loss = losses[0]
        for gain, loss in zip(gains[1:], losses[1:]):
            avg_gain = gain * self.alpha + avg_gain * (1.0 - self.alpha)
            avg_loss = loss * self.alpha + avg_loss * (1.0 - self.alpha)

        if avg_loss == 0:
            return 100.0
        rs = avg_gain / avg_loss
        return 100.0 - (100.0 / (1.0 + rs))
