"""Bollinger band reversion strategy over the producer's own price window."""
from __future__ import annotations

from collections import deque

from sigtrader.core.exceptions import StrategyError
from sigtrader.core.types import ProcessedTick, Signal, SignalType
from sigtrader.indicators.builtin.volatility import BollingerBands
from sigtrader.strategy.base import SignalProducer


class BollingerBandStrategy(SignalProducer):
    """Buys below the lower band and sells above the upper band.

    Bands are built from the last ``period`` prices seen by this producer,
    current price included. Hold until the window is full.
    """

    name = "bollinger"

    def __init__(self, period: int = 20, num_std: float = 1.8) -> None:
        if period < 2:
            raise StrategyError(f"Bollinger period must be at least 2, got {period}")
        self._bands = BollingerBands(period=period, num_std=num_std)
        self._prices: deque[float] = deque(maxlen=period)

    def analyze(self, tick: ProcessedTick) -> Signal:
        self._prices.append(tick.price)
        bands = self._bands.calculate(self._prices)
        if bands is None:
            return self._signal(SignalType.HOLD)
        if tick.price < bands["lower"]:
            return self._signal(SignalType.BUY)
        if tick.price > bands["upper"]:
            return self._signal(SignalType.SELL)
        return self._signal(SignalType.HOLD)

    def reset(self) -> None:
        self._prices.clear()
