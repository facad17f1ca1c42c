"""Rolling indicator processor for a single instrument."""
from __future__ import annotations

import logging
from collections import deque
from typing import Iterable

from sigtrader.core.exceptions import ConfigError
from sigtrader.core.types import ProcessedTick, Tick
from sigtrader.indicators.builtin.momentum import SmoothedRSI
from sigtrader.indicators.builtin.moving_average import SMA
from sigtrader.indicators.builtin.volatility import OutlierDetector, Volatility

logger = logging.getLogger(__name__)


class IndicatorProcessor:
    """Turns raw ticks into ProcessedTicks using a bounded price history.

    One instance per instrument. Ticks must arrive in time order; each call
    to ``process`` appends the price (evicting the oldest once ``capacity``
    is reached) and derives indicators from the window including that price.
    """

    def __init__(self, capacity: int = 500, outlier_threshold: float = 4.0) -> None:
        if capacity < 1:
            raise ConfigError(f"history capacity must be at least 1, got {capacity}")
        self._prices: deque[float] = deque(maxlen=capacity)
        self._symbol: str | None = None
        self._ma_fast = SMA(period=5)
        self._ma_slow = SMA(period=20)
        self._rsi = SmoothedRSI(period=14)
        self._volatility = Volatility(period=20)
        self._outliers = OutlierDetector(self._volatility, threshold=outlier_threshold)

    @property
    def capacity(self) -> int:
        return self._prices.maxlen

    @property
    def history(self) -> list[float]:
        return list(self._prices)

    def process(self, tick: Tick) -> ProcessedTick:
        if self._symbol is None:
            self._symbol = tick.symbol
        elif tick.symbol != self._symbol:
            logger.warning(
                "Processor for %s received tick for %s; histories are mixed",
                self._symbol, tick.symbol,
            )

        self._prices.append(tick.price)
        is_outlier = self._outliers.is_outlier(tick.price, self._prices)
        if is_outlier:
            logger.debug("Outlier price %.4f for %s at %s", tick.price, tick.symbol, tick.timestamp)

        return ProcessedTick(
            tick=tick,
            moving_average_5=self._ma_fast.calculate(self._prices),
            moving_average_20=self._ma_slow.calculate(self._prices),
            rsi_14=self._rsi.calculate(self._prices),
            volatility=self._volatility.calculate(self._prices),
            is_outlier=is_outlier,
        )

    def process_batch(self, ticks: Iterable[Tick]) -> list[ProcessedTick]:
        return [self.process(tick) for tick in ticks]

    def reset(self) -> None:
        self._prices.clear()
        self._symbol = None
