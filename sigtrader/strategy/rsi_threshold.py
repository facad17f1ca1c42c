"""RSI threshold strategy: buy oversold, sell overbought."""
from __future__ import annotations

from sigtrader.core.exceptions import StrategyError
from sigtrader.core.types import ProcessedTick, Signal, SignalType
from sigtrader.strategy.base import SignalProducer


class RsiThresholdStrategy(SignalProducer):
    """Reads ``rsi_14`` from the processed tick.

    Buy  -- RSI below ``oversold``
    Sell -- RSI above ``overbought``
    Hold -- otherwise, or while RSI is still undefined
    """

    name = "rsi"

    def __init__(self, oversold: float = 40.0, overbought: float = 60.0) -> None:
        if oversold >= overbought:
            raise StrategyError(
                f"oversold ({oversold}) must be below overbought ({overbought})"
            )
        self.oversold = oversold
        self.overbought = overbought

    def analyze(self, tick: ProcessedTick) -> Signal:
        rsi = tick.rsi_14
        if rsi is None:
            return self._signal(SignalType.HOLD)
        if rsi < self.oversold:
            return self._signal(SignalType.BUY)
        if rsi > self.overbought:
            return self._signal(SignalType.SELL)
        return self._signal(SignalType.HOLD)
