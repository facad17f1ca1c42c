"""Reconciles the signals of two producers into one trade decision."""
from __future__ import annotations

from sigtrader.core.types import Signal, SignalType, StrategyMode

_BUY = SignalType.BUY
_SELL = SignalType.SELL
_HOLD = SignalType.HOLD

# (A, B) -> (decision, source). Rows absent from the table mean no trade.
# When both producers are active the decision always comes from B.
_COMBINED_TABLE: dict[tuple[SignalType, SignalType], tuple[SignalType, str]] = {
    (_BUY, _BUY): (_BUY, "b"),
    (_BUY, _HOLD): (_BUY, "a"),
    (_HOLD, _BUY): (_BUY, "b"),
    (_SELL, _SELL): (_SELL, "b"),
    (_SELL, _HOLD): (_SELL, "a"),
    (_HOLD, _SELL): (_SELL, "b"),
}


class SignalAggregator:
    def __init__(self, mode: StrategyMode) -> None:
        self.mode = StrategyMode(mode)

    def decide(self, signal_a: Signal, signal_b: Signal) -> Signal | None:
        """Return the signal to act on, or None when no trade should happen.

        Single modes pass the chosen producer's signal through unchanged,
        Hold included.
        """
        if self.mode is StrategyMode.SINGLE_A:
            return signal_a
        if self.mode is StrategyMode.SINGLE_B:
            return signal_b

        entry = _COMBINED_TABLE.get((signal_a.type, signal_b.type))
        if entry is None:
            return None
        decision, source = entry
        chosen = signal_b if source == "b" else signal_a
        return Signal(type=decision, producer=chosen.producer)
