from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from sigtrader.core.types import ProcessedTick, Signal, SignalType


class SignalProducer(ABC):
    """Classifies each processed tick as Buy, Sell or Hold.

    Producers may keep state between ticks. ``analyze_batch`` must give the
    same signals as calling ``analyze`` once per tick on a fresh producer.
    """

    name: str

    @abstractmethod
    def analyze(self, tick: ProcessedTick) -> Signal: ...

    def analyze_batch(self, ticks: Sequence[ProcessedTick]) -> list[Signal]:
        self.reset()
        return [self.analyze(tick) for tick in ticks]

    def reset(self) -> None:
        pass

    def _signal(self, signal_type: SignalType) -> Signal:
        return Signal(type=signal_type, producer=self.name)
