from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class SignalType(str, Enum):
    BUY = "buy"
    SELL = "sell"
    HOLD = "hold"


class PositionType(str, Enum):
    LONG = "long"
    SHORT = "short"


class StrategyMode(str, Enum):
    """How producer outputs are reconciled into one trade decision."""

    SINGLE_A = "single_a"
    SINGLE_B = "single_b"
    COMBINED = "combined"


@dataclass(frozen=True)
class Tick:
    symbol: str
    timestamp: datetime
    price: float
    volume: float
    high: float
    low: float


@dataclass(frozen=True)
class ProcessedTick:
    """A tick plus indicator values computed over a price window ending at this tick.

    Optional fields stay None until enough prices have accumulated.
    """

    tick: Tick
    moving_average_5: float | None = None
    moving_average_20: float | None = None
    rsi_14: float | None = None
    volatility: float | None = None
    is_outlier: bool = False

    @property
    def symbol(self) -> str:
        return self.tick.symbol

    @property
    def timestamp(self) -> datetime:
        return self.tick.timestamp

    @property
    def price(self) -> float:
        return self.tick.price


@dataclass(frozen=True)
class Signal:
    type: SignalType
    producer: str

    @property
    def is_hold(self) -> bool:
        return self.type is SignalType.HOLD


@dataclass(frozen=True)
class Position:
    symbol: str
    direction: PositionType
    entry_time: datetime
    entry_price: float
    quantity: float

    def unrealized_pnl(self, price: float) -> float:
        if self.direction is PositionType.LONG:
            return (price - self.entry_price) * self.quantity
        return (self.entry_price - price) * self.quantity


@dataclass(frozen=True)
class ClosedTrade:
    symbol: str
    direction: PositionType
    entry_time: datetime
    entry_price: float
    exit_time: datetime
    exit_price: float
    quantity: float
    pnl: float
    strategy: str

    def to_dict(self) -> dict:
        return {
            "symbol": self.symbol,
            "direction": self.direction.value,
            "entry_time": self.entry_time.isoformat(),
            "entry_price": self.entry_price,
            "exit_time": self.exit_time.isoformat(),
            "exit_price": self.exit_price,
            "quantity": self.quantity,
            "pnl": self.pnl,
            "strategy": self.strategy,
        }


@dataclass(frozen=True)
class EquityPoint:
    timestamp: datetime
    equity: float
    drawdown: float
