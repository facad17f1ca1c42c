"""Position ledger: at most one open position per instrument."""
from __future__ import annotations

import logging
from datetime import datetime

from sigtrader.core.types import ClosedTrade, Position, PositionType, SignalType

logger = logging.getLogger(__name__)

# (decision, current state) -> direction to hold afterwards. None state is Flat.
_TRANSITIONS: dict[tuple[SignalType, PositionType | None], PositionType] = {
    (SignalType.BUY, None): PositionType.LONG,
    (SignalType.BUY, PositionType.SHORT): PositionType.LONG,
    (SignalType.SELL, None): PositionType.SHORT,
    (SignalType.SELL, PositionType.LONG): PositionType.SHORT,
}


class PositionLedger:
    """Applies trade decisions and records closed trades.

    Every position is sized at ``position_size`` currency units. Commission is
    a flat ``position_size * commission_rate`` charged when a position closes.
    Created fresh for every backtest run.
    """

    def __init__(self, position_size: float, commission_rate: float, strategy: str) -> None:
        self._position_size = position_size
        self._commission = position_size * commission_rate
        self._strategy = strategy
        self._positions: dict[str, Position] = {}
        self._trades: list[ClosedTrade] = []

    @property
    def commission(self) -> float:
        return self._commission

    @property
    def trades(self) -> list[ClosedTrade]:
        return list(self._trades)

    @property
    def open_positions(self) -> list[Position]:
        return list(self._positions.values())

    def position(self, symbol: str) -> Position | None:
        return self._positions.get(symbol)

    def apply(
        self,
        decision: SignalType,
        symbol: str,
        price: float,
        timestamp: datetime,
    ) -> ClosedTrade | None:
        """Apply one decision at the tick's price.

        A decision against the open position closes it and opens the opposite
        one at the same price. Returns the trade closed by this step, if any.
        """
        current = self._positions.get(symbol)
        target = _TRANSITIONS.get((decision, current.direction if current else None))
        if target is None:
            return None

        closed = None
        if current is not None:
            closed = self._close(current, price, timestamp)
        self._open(symbol, target, price, timestamp)
        return closed

    def unrealized_pnl(self, prices: dict[str, float]) -> float:
        return sum(
            pos.unrealized_pnl(prices[pos.symbol])
            for pos in self._positions.values()
            if pos.symbol in prices
        )

    def _open(self, symbol: str, direction: PositionType, price: float, timestamp: datetime) -> None:
        position = Position(
            symbol=symbol,
            direction=direction,
            entry_time=timestamp,
            entry_price=price,
            quantity=self._position_size / price,
        )
        self._positions[symbol] = position
        logger.debug(
            "Opened %s %s: %.6f @ %.4f",
            direction.value, symbol, position.quantity, price,
        )

    def _close(self, position: Position, price: float, timestamp: datetime) -> ClosedTrade:
        del self._positions[position.symbol]
        pnl = position.unrealized_pnl(price) - self._commission
        trade = ClosedTrade(
            symbol=position.symbol,
            direction=position.direction,
            entry_time=position.entry_time,
            entry_price=position.entry_price,
            exit_time=timestamp,
            exit_price=price,
            quantity=position.quantity,
            pnl=pnl,
            strategy=self._strategy,
        )
        self._trades.append(trade)
        logger.debug(
            "Closed %s %s @ %.4f, pnl %.4f",
            position.direction.value, position.symbol, price, pnl,
        )
        return trade
