from __future__ import annotations

from datetime import datetime

from sigtrader.core.types import EquityPoint


class EquityTracker:
    """Records one equity point per tick, plus a seed point at run start.

    Equity is ``initial_capital`` plus the unrealized PnL of whatever is open
    at that tick. Realized PnL from closed trades is not added back.
    Per-tick drawdown is measured against ``initial_capital``, not a peak.
    """

    def __init__(self, initial_capital: float, start: datetime) -> None:
        self.initial_capital = initial_capital
        self.equity_curve: list[EquityPoint] = [
            EquityPoint(timestamp=start, equity=initial_capital, drawdown=0.0)
        ]

    def record(self, timestamp: datetime, unrealized_pnl: float) -> EquityPoint:
        equity = self.initial_capital + unrealized_pnl
        point = EquityPoint(
            timestamp=timestamp,
            equity=equity,
            drawdown=(self.initial_capital - equity) / self.initial_capital,
        )
        self.equity_curve.append(point)
        return point

    @property
    def equities(self) -> list[float]:
        return [p.equity for p in self.equity_curve]
