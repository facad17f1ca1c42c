from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Sequence

from sigtrader.backtest.ledger import PositionLedger
from sigtrader.core.config import BacktestConfig
from sigtrader.core.exceptions import BacktestError
from sigtrader.core.types import ClosedTrade, EquityPoint, ProcessedTick, Signal, StrategyMode
from sigtrader.portfolio.performance import calculate_trade_stats, max_drawdown, sharpe_ratio
from sigtrader.portfolio.tracker import EquityTracker
from sigtrader.strategy.aggregator import SignalAggregator
from sigtrader.strategy.base import SignalProducer
from sigtrader.strategy.bollinger import BollingerBandStrategy
from sigtrader.strategy.rsi_threshold import RsiThresholdStrategy

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class BacktestResult:
    strategy_mode: StrategyMode
    total_trades: int
    winning_trades: int
    losing_trades: int
    total_pnl: float
    win_rate: float
    average_win: float
    average_loss: float
    largest_win: float
    largest_loss: float
    max_drawdown: float
    sharpe_ratio: float
    trades: list[ClosedTrade] = field(default_factory=list)
    equity_curve: list[EquityPoint] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "strategy_mode": self.strategy_mode.value,
            "total_trades": self.total_trades,
            "winning_trades": self.winning_trades,
            "losing_trades": self.losing_trades,
            "total_pnl": self.total_pnl,
            "win_rate": self.win_rate,
            "average_win": self.average_win,
            "average_loss": self.average_loss,
            "largest_win": self.largest_win,
            "largest_loss": self.largest_loss,
            "max_drawdown": self.max_drawdown,
            "sharpe_ratio": self.sharpe_ratio,
            "trades": [t.to_dict() for t in self.trades],
            "equity_curve": [
                {"timestamp": p.timestamp.isoformat(), "equity": p.equity, "drawdown": p.drawdown}
                for p in self.equity_curve
            ],
        }


class BacktestEngine:
    """Replays processed ticks through two signal producers and a position ledger.

    ``run`` builds a fresh ledger and equity tracker each call, so one engine
    can be rerun under different strategy modes. Not safe for concurrent
    ``run`` calls on the same instance because producers keep state.
    """

    def __init__(
        self,
        config: BacktestConfig | None = None,
        producer_a: SignalProducer | None = None,
        producer_b: SignalProducer | None = None,
    ) -> None:
        self._config = config or BacktestConfig()
        self._producer_a = producer_a or RsiThresholdStrategy()
        self._producer_b = producer_b or BollingerBandStrategy()

    @property
    def config(self) -> BacktestConfig:
        return self._config

    @property
    def strategy_mode(self) -> StrategyMode:
        return self._config.strategy_mode

    @strategy_mode.setter
    def strategy_mode(self, mode: StrategyMode | str) -> None:
        self._config = self._config.model_copy(update={"strategy_mode": StrategyMode(mode)})

    def run(
        self,
        ticks: Sequence[ProcessedTick],
        signals_a: Sequence[Signal] | None = None,
        signals_b: Sequence[Signal] | None = None,
        per_tick: bool = False,
    ) -> BacktestResult:
        """Run one backtest over ``ticks``.

        Producer signals are computed in batch ahead of the loop, or one tick
        at a time inside it when ``per_tick`` is set; both give the same
        result. Pre-computed ``signals_a``/``signals_b`` take precedence.

        Raises:
            BacktestError: If a supplied signal batch does not match ``ticks`` in length.
        """
        mode = self.strategy_mode
        signals_a = self._resolve_signals(self._producer_a, ticks, signals_a, "a", per_tick)
        signals_b = self._resolve_signals(self._producer_b, ticks, signals_b, "b", per_tick)

        aggregator = SignalAggregator(mode)
        ledger = PositionLedger(
            position_size=self._config.position_size,
            commission_rate=self._config.commission_rate,
            strategy=mode.value,
        )
        start = ticks[0].timestamp if ticks else _EPOCH
        tracker = EquityTracker(self._config.initial_capital, start)

        for tick, signal_a, signal_b in zip(ticks, signals_a, signals_b):
            decision = aggregator.decide(signal_a, signal_b)
            if decision is not None and not decision.is_hold:
                ledger.apply(decision.type, tick.symbol, tick.price, tick.timestamp)
            tracker.record(tick.timestamp, ledger.unrealized_pnl({tick.symbol: tick.price}))

        result = self._build_result(mode, ledger.trades, tracker)
        logger.info(
            "Backtest [%s]: %d ticks, %d trades, pnl %.2f, win rate %.2f%%, sharpe %.2f",
            mode.value, len(ticks), result.total_trades, result.total_pnl,
            result.win_rate * 100.0, result.sharpe_ratio,
        )
        return result

    def _resolve_signals(
        self,
        producer: SignalProducer,
        ticks: Sequence[ProcessedTick],
        signals: Sequence[Signal] | None,
        label: str,
        per_tick: bool,
    ) -> Iterable[Signal]:
        if signals is None and per_tick:
            producer.reset()
            return (producer.analyze(tick) for tick in ticks)
        if signals is None:
            return producer.analyze_batch(ticks)
        if len(signals) != len(ticks):
            raise BacktestError(
                f"producer {label}: {len(signals)} signals for {len(ticks)} ticks"
            )
        return signals

    def _build_result(
        self,
        mode: StrategyMode,
        trades: list[ClosedTrade],
        tracker: EquityTracker,
    ) -> BacktestResult:
        stats = calculate_trade_stats([t.pnl for t in trades])
        equities = tracker.equities
        return BacktestResult(
            strategy_mode=mode,
            max_drawdown=max_drawdown(equities, self._config.initial_capital),
            sharpe_ratio=sharpe_ratio(equities),
            trades=trades,
            equity_curve=list(tracker.equity_curve),
            **stats,
        )


def format_result(result: BacktestResult, title: str) -> str:
    return "\n".join([
        f"{title} Results:",
        f"Total Trades: {result.total_trades}",
        f"Win Rate: {result.win_rate * 100.0:.2f}%",
        f"Total PnL: ${result.total_pnl:.2f}",
        f"Sharpe Ratio: {result.sharpe_ratio:.2f}",
        f"Max Drawdown: {result.max_drawdown * 100.0:.2f}%",
        f"Average Win: ${result.average_win:.2f}",
        f"Average Loss: ${result.average_loss:.2f}",
        f"Largest Win: ${result.largest_win:.2f}",
        f"Largest Loss: ${result.largest_loss:.2f}",
    ])


def compare_results(first: BacktestResult, second: BacktestResult) -> str:
    """Side-by-side summary of two runs, ``first`` vs ``second``."""
    header = f"Strategy Comparison ({first.strategy_mode.value} vs {second.strategy_mode.value}):"
    return "\n".join([
        header,
        f"Trade Count: {first.total_trades} vs {second.total_trades}",
        f"Win Rate: {first.win_rate * 100.0:.2f}% vs {second.win_rate * 100.0:.2f}%",
        f"Total PnL: ${first.total_pnl:.2f} vs ${second.total_pnl:.2f}",
        f"Sharpe Ratio: {first.sharpe_ratio:.2f} vs {second.sharpe_ratio:.2f}",
        f"Max Drawdown: {first.max_drawdown * 100.0:.2f}% vs {second.max_drawdown * 100.0:.2f}%",
    ])
