from sigtrader.backtest.engine import BacktestEngine, BacktestResult, compare_results, format_result
from sigtrader.backtest.ledger import PositionLedger

__all__ = ["BacktestEngine", "BacktestResult", "PositionLedger", "compare_results", "format_result"]
