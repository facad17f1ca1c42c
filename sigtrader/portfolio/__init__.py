from sigtrader.portfolio.performance import calculate_trade_stats, max_drawdown, sharpe_ratio
from sigtrader.portfolio.tracker import EquityTracker

__all__ = ["EquityTracker", "calculate_trade_stats", "max_drawdown", "sharpe_ratio"]
