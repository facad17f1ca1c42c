from __future__ import annotations

import math

TRADING_DAYS_PER_YEAR = 252
RISK_FREE_RATE = 0.02


def calculate_trade_stats(trade_pnls: list[float]) -> dict:
    """Win/loss breakdown of realized trade PnLs.

    A trade wins only when its PnL is strictly positive; zero counts as a loss.
    ``largest_loss`` is the most negative PnL, or 0.0 when no loss was below 0.
    """
    wins = [p for p in trade_pnls if p > 0]
    losses = [p for p in trade_pnls if p <= 0]
    total = len(trade_pnls)

    return {
        "total_trades": total,
        "winning_trades": len(wins),
        "losing_trades": len(losses),
        "total_pnl": math.fsum(trade_pnls),
        "win_rate": len(wins) / total if total else 0.0,
        "average_win": sum(wins) / len(wins) if wins else 0.0,
        "average_loss": sum(losses) / len(losses) if losses else 0.0,
        "largest_win": max(wins, default=0.0),
        "largest_loss": min(min(losses, default=0.0), 0.0),
    }


def max_drawdown(equities: list[float], initial_equity: float) -> float:
    """Largest decline from the running peak, as a fraction of that peak."""
    peak = initial_equity
    max_dd = 0.0
    for equity in equities:
        if equity > peak:
            peak = equity
        dd = (peak - equity) / peak if peak > 0 else 0.0
        if dd > max_dd:
            max_dd = dd
    return max_dd


def period_returns(equities: list[float]) -> list[float]:
    return [
        (curr - prev) / prev if prev != 0 else 0.0
        for prev, curr in zip(equities, equities[1:])
    ]


def sharpe_ratio(
    equities: list[float],
    periods_per_year: int = TRADING_DAYS_PER_YEAR,
    risk_free_rate: float = RISK_FREE_RATE,
) -> float:
    """Annualized Sharpe ratio of period-over-period equity returns.

    Uses the population standard deviation. 0.0 when there are no returns
    or the returns do not vary.
    """
    returns = period_returns(equities)
    if not returns:
        return 0.0

    mean = sum(returns) / len(returns)
    variance = sum((r - mean) ** 2 for r in returns) / len(returns)
    annualized_std = math.sqrt(variance) * math.sqrt(periods_per_year)
    if annualized_std == 0:
        return 0.0
    return (mean * periods_per_year - risk_free_rate) / annualized_std
