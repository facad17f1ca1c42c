from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

import yaml
from dotenv import load_dotenv

from sigtrader.backtest.engine import BacktestEngine, BacktestResult, compare_results, format_result
from sigtrader.core.config import Settings, load_settings
from sigtrader.core.exceptions import SigTraderError
from sigtrader.core.logger import setup_logging
from sigtrader.core.types import ProcessedTick, StrategyMode
from sigtrader.data.loader import load_ticks
from sigtrader.indicators.processor import IndicatorProcessor
from sigtrader.strategy.bollinger import BollingerBandStrategy
from sigtrader.strategy.rsi_threshold import RsiThresholdStrategy

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = Path("config/default.yaml")

_TITLES = {
    StrategyMode.SINGLE_A: "RSI Strategy",
    StrategyMode.SINGLE_B: "Bollinger Bands Strategy",
    StrategyMode.COMBINED: "Combined Strategy",
}


def resolve_settings(config_path: str | None) -> Settings:
    """Settings from ``--config``, else $SIGTRADER_CONFIG, else the default file if present."""
    path = config_path or os.environ.get("SIGTRADER_CONFIG")
    if path:
        return load_settings(path)
    if _DEFAULT_CONFIG.exists():
        return load_settings(_DEFAULT_CONFIG)
    return Settings()


def build_engine(settings: Settings) -> BacktestEngine:
    return BacktestEngine(
        config=settings.backtest,
        producer_a=RsiThresholdStrategy(
            oversold=settings.rsi.oversold,
            overbought=settings.rsi.overbought,
        ),
        producer_b=BollingerBandStrategy(
            period=settings.bollinger.period,
            num_std=settings.bollinger.num_std,
        ),
    )


def format_market_status(tick: ProcessedTick) -> str:
    """Snapshot of the latest processed tick; indicators still warming up are omitted."""
    lines = [
        "Current Market Status:",
        f"Time: {tick.timestamp.isoformat()}",
        f"Symbol: {tick.symbol}",
        f"Price: ${tick.price:.4f}",
        f"Volume: {tick.tick.volume:.2f}",
    ]
    if tick.rsi_14 is not None:
        lines.append(f"RSI (14): {tick.rsi_14:.2f}")
    if tick.moving_average_20 is not None:
        lines.append(f"MA (20): ${tick.moving_average_20:.4f}")
    if tick.volatility is not None:
        lines.append(f"Volatility: {tick.volatility:.4f}")
    return "\n".join(lines)


def run_backtests(
    settings: Settings,
    ticks_path: Path | str,
    modes: list[StrategyMode],
) -> dict[StrategyMode, BacktestResult]:
    ticks = load_ticks(ticks_path, settings.symbol)
    processor = IndicatorProcessor(
        capacity=settings.indicators.history_capacity,
        outlier_threshold=settings.indicators.outlier_threshold,
    )
    processed = processor.process_batch(ticks)
    if processed:
        logger.info("\n%s", format_market_status(processed[-1]))

    engine = build_engine(settings)
    results: dict[StrategyMode, BacktestResult] = {}
    for mode in modes:
        engine.strategy_mode = mode
        results[mode] = engine.run(processed)
        logger.info("\n%s", format_result(results[mode], _TITLES[mode]))

    combined = results.get(StrategyMode.COMBINED)
    if combined is not None:
        for mode in (StrategyMode.SINGLE_A, StrategyMode.SINGLE_B):
            if mode in results:
                logger.info("\n%s", compare_results(results[mode], combined))
    return results


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="sigtrader",
        description="Backtest RSI and Bollinger band signals on historical ticks",
    )
    parser.add_argument("ticks", help="CSV file with timestamp,price[,volume,high,low,symbol] columns")
    parser.add_argument("--config", help="YAML settings file")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in StrategyMode] + ["all"],
        default="all",
        help="Strategy mode to run (default: all)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = _parse_args(argv)

    try:
        settings = resolve_settings(args.config)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as exc:
        setup_logging("sigtrader")
        logger.error("Invalid configuration: %s", exc)
        return 1

    setup_logging("sigtrader", level=settings.system.log_level, log_dir=settings.system.log_dir)
    modes = list(StrategyMode) if args.mode == "all" else [StrategyMode(args.mode)]

    try:
        run_backtests(settings, args.ticks, modes)
    except SigTraderError as exc:
        logger.error("Backtest failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
