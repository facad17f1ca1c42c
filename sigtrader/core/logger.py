"""Logging setup for the backtest runner."""
from __future__ import annotations

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path


_LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


def setup_logging(
    name: str = "sigtrader",
    level: str = "INFO",
    log_dir: str | None = None,
) -> logging.Logger:
    """Configure the package logger.

    Handlers are attached only the first time a given logger is configured,
    so repeated runs in one process do not duplicate output. Calling again
    still updates the level.

    Args:
        name: Logger name, normally the top-level package.
        level: Level name, case-insensitive. Unknown names fall back to INFO.
        log_dir: Directory for a daily-rotated ``<name>.log`` file. Console only when None.
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if logger.handlers:
        return logger

    formatter = logging.Formatter(_LOG_FORMAT)
    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        backtest_log = TimedRotatingFileHandler(
            filename=log_path / f"{name}.log",
            when="midnight",
            backupCount=14,
            encoding="utf-8",
        )
        backtest_log.suffix = "%Y-%m-%d"
        backtest_log.setFormatter(formatter)
        logger.addHandler(backtest_log)

    return logger
