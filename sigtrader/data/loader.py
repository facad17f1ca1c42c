"""Load historical ticks from CSV files."""
from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from sigtrader.core.exceptions import DataError
from sigtrader.core.types import Tick

logger = logging.getLogger(__name__)

_REQUIRED_COLUMNS = ["timestamp", "price"]
_OPTIONAL_COLUMNS = ["volume", "high", "low"]


def load_ticks(path: Path | str, symbol: str) -> list[Tick]:
    """Read a tick CSV into time-ordered Ticks for one instrument.

    Required columns are ``timestamp`` and ``price``. ``volume`` defaults to
    0.0 and ``high``/``low`` to the price when absent. A ``symbol`` column,
    when present, is used to keep only rows for ``symbol``. Timestamps are
    parsed as UTC.

    Raises:
        DataError: If the file is missing or unreadable, a required column is absent,
            a price is not positive, or timestamps go backwards.
    """
    csv_path = Path(path)
    source = str(csv_path)
    if not csv_path.exists():
        raise DataError(source, "file not found")

    try:
        df = pd.read_csv(csv_path)
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as exc:
        raise DataError(source, f"unreadable CSV: {exc}") from exc
    df.columns = [c.strip().lower() for c in df.columns]

    missing = [c for c in _REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise DataError(source, f"missing columns: {', '.join(missing)}")

    if "symbol" in df.columns:
        df = df[df["symbol"].astype(str) == symbol]

    if df.empty:
        logger.warning("No ticks for %s in %s", symbol, source)
        return []

    df = df.copy()
    try:
        df["timestamp"] = pd.to_datetime(df["timestamp"], utc=True)
    except (ValueError, TypeError) as exc:
        raise DataError(source, f"unparseable timestamp: {exc}") from exc
    df["price"] = pd.to_numeric(df["price"], errors="coerce")

    if df["price"].isna().any() or (df["price"] <= 0).any():
        raise DataError(source, "prices must be positive numbers")
    if not df["timestamp"].is_monotonic_increasing:
        raise DataError(source, "timestamps must be non-decreasing")

    df["volume"] = df["volume"].astype(float) if "volume" in df.columns else 0.0
    for col in ("high", "low"):
        if col not in df.columns:
            df[col] = df["price"]

    ticks = [
        Tick(
            symbol=symbol,
            timestamp=row.timestamp.to_pydatetime(),
            price=float(row.price),
            volume=float(row.volume),
            high=float(row.high),
            low=float(row.low),
        )
        for row in df[["timestamp", "price"] + _OPTIONAL_COLUMNS].itertuples(index=False)
    ]
    logger.info("Loaded %d ticks for %s from %s", len(ticks), symbol, source)
    return ticks
