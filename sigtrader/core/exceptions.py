"""Core exception hierarchy for SigTrader.

This module defines the exceptions raised by the backtesting engine and its
collaborators (configuration, data loading, signal producers).
"""


class SigTraderError(Exception):
    """Base exception class for all SigTrader errors.

    All SigTrader-specific exceptions inherit from this class,
    allowing callers to catch all framework errors with a single except clause.
    """


class ConfigError(SigTraderError):
    """Configuration-related errors.

    Raised when a configuration file or a constructor argument is invalid,
    before any backtest run starts.
    """


class DataError(SigTraderError):
    """Tick data loading and validation errors.

    Attributes:
        source: Where the offending data came from (file path or label).
        reason: Detailed reason for the failure.
    """

    def __init__(self, source: str, reason: str):
        """Initialize DataError with source and reason details.

        Args:
            source: File path or other identifier of the data source.
            reason: Description of what is wrong with the data.
        """
        super().__init__(f"[{source}] Data error: {reason}")
        self.source = source
        self.reason = reason


class StrategyError(SigTraderError):
    """Signal producer errors.

    Raised when a producer is misconfigured or violates its contract.
    """


class BacktestError(SigTraderError):
    """Backtest execution errors.

    Raised when the inputs handed to a run are inconsistent with each other,
    e.g. a pre-computed signal batch whose length differs from the tick sequence.
    """
