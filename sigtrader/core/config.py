"""Core configuration management module."""
from __future__ import annotations

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from sigtrader.core.types import StrategyMode


class SystemConfig(BaseModel):
    """System-level configuration."""

    model_config = ConfigDict(use_enum_values=True)

    name: str = "SigTrader"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_dir: str | None = None


class BacktestConfig(BaseModel):
    """Capital, sizing and signal-combination settings for one engine."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    initial_capital: float = 10_000.0
    position_size: float = 500.0
    commission_rate: float = 0.001
    strategy_mode: StrategyMode = StrategyMode.COMBINED

    @field_validator("initial_capital", "position_size")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        """Validate that capital and trade size are positive."""
        if not v > 0:
            raise ValueError("initial_capital and position_size must be positive")
        return v

    @field_validator("commission_rate")
    @classmethod
    def validate_commission(cls, v: float) -> float:
        """Validate that the commission rate is not negative."""
        if not v >= 0:
            raise ValueError("commission_rate must not be negative")
        return v


class IndicatorConfig(BaseModel):
    """Rolling indicator window configuration."""

    model_config = ConfigDict(use_enum_values=True)

    history_capacity: int = 500
    outlier_threshold: float = 4.0

    @field_validator("history_capacity")
    @classmethod
    def validate_capacity(cls, v: int) -> int:
        """Validate that history_capacity is positive."""
        if v <= 0:
            raise ValueError("history_capacity must be positive")
        return v

    @field_validator("outlier_threshold")
    @classmethod
    def validate_threshold(cls, v: float) -> float:
        if not v > 0:
            raise ValueError("outlier_threshold must be positive")
        return v


class RsiStrategyConfig(BaseModel):
    """RSI threshold producer configuration."""

    model_config = ConfigDict(use_enum_values=True)

    oversold: float = 40.0
    overbought: float = 60.0

    @field_validator("oversold", "overbought")
    @classmethod
    def validate_bounds(cls, v: float) -> float:
        """Validate that thresholds lie on the RSI scale."""
        if not 0 <= v <= 100:
            raise ValueError("RSI thresholds must be between 0 and 100")
        return v

    @model_validator(mode="after")
    def validate_order(self) -> RsiStrategyConfig:
        if self.oversold >= self.overbought:
            raise ValueError("oversold must be below overbought")
        return self


class BollingerStrategyConfig(BaseModel):
    """Bollinger band producer configuration."""

    model_config = ConfigDict(use_enum_values=True)

    period: int = 20
    num_std: float = 1.8

    @field_validator("period")
    @classmethod
    def validate_period(cls, v: int) -> int:
        if v < 2:
            raise ValueError("period must be at least 2")
        return v

    @field_validator("num_std")
    @classmethod
    def validate_num_std(cls, v: float) -> float:
        if not v > 0:
            raise ValueError("num_std must be positive")
        return v


class Settings(BaseModel):
    """Root settings configuration."""

    model_config = ConfigDict(use_enum_values=True)

    system: SystemConfig = SystemConfig()
    backtest: BacktestConfig = BacktestConfig()
    indicators: IndicatorConfig = IndicatorConfig()
    rsi: RsiStrategyConfig = RsiStrategyConfig()
    bollinger: BollingerStrategyConfig = BollingerStrategyConfig()
    symbol: str = "SOL"

    @field_validator("symbol")
    @classmethod
    def validate_symbol(cls, v: str) -> str:
        """Validate that the instrument symbol is a non-empty string."""
        if not v.strip():
            raise ValueError("symbol must be a non-empty string")
        return v.strip()


def load_settings(path: Path | str) -> Settings:
    """Load settings from a YAML configuration file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Settings instance with loaded configuration.

    Raises:
        FileNotFoundError: If configuration file does not exist.
        yaml.YAMLError: If YAML is invalid.
        ValueError: If configuration is invalid.
    """
    config_path = Path(path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        raw_config = yaml.safe_load(f)

    if raw_config is None:
        raw_config = {}

    return Settings.model_validate(raw_config)
