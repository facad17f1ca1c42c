from sigtrader.indicators.processor import IndicatorProcessor

__all__ = ["IndicatorProcessor"]
