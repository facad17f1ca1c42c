from sigtrader.indicators.builtin.momentum import SmoothedRSI
from sigtrader.indicators.builtin.moving_average import SMA
from sigtrader.indicators.builtin.volatility import BollingerBands, OutlierDetector, Volatility

__all__ = ["SMA", "SmoothedRSI", "Volatility", "OutlierDetector", "BollingerBands"]
