from sigtrader.strategy.aggregator import SignalAggregator
from sigtrader.strategy.base import SignalProducer
from sigtrader.strategy.bollinger import BollingerBandStrategy
from sigtrader.strategy.rsi_threshold import RsiThresholdStrategy

__all__ = [
    "SignalAggregator",
    "SignalProducer",
    "BollingerBandStrategy",
    "RsiThresholdStrategy",
]
