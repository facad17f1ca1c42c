import math
from collections import deque

import pytest

from sigtrader.indicators.builtin.momentum import SmoothedRSI
from sigtrader.indicators.builtin.moving_average import SMA
from sigtrader.indicators.builtin.volatility import BollingerBands, OutlierDetector, Volatility


def _prices(values: list[float]) -> deque[float]:
    return deque(values)


class TestSMA:
    def test_sma_basic(self):
        sma = SMA(period=3)
        assert sma.calculate(_prices([10.0, 20.0, 30.0])) == pytest.approx(20.0)

    def test_sma_uses_most_recent(self):
        sma = SMA(period=5)
        assert sma.calculate(_prices([10.0, 11.0, 12.0, 13.0, 14.0, 15.0])) == pytest.approx(13.0)

    def test_sma_warmup(self):
        sma = SMA(period=5)
        assert sma.warmup_period == 5
        assert sma.calculate(_prices([10.0, 20.0])) is None


class TestSmoothedRSI:
    def test_warmup(self):
        rsi = SmoothedRSI(period=14)
        assert rsi.warmup_period == 15
        assert rsi.calculate(_prices([100.0] * 14)) is None
        assert rsi.calculate(_prices([100.0] * 15)) is not None

    def test_all_gains(self):
        rsi = SmoothedRSI(period=14)
        assert rsi.calculate(_prices([float(i) for i in range(1, 20)])) == 100.0

    def test_all_losses(self):
        rsi = SmoothedRSI(period=14)
        assert rsi.calculate(_prices([float(i) for i in range(20, 0, -1)])) == pytest.approx(0.0)

    def test_flat_prices_read_as_no_loss(self):
        rsi = SmoothedRSI(period=14)
        assert rsi.calculate(_prices([50.0] * 15)) == 100.0

    def test_seeded_with_oldest_change(self):
        # changes: +1, -1, then twelve zeros
        rsi = SmoothedRSI(period=14)
        prices = [100.0, 101.0] + [100.0] * 13
        alpha = 2.0 / 15.0
        avg_gain = (1 - alpha) ** 13
        avg_loss = alpha * (1 - alpha) ** 12
        expected = 100.0 - 100.0 / (1.0 + avg_gain / avg_loss)
        assert rsi.calculate(_prices(prices)) == pytest.approx(expected)
        assert expected == pytest.approx(100.0 - 100.0 / 7.5)

    def test_only_last_window_counts(self):
        # One more flat price pushes the +1 change out of the window.
        rsi = SmoothedRSI(period=14)
        prices = [100.0, 101.0] + [100.0] * 14
        assert rsi.calculate(_prices(prices)) == pytest.approx(0.0)

    def test_bounded(self):
        rsi = SmoothedRSI(period=14)
        prices = [100.0 + 5 * math.sin(i) for i in range(40)]
        value = rsi.calculate(_prices(prices))
        assert 0.0 <= value <= 100.0


class TestVolatility:
    def test_sample_std_dev(self):
        vol = Volatility(period=20)
        prices = [float(i) for i in range(1, 21)]
        assert vol.calculate(_prices(prices)) == pytest.approx(math.sqrt(35.0))

    def test_uses_last_twenty(self):
        vol = Volatility(period=20)
        prices = [1000.0] * 5 + [float(i) for i in range(1, 21)]
        assert vol.calculate(_prices(prices)) == pytest.approx(math.sqrt(35.0))

    def test_warmup(self):
        vol = Volatility(period=20)
        assert vol.calculate(_prices([1.0] * 19)) is None


class TestOutlierDetector:
    def test_needs_min_history(self):
        detector = OutlierDetector(Volatility(period=20))
        assert detector.is_outlier(500.0, _prices([100.0, 100.0, 500.0])) is False

    def test_undefined_volatility_is_not_outlier(self):
        detector = OutlierDetector(Volatility(period=20))
        assert detector.is_outlier(150.0, _prices([100.0, 101.0, 99.0, 100.5, 150.0])) is False

    def test_spike_flagged(self):
        detector = OutlierDetector(Volatility(period=20))
        prices = [100.0] * 19 + [200.0]
        # z = 95 / sqrt(500), just above 4
        assert detector.is_outlier(200.0, _prices(prices)) is True

    def test_higher_threshold_not_flagged(self):
        detector = OutlierDetector(Volatility(period=20), threshold=5.0)
        prices = [100.0] * 19 + [200.0]
        assert detector.is_outlier(200.0, _prices(prices)) is False

    def test_zero_volatility_is_not_outlier(self):
        detector = OutlierDetector(Volatility(period=20))
        assert detector.is_outlier(100.0, _prices([100.0] * 25)) is False


class TestBollingerBands:
    def test_bands(self):
        bb = BollingerBands(period=4, num_std=2.0)
        result = bb.calculate(_prices([1.0, 2.0, 3.0, 4.0]))
        std = math.sqrt(1.25)
        assert result["middle"] == pytest.approx(2.5)
        assert result["upper"] == pytest.approx(2.5 + 2 * std)
        assert result["lower"] == pytest.approx(2.5 - 2 * std)

    def test_flat_window(self):
        bb = BollingerBands(period=3)
        result = bb.calculate(_prices([5.0, 5.0, 5.0]))
        assert result["upper"] == result["lower"] == 5.0
        assert set(result) == {"upper", "middle", "lower"}

    def test_warmup(self):
        assert BollingerBands(period=20).calculate(_prices([1.0] * 19)) is None
