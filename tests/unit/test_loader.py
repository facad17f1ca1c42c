from datetime import datetime, timezone

import pytest

from sigtrader.core.exceptions import DataError
from sigtrader.data.loader import load_ticks


def _write(tmp_path, content: str, name: str = "ticks.csv"):
    path = tmp_path / name
    path.write_text(content.strip() + "\n")
    return path


class TestLoadTicks:
    def test_full_columns(self, tmp_path):
        path = _write(tmp_path, """
timestamp,price,volume,high,low
2026-01-01T00:00:00Z,100.5,1200,101.0,99.0
2026-01-02T00:00:00Z,102.0,800,103.5,100.0
""")
        ticks = load_ticks(path, "SOL")
        assert len(ticks) == 2
        assert ticks[0].symbol == "SOL"
        assert ticks[0].timestamp == datetime(2026, 1, 1, tzinfo=timezone.utc)
        assert ticks[0].price == 100.5
        assert ticks[0].volume == 1200.0
        assert ticks[1].high == 103.5
        assert ticks[1].low == 100.0

    def test_optional_columns_default(self, tmp_path):
        path = _write(tmp_path, """
timestamp,price
2026-01-01,10.0
""")
        tick = load_ticks(path, "SOL")[0]
        assert tick.volume == 0.0
        assert tick.high == 10.0
        assert tick.low == 10.0

    def test_header_case_and_spaces(self, tmp_path):
        path = _write(tmp_path, """
Timestamp, Price
2026-01-01,10.0
""")
        assert load_ticks(path, "SOL")[0].price == 10.0

    def test_symbol_filter(self, tmp_path):
        path = _write(tmp_path, """
timestamp,symbol,price
2026-01-01,SOL,10.0
2026-01-01,BTC,50000.0
2026-01-02,SOL,11.0
""")
        ticks = load_ticks(path, "SOL")
        assert [t.price for t in ticks] == [10.0, 11.0]

    def test_no_rows_for_symbol(self, tmp_path):
        path = _write(tmp_path, """
timestamp,symbol,price
2026-01-01,BTC,50000.0
""")
        assert load_ticks(path, "SOL") == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(DataError):
            load_ticks(tmp_path / "missing.csv", "SOL")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text("")
        with pytest.raises(DataError, match="unreadable"):
            load_ticks(path, "SOL")

    def test_ragged_rows(self, tmp_path):
        path = _write(tmp_path, """
timestamp,price
2026-01-01,10.0
2026-01-02,11.0,5,6
""")
        with pytest.raises(DataError, match="unreadable"):
            load_ticks(path, "SOL")

    def test_missing_price_column(self, tmp_path):
        path = _write(tmp_path, """
timestamp,volume
2026-01-01,10
""")
        with pytest.raises(DataError, match="price"):
            load_ticks(path, "SOL")

    @pytest.mark.parametrize("bad_price", ["0", "-5.0", "abc"])
    def test_non_positive_price(self, tmp_path, bad_price):
        path = _write(tmp_path, f"""
timestamp,price
2026-01-01,10.0
2026-01-02,{bad_price}
""")
        with pytest.raises(DataError, match="positive"):
            load_ticks(path, "SOL")

    def test_decreasing_timestamps(self, tmp_path):
        path = _write(tmp_path, """
timestamp,price
2026-01-02,10.0
2026-01-01,11.0
""")
        with pytest.raises(DataError, match="non-decreasing"):
            load_ticks(path, "SOL")

    def test_equal_timestamps_allowed(self, tmp_path):
        path = _write(tmp_path, """
timestamp,price
2026-01-01,10.0
2026-01-01,11.0
""")
        assert len(load_ticks(path, "SOL")) == 2
