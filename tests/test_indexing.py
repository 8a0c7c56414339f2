"""Tests for stock_simulation.simulation.indexing."""

from datetime import date

import pytest

from stock_simulation.simulation.indexing import TradingWindow, build_trading_window

DAYS = [date(2024, 1, d) for d in (2, 3, 4, 5, 8)]


class TestBuildTradingWindow:
    def test_takes_most_recent_dates(self) -> None:
        window = build_trading_window(DAYS, 3)
        assert window.dates == (date(2024, 1, 8), date(2024, 1, 5), date(2024, 1, 4))

    def test_ranks_are_positions(self) -> None:
        window = build_trading_window(DAYS, 5)
        assert [window.rank(d) for d in window] == [0, 1, 2, 3, 4]
        assert window.rank(date(2024, 1, 8)) == 0

    def test_shrinks_when_not_enough_dates(self) -> None:
        window = build_trading_window(DAYS[:2], 10)
        assert len(window) == 2

    def test_duplicates_are_collapsed(self) -> None:
        window = build_trading_window(DAYS + DAYS, 10)
        assert len(window) == len(DAYS)

    def test_invalid_size(self) -> None:
        with pytest.raises(ValueError):
            build_trading_window(DAYS, 0)

    def test_rank_outside_window(self) -> None:
        window = build_trading_window(DAYS, 2)
        with pytest.raises(KeyError):
            window.rank(date(2024, 1, 2))


class TestTradingWindow:
    def test_target_date_is_next_older_date(self) -> None:
        window = build_trading_window(DAYS, 5)
        assert window.target_date(date(2024, 1, 8)) == date(2024, 1, 5)
        assert window.target_date(date(2024, 1, 3)) == date(2024, 1, 2)

    def test_floor_has_no_target(self) -> None:
        window = build_trading_window(DAYS, 3)
        assert window.floor == date(2024, 1, 4)
        assert window.target_date(window.floor) is None

    def test_start_and_end(self) -> None:
        window = build_trading_window(DAYS, 5)
        assert window.start == date(2024, 1, 2)
        assert window.end == date(2024, 1, 8)

    def test_empty_window(self) -> None:
        window = TradingWindow()
        assert len(window) == 0
        assert window.floor is None
        assert window.end is None

    def test_rejects_unsorted_dates(self) -> None:
        with pytest.raises(ValueError):
            TradingWindow((date(2024, 1, 2), date(2024, 1, 3)))
        with pytest.raises(ValueError):
            TradingWindow((date(2024, 1, 3), date(2024, 1, 3)))

    def test_rank_map_is_read_only(self) -> None:
        window = build_trading_window(DAYS, 3)
        with pytest.raises(TypeError):
            window.ranks[date(2024, 1, 2)] = 9  # type: ignore[index]
