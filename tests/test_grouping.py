"""Property-based tests for the grouping engine and win streaks.

**Feature: trade-analytics**
"""

from datetime import datetime, timedelta, timezone

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.analytics.filters import TradeFilter
from tradejournal.analytics.grouping import (
    current_win_streak,
    group_by,
    max_win_streak,
    partition,
    strategy_patterns,
    top_symbols,
    win_streaks,
)
from tradejournal.models import TimeFrame, Trade, TradeSide

BASE_DATE = datetime(2024, 1, 1, 9, 30)


def trade_strategy():
    """Generate valid Trade objects for testing."""
    prices = st.floats(min_value=0.01, max_value=10000.0, allow_nan=False, allow_infinity=False)
    return st.builds(
        Trade,
        symbol=st.sampled_from(["BTC/USDT", "ETH/USDT", "SOL/USDT"]),
        entry_price=prices,
        exit_price=prices,
        quantity=st.floats(min_value=0.0, max_value=10.0, allow_nan=False, allow_infinity=False),
        side=st.sampled_from(list(TradeSide)),
        date=st.datetimes(min_value=datetime(2020, 1, 1), max_value=datetime(2025, 12, 31)),
        strategy=st.sampled_from(["", "Breakout", "Scalp"]),
        timeframe=st.sampled_from(list(TimeFrame)),
        stop_loss=prices,
        take_profit=prices,
    )


def make_trade(win: bool, day: int, symbol: str = "BTC/USDT", strategy: str = "") -> Trade:
    """A fee-free trade that wins or loses 10, dated BASE_DATE + day."""
    return Trade(
        symbol=symbol,
        entry_price=100,
        exit_price=110 if win else 90,
        quantity=1,
        side=TradeSide.LONG,
        date=BASE_DATE + timedelta(days=day),
        strategy=strategy,
        stop_loss=90,
        take_profit=120,
        fee_rate=0.0,
    )


class TestWinStreaks:
    """Current and max win streaks follow date order."""

    def test_streak_scenario(self):
        # W, W, L, W in date order, supplied shuffled
        trades = [
            make_trade(False, 2),
            make_trade(True, 3),
            make_trade(True, 0),
            make_trade(True, 1),
        ]
        assert max_win_streak(trades) == 2
        assert current_win_streak(trades) == 1
        assert win_streaks(trades) == (1, 2)

    def test_all_wins(self):
        trades = [make_trade(True, d) for d in range(4)]
        assert win_streaks(trades) == (4, 4)

    def test_latest_loss_resets_current(self):
        trades = [make_trade(True, 0), make_trade(True, 1), make_trade(False, 2)]
        assert win_streaks(trades) == (0, 2)

    def test_empty(self):
        assert win_streaks([]) == (0, 0)

    def test_equal_dates_keep_input_order(self):
        loss = make_trade(False, 0)
        win = make_trade(True, 0)

        # loss then win: the win is the most recent trade
        assert current_win_streak([loss, win]) == 1
        assert max_win_streak([loss, win]) == 1

        # win then loss: the loss is the most recent trade
        assert current_win_streak([win, loss]) == 0
        assert max_win_streak([win, loss]) == 1

    def test_mixed_naive_and_aware_dates(self):
        early = make_trade(False, 0)
        late = Trade(
            symbol="BTC/USDT",
            entry_price=100,
            exit_price=110,
            quantity=1,
            side=TradeSide.LONG,
            date=datetime(2024, 6, 1, tzinfo=timezone.utc),
            stop_loss=90,
            take_profit=120,
            fee_rate=0.0,
        )
        assert win_streaks([late, early]) == (1, 1)

        stats = group_by([late, early], "symbol")
        assert stats["BTC/USDT"].trade_count == 2
        assert [s.key for s in top_symbols([late, early])] == ["BTC/USDT"]

    @given(trades=st.lists(trade_strategy(), min_size=0, max_size=30))
    @settings(max_examples=100)
    def test_current_never_exceeds_max(self, trades: list[Trade]):
        current, best = win_streaks(trades)
        wins = sum(1 for t in trades if t.is_win)
        assert 0 <= current <= best <= wins


class TestGroupBy:
    """
    **Feature: trade-analytics, Property: Group Partition**

    *For any* set of trades, group counts sum to the trade count and no
    group is empty.
    """

    @given(trades=st.lists(trade_strategy(), min_size=0, max_size=30))
    @settings(max_examples=100)
    def test_counts_partition_trades(self, trades: list[Trade]):
        for key in ("symbol", "strategy", "timeframe"):
            stats = group_by(trades, key)
            assert sum(s.trade_count for s in stats.values()) == len(trades)
            assert all(s.trade_count >= 1 for s in stats.values())
            assert all(0 <= s.win_rate <= 100 for s in stats.values())

    def test_group_statistics(self):
        trades = [
            make_trade(True, 0, symbol="BTC/USDT"),
            make_trade(False, 1, symbol="BTC/USDT"),
            make_trade(True, 2, symbol="ETH/USDT"),
        ]
        stats = group_by(trades, "symbol")
        assert list(stats) == ["BTC/USDT", "ETH/USDT"]

        btc = stats["BTC/USDT"]
        assert btc.key == "BTC/USDT"
        assert btc.trade_count == 2
        assert btc.win_rate == pytest.approx(50.0)
        assert btc.total_profit_loss == pytest.approx(0.0)
        assert btc.average_profit == pytest.approx(0.0)
        assert (btc.current_win_streak, btc.max_win_streak) == (0, 1)

    def test_key_function(self):
        trades = [make_trade(True, 0), make_trade(False, 1), make_trade(True, 2)]
        stats = group_by(trades, lambda t: t.is_win)
        assert stats[True].trade_count == 2
        assert stats[False].trade_count == 1

    def test_timeframe_key_uses_enum(self):
        stats = group_by([make_trade(True, 0)], "timeframe")
        assert list(stats) == [TimeFrame.H1]

    def test_invalid_key(self):
        with pytest.raises(ValueError):
            group_by([make_trade(True, 0)], "emotions")

    def test_group_emptied_by_filter_is_omitted(self):
        trades = [
            make_trade(True, 0, strategy="Breakout"),
            make_trade(False, 1, strategy="Breakout"),
            make_trade(True, 2, strategy="Scalp"),
        ]
        assert list(group_by(trades, "strategy")) == ["Breakout", "Scalp"]

        filtered = TradeFilter(strategy="Scalp").apply(trades)
        stats = group_by(filtered, "strategy")
        assert list(stats) == ["Scalp"]
        assert stats["Scalp"].trade_count == 1

    def test_empty(self):
        assert group_by([], "symbol") == {}
        assert partition([], "strategy") == {}


class TestTopSymbols:
    """Top symbols are ranked by trade count, ties in first-seen order."""

    def test_ranking_and_ties(self):
        trades = [
            make_trade(True, 0, symbol="SOL/USDT"),
            make_trade(True, 1, symbol="ETH/USDT"),
            make_trade(True, 2, symbol="BTC/USDT"),
            make_trade(True, 3, symbol="BTC/USDT"),
        ]
        ranked = top_symbols(trades)
        assert [s.key for s in ranked] == ["BTC/USDT", "SOL/USDT", "ETH/USDT"]

    def test_limit(self):
        trades = [make_trade(True, i, symbol=f"COIN{i}/USDT") for i in range(15)]
        assert len(top_symbols(trades)) == 10
        assert len(top_symbols(trades, n=3)) == 3

    def test_empty(self):
        assert top_symbols([]) == []


class TestStrategyPatterns:
    """Strategy groups are ordered by win rate descending."""

    def test_ordered_by_win_rate(self):
        trades = [
            make_trade(False, 0, strategy="Scalp"),
            make_trade(True, 1, strategy="Scalp"),
            make_trade(True, 2, strategy="Breakout"),
            make_trade(False, 3, strategy="Fade"),
        ]
        patterns = strategy_patterns(trades)
        assert [p.key for p in patterns] == ["Breakout", "Scalp", "Fade"]
        assert [p.win_rate for p in patterns] == pytest.approx([100.0, 50.0, 0.0])

    def test_empty(self):
        assert strategy_patterns([]) == []
