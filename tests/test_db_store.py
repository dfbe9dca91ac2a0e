"""Property-based tests for the database store.

**Feature: trade-journal**
"""

import sqlite3
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path
from uuid import uuid4

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.db import DEFAULT_PAGE_SIZE, DataStore, TradeRepository
from tradejournal.models import (
    ConfidenceLevel,
    MarketCondition,
    SetupQuality,
    TimeFrame,
    Trade,
    TradeSide,
)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / "test.db"
        yield DataStore(db_path)


def trade_strategy():
    """Generate valid Trade objects for testing."""
    prices = st.floats(min_value=0.01, max_value=100000.0, allow_nan=False, allow_infinity=False)
    labels = st.text(
        alphabet=st.characters(blacklist_categories=("Cc", "Cs")), min_size=0, max_size=30
    )
    return st.builds(
        Trade,
        symbol=st.sampled_from(["BTC/USDT", "ETH/USDT", "SOL/USDT"]),
        entry_price=prices,
        exit_price=prices,
        quantity=st.floats(min_value=0.0, max_value=100.0, allow_nan=False, allow_infinity=False),
        side=st.sampled_from(list(TradeSide)),
        date=st.datetimes(min_value=datetime(2020, 1, 1), max_value=datetime(2025, 12, 31)),
        notes=labels,
        strategy=labels,
        emotions=labels,
        timeframe=st.sampled_from(list(TimeFrame)),
        stop_loss=prices,
        take_profit=prices,
        fee_rate=st.floats(min_value=0.0, max_value=1.0, allow_nan=False, allow_infinity=False),
        leverage=st.floats(min_value=1.0, max_value=50.0, allow_nan=False, allow_infinity=False),
        confidence=st.sampled_from(list(ConfidenceLevel)),
        setup_quality=st.sampled_from(list(SetupQuality)),
        market_condition=st.sampled_from(list(MarketCondition)),
    )


def make_trade(symbol: str = "BTC/USDT", date: datetime = datetime(2024, 1, 1)) -> Trade:
    return Trade(
        symbol=symbol,
        entry_price=100,
        exit_price=110,
        quantity=1,
        side=TradeSide.LONG,
        date=date,
        stop_loss=90,
        take_profit=120,
    )


class TestDatabaseSchemaCompleteness:
    """
    **Feature: trade-journal, Property: Database Schema Completeness**

    *For any* fresh database, all required tables should exist.
    """

    def test_schema_completeness(self, temp_db: DataStore):
        """Test that all required tables exist in a fresh database."""
        tables = temp_db.get_tables()
        for table in DataStore.REQUIRED_TABLES:
            assert table in tables, f"Required table '{table}' is missing"

    def test_is_a_repository(self, temp_db: DataStore):
        assert isinstance(temp_db, TradeRepository)

    def test_creates_parent_directory(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            db_path = Path(tmpdir) / "nested" / "dir" / "test.db"
            DataStore(db_path)
            assert db_path.exists()

    def test_reopen_keeps_trades(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            db_path = Path(tmpdir) / "test.db"
            trade = make_trade()
            DataStore(db_path).save_trade(trade)
            assert DataStore(db_path).get_trade(trade.id) is not None


class TestTradeRoundTrip:
    """
    **Feature: trade-journal, Property: Trade Persistence**

    *For any* trade, saving and loading it yields the same field values.
    """

    @given(trade=trade_strategy())
    @settings(max_examples=50)
    def test_save_and_load(self, trade: Trade):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = DataStore(Path(tmpdir) / "test.db")
            store.save_trade(trade)

            loaded = store.get_trade(trade.id)
            assert loaded is not None
            assert loaded.model_dump() == trade.model_dump()
            assert loaded.profit_loss == trade.profit_loss


class TestTradeOperations:
    """Save, query and delete behavior."""

    def test_get_missing_trade(self, temp_db: DataStore):
        assert temp_db.get_trade(uuid4()) is None

    def test_save_replaces_same_id(self, temp_db: DataStore):
        trade = make_trade()
        temp_db.save_trade(trade)
        updated = trade.model_copy(update={"exit_price": 130.0})
        temp_db.save_trade(updated)

        assert temp_db.count_trades() == 1
        assert temp_db.get_trade(trade.id).exit_price == 130.0

    def test_get_trades_newest_first(self, temp_db: DataStore):
        base = datetime(2024, 1, 1)
        trades = [make_trade(date=base + timedelta(days=d)) for d in (3, 0, 5, 1)]
        temp_db.save_trades(trades)

        dates = [t.date for t in temp_db.get_trades()]
        assert dates == sorted(dates, reverse=True)

    def test_newest_first_across_offsets(self, temp_db: DataStore):
        utc_morning = make_trade(date=datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc))
        # 08:00 at UTC-5 is 13:00 UTC, later than utc_morning despite sorting first as text
        new_york = make_trade(
            date=datetime(2024, 1, 1, 8, 0, tzinfo=timezone(timedelta(hours=-5)))
        )
        naive_old = make_trade(date=datetime(2023, 12, 1))
        temp_db.save_trades([utc_morning, naive_old, new_york])

        assert temp_db.get_trades() == [new_york, utc_morning, naive_old]
        assert temp_db.get_trades(limit=1, offset=1) == [utc_morning]
        assert temp_db.get_trades_by_symbol("BTC/USDT") == [new_york, utc_morning, naive_old]

    def test_paging(self, temp_db: DataStore):
        base = datetime(2024, 1, 1)
        temp_db.save_trades([make_trade(date=base + timedelta(days=d)) for d in range(5)])

        first = temp_db.get_trades(limit=2)
        second = temp_db.get_trades(limit=2, offset=2)
        rest = temp_db.get_trades(limit=DEFAULT_PAGE_SIZE, offset=4)

        assert [t.date.day for t in first] == [5, 4]
        assert [t.date.day for t in second] == [3, 2]
        assert [t.date.day for t in rest] == [1]

    def test_by_symbol(self, temp_db: DataStore):
        btc = make_trade("BTC/USDT")
        eth = make_trade("ETH/USDT")
        temp_db.save_trades([btc, eth])

        assert temp_db.get_trades_by_symbol("ETH/USDT") == [eth]
        assert temp_db.get_trades_by_symbol("SOL/USDT") == []

    def test_delete(self, temp_db: DataStore):
        trade = make_trade()
        temp_db.save_trade(trade)

        assert temp_db.delete_trade(trade.id) is True
        assert temp_db.get_trade(trade.id) is None
        assert temp_db.delete_trade(trade.id) is False

    @given(trades=st.lists(trade_strategy(), min_size=0, max_size=10))
    @settings(max_examples=20)
    def test_count_matches_saved(self, trades: list[Trade]):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = DataStore(Path(tmpdir) / "test.db")
            store.save_trades(trades)
            assert store.count_trades() == len(trades)
            assert set(store.get_trades()) == set(trades)


class TestUnknownStoredValues:
    """Unknown enum values in the database fall back to defaults."""

    def test_enum_fallback(self, temp_db: DataStore):
        trade = make_trade()
        temp_db.save_trade(trade)

        conn = sqlite3.connect(temp_db.db_path)
        try:
            conn.execute(
                "UPDATE trades SET timeframe = ?, confidence = ?, market_condition = ? WHERE id = ?",
                ("2h", "Very High", "Sideways", str(trade.id)),
            )
            conn.commit()
        finally:
            conn.close()

        loaded = temp_db.get_trade(trade.id)
        assert loaded.timeframe == TimeFrame.H1
        assert loaded.confidence == ConfidenceLevel.MEDIUM
        assert loaded.market_condition == MarketCondition.NEUTRAL
        assert loaded.side == TradeSide.LONG
