"""SQLite data store for tradejournal."""

import logging
import sqlite3
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional, TypeVar
from uuid import UUID

from tradejournal.db.base import TradeRepository
from tradejournal.models import (
    ConfidenceLevel,
    MarketCondition,
    SetupQuality,
    TimeFrame,
    Trade,
    TradeSide,
)

logger = logging.getLogger(__name__)

# Page size used by the trade list
DEFAULT_PAGE_SIZE = 50

_TRADE_COLUMNS = (
    "id, symbol, entry_price, exit_price, quantity, side, date, notes, strategy, "
    "emotions, timeframe, stop_loss, take_profit, fee_rate, leverage, confidence, "
    "setup_quality, market_condition"
)

E = TypeVar("E", bound=Enum)


def _enum_or_default(enum_cls: type[E], value: Optional[str], default: E) -> E:
    """Parse a stored enum value, falling back to the default when unknown."""
    try:
        return enum_cls(value)
    except ValueError:
        logger.warning("Unknown %s value %r, using %s", enum_cls.__name__, value, default.value)
        return default


def _row_to_trade(row: sqlite3.Row) -> Trade:
    return Trade(
        id=UUID(row["id"]),
        symbol=row["symbol"],
        entry_price=row["entry_price"],
        exit_price=row["exit_price"],
        quantity=row["quantity"],
        side=_enum_or_default(TradeSide, row["side"], TradeSide.LONG),
        date=datetime.fromisoformat(row["date"]),
        notes=row["notes"] or "",
        strategy=row["strategy"] or "",
        emotions=row["emotions"] or "",
        timeframe=_enum_or_default(TimeFrame, row["timeframe"], TimeFrame.H1),
        stop_loss=row["stop_loss"],
        take_profit=row["take_profit"],
        fee_rate=row["fee_rate"],
        leverage=row["leverage"],
        confidence=_enum_or_default(ConfidenceLevel, row["confidence"], ConfidenceLevel.MEDIUM),
        setup_quality=_enum_or_default(SetupQuality, row["setup_quality"], SetupQuality.GOOD),
        market_condition=_enum_or_default(
            MarketCondition, row["market_condition"], MarketCondition.NEUTRAL
        ),
    )


def _newest_first(trades: Iterable[Trade]) -> list[Trade]:
    # Stored dates may mix offsets, so ISO text order is not chronological
    return sorted(trades, key=lambda t: t.sort_date, reverse=True)


def _trade_to_params(trade: Trade) -> tuple:
    return (
        str(trade.id),
        trade.symbol,
        trade.entry_price,
        trade.exit_price,
        trade.quantity,
        trade.side.value,
        trade.date.isoformat(),
        trade.notes,
        trade.strategy,
        trade.emotions,
        trade.timeframe.value,
        trade.stop_loss,
        trade.take_profit,
        trade.fee_rate,
        trade.leverage,
        trade.confidence.value,
        trade.setup_quality.value,
        trade.market_condition.value,
    )


class DataStore(TradeRepository):
    """SQLite-based trade repository.

    Only the inputs of each trade are stored. P/L, risk and the other
    metrics are recomputed by the Trade model on load.
    """

    REQUIRED_TABLES = ["trades"]

    def __init__(self, db_path: Path):
        """Initialize the data store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS trades (
                    id TEXT PRIMARY KEY,
                    symbol TEXT NOT NULL,
                    entry_price REAL NOT NULL,
                    exit_price REAL NOT NULL,
                    quantity REAL NOT NULL,
                    side TEXT NOT NULL,
                    date TEXT NOT NULL,
                    notes TEXT NOT NULL DEFAULT '',
                    strategy TEXT NOT NULL DEFAULT '',
                    emotions TEXT NOT NULL DEFAULT '',
                    timeframe TEXT NOT NULL,
                    stop_loss REAL NOT NULL,
                    take_profit REAL NOT NULL,
                    fee_rate REAL NOT NULL,
                    leverage REAL NOT NULL,
                    confidence TEXT NOT NULL,
                    setup_quality TEXT NOT NULL,
                    market_condition TEXT NOT NULL
                )
            """)
            cursor.execute(
                "CREATE INDEX IF NOT EXISTS idx_trades_symbol ON trades (symbol)"
            )
            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    # ==================== Trades ====================

    def save_trade(self, trade: Trade) -> None:
        """Save a trade, replacing any trade with the same id.

        Args:
            trade: Trade to save.
        """
        self.save_trades([trade])

    def save_trades(self, trades: Iterable[Trade]) -> None:
        """Save several trades in one transaction.

        Args:
            trades: Trades to save.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            count = 0
            for trade in trades:
                cursor.execute(
                    f"""
                    INSERT OR REPLACE INTO trades ({_TRADE_COLUMNS})
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    _trade_to_params(trade),
                )
                count += 1
            conn.commit()
            logger.debug("Saved %d trade(s) to %s", count, self.db_path)
        finally:
            conn.close()

    def get_trade(self, trade_id: UUID) -> Optional[Trade]:
        """Get a trade by id.

        Args:
            trade_id: Trade identifier.

        Returns:
            Trade if found, None otherwise.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f"SELECT {_TRADE_COLUMNS} FROM trades WHERE id = ?",
                (str(trade_id),),
            )
            row = cursor.fetchone()
            if row:
                return _row_to_trade(row)
            return None
        finally:
            conn.close()

    def get_trades(self, limit: Optional[int] = None, offset: int = 0) -> list[Trade]:
        """Get trades from the database, newest first.

        Args:
            limit: Optional page size. If None, returns all trades.
            offset: Number of trades to skip.

        Returns:
            List of trades.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(f"SELECT {_TRADE_COLUMNS} FROM trades")
            trades = _newest_first(_row_to_trade(row) for row in cursor.fetchall())
        finally:
            conn.close()

        if limit is None:
            return trades[offset:]
        return trades[offset:offset + limit]

    def get_trades_by_symbol(self, symbol: str) -> list[Trade]:
        """Get trades for a symbol, newest first.

        Args:
            symbol: Trading pair label.

        Returns:
            List of trades for the symbol.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f"""
                SELECT {_TRADE_COLUMNS}
                FROM trades
                WHERE symbol = ?
                """,
                (symbol,),
            )
            return _newest_first(_row_to_trade(row) for row in cursor.fetchall())
        finally:
            conn.close()

    def delete_trade(self, trade_id: UUID) -> bool:
        """Delete a trade.

        Args:
            trade_id: ID of the trade to delete.

        Returns:
            True if a trade was deleted.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM trades WHERE id = ?", (str(trade_id),))
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()

    def count_trades(self) -> int:
        """Number of stored trades."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT COUNT(*) as count FROM trades")
            return cursor.fetchone()["count"]
        finally:
            conn.close()
