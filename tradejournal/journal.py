"""Journal service: the in-memory trade snapshot and its derived statistics."""

import logging
from datetime import datetime
from typing import Iterable, Optional
from uuid import UUID

from tradejournal.analytics.filters import TradeFilter
from tradejournal.analytics.grouping import DEFAULT_TOP_SYMBOLS, group_by, rank_by_count
from tradejournal.db.base import TradeRepository
from tradejournal.models import GroupStats, Trade, TradeSide

logger = logging.getLogger(__name__)


def sample_trades() -> list[Trade]:
    """Example trades used to seed an empty journal."""
    return [
        Trade(
            symbol="BTC/USDT",
            entry_price=42000,
            exit_price=43500,
            quantity=0.1,
            side=TradeSide.LONG,
            notes="Strong trend following",
            strategy="Trend Following",
            stop_loss=41000,
            take_profit=44000,
        ),
        Trade(
            symbol="ETH/USDT",
            entry_price=2200,
            exit_price=2150,
            quantity=1,
            side=TradeSide.SHORT,
            notes="Resistance rejection",
            strategy="Price Action",
            stop_loss=2250,
            take_profit=2100,
        ),
    ]


class JournalService:
    """Owns the loaded trades and the per-symbol statistics.

    Every add or delete reloads the snapshot from the repository and marks
    the symbol statistics stale; they are rebuilt over the full collection
    on next access.
    """

    def __init__(self, repo: TradeRepository) -> None:
        self._repo = repo
        self._trades: list[Trade] = []
        self._symbol_stats: Optional[dict[str, GroupStats]] = None
        self.reload()

    @property
    def trades(self) -> list[Trade]:
        """Snapshot of all trades, newest first."""
        return list(self._trades)

    def reload(self) -> None:
        """Reload trades from the repository."""
        self._trades = self._repo.get_trades()
        self._symbol_stats = None
        logger.debug("Loaded %d trades", len(self._trades))

    def add_trade(self, trade: Trade) -> None:
        self._repo.save_trade(trade)
        logger.info("Added trade %s (%s)", trade.id, trade.symbol)
        self.reload()

    def add_trades(self, trades: Iterable[Trade]) -> None:
        self._repo.save_trades(trades)
        self.reload()

    def delete_trade(self, trade_id: UUID) -> bool:
        """Delete a trade by id.

        Returns:
            True if the trade existed and was deleted.
        """
        deleted = self._repo.delete_trade(trade_id)
        if not deleted:
            logger.info("No trade with id %s to delete", trade_id)
            return False
        logger.info("Deleted trade %s", trade_id)
        self.reload()
        return True

    def find_trade(self, trade_id: UUID) -> Optional[Trade]:
        return next((t for t in self._trades if t.id == trade_id), None)

    @property
    def symbol_stats(self) -> dict[str, GroupStats]:
        """Statistics per symbol over the full trade collection."""
        if self._symbol_stats is None:
            self._symbol_stats = group_by(self._trades, "symbol")
        return self._symbol_stats

    def get_symbol_stats(self, symbol: str) -> Optional[GroupStats]:
        return self.symbol_stats.get(symbol)

    def top_symbols(self, n: int = DEFAULT_TOP_SYMBOLS) -> list[GroupStats]:
        """Most traded symbols, by trade count descending."""
        return rank_by_count(self.symbol_stats, n)

    def filtered_trades(
        self,
        trade_filter: Optional[TradeFilter] = None,
        now: Optional[datetime] = None,
    ) -> list[Trade]:
        if trade_filter is None:
            return self.trades
        return trade_filter.apply(self._trades, now=now)

    def seed_sample_data(self) -> bool:
        """Add the sample trades if the journal is empty.

        Returns:
            True if sample trades were added.
        """
        if self._trades:
            return False
        self.add_trades(sample_trades())
        logger.info("Seeded journal with sample trades")
        return True
