"""Base repository interface for tradejournal."""

from abc import ABC, abstractmethod
from typing import Iterable, Optional
from uuid import UUID

from tradejournal.models import Trade


class TradeRepository(ABC):
    """Abstract base class for trade storage.

    The analytics engine only relies on this contract: every method returns
    fully-populated Trade values, however they are stored.
    """

    @abstractmethod
    def save_trade(self, trade: Trade) -> None:
        """Persist a trade, replacing any stored trade with the same id.

        Args:
            trade: Trade to save.
        """
        pass

    def save_trades(self, trades: Iterable[Trade]) -> None:
        """Persist several trades.

        Args:
            trades: Trades to save.
        """
        for trade in trades:
            self.save_trade(trade)

    @abstractmethod
    def get_trade(self, trade_id: UUID) -> Optional[Trade]:
        """Get a trade by id.

        Args:
            trade_id: Trade identifier.

        Returns:
            Trade if found, None otherwise.
        """
        pass

    @abstractmethod
    def get_trades(self) -> list[Trade]:
        """Get every stored trade.

        Returns:
            List of trades, newest first.
        """
        pass

    @abstractmethod
    def get_trades_by_symbol(self, symbol: str) -> list[Trade]:
        """Get trades for one symbol.

        Args:
            symbol: Trading pair label.

        Returns:
            List of trades for the symbol, newest first.
        """
        pass

    @abstractmethod
    def delete_trade(self, trade_id: UUID) -> bool:
        """Delete a trade.

        Args:
            trade_id: Identifier of the trade to delete.

        Returns:
            True if a trade was deleted, False if none matched.
        """
        pass
