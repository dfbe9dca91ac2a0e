"""Trade persistence."""

from tradejournal.db.base import TradeRepository
from tradejournal.db.store import DEFAULT_PAGE_SIZE, DataStore

__all__ = ["TradeRepository", "DataStore", "DEFAULT_PAGE_SIZE"]
