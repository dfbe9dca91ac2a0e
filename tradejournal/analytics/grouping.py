"""Grouping engine: per-key statistics and win streaks."""

from typing import Any, Callable, Hashable, Iterable, Sequence, Union

from tradejournal.analytics.portfolio import total_profit_loss, win_rate
from tradejournal.models import GroupStats, Trade

# Attribute names accepted as a shorthand for a key function
GROUP_KEYS = ("symbol", "strategy", "timeframe")

DEFAULT_TOP_SYMBOLS = 10

KeyFunc = Callable[[Trade], Hashable]


def _resolve_key(key: Union[str, KeyFunc]) -> KeyFunc:
    if callable(key):
        return key
    if key not in GROUP_KEYS:
        raise ValueError(f"Invalid group key: {key}. Must be one of {list(GROUP_KEYS)}")
    return lambda trade: getattr(trade, key)


def partition(trades: Iterable[Trade], key: Union[str, KeyFunc]) -> dict[Any, list[Trade]]:
    """Split trades by key, preserving first-seen key order and input order."""
    key_func = _resolve_key(key)
    groups: dict[Any, list[Trade]] = {}
    for trade in trades:
        groups.setdefault(key_func(trade), []).append(trade)
    return groups


def current_win_streak(trades: Iterable[Trade]) -> int:
    """Consecutive wins counted back from the most recent trade."""
    # Reverse of a stable ascending sort, so equal timestamps resolve the same
    # way as in max_win_streak.
    ordered = sorted(trades, key=lambda t: t.sort_date)
    streak = 0
    for trade in reversed(ordered):
        if not trade.is_win:
            break
        streak += 1
    return streak


def max_win_streak(trades: Iterable[Trade]) -> int:
    """Longest run of consecutive wins in date order."""
    streak = 0
    best = 0
    for trade in sorted(trades, key=lambda t: t.sort_date):
        if trade.is_win:
            streak += 1
            best = max(best, streak)
        else:
            streak = 0
    return best


def win_streaks(trades: Iterable[Trade]) -> tuple[int, int]:
    """Return (current, max) win streaks."""
    trades = list(trades)
    return current_win_streak(trades), max_win_streak(trades)


def group_stats(key: Any, trades: Sequence[Trade]) -> GroupStats:
    """Statistics for a single non-empty group of trades."""
    total = total_profit_loss(trades)
    current, best = win_streaks(trades)
    return GroupStats(
        key=key,
        trade_count=len(trades),
        win_rate=win_rate(trades),
        average_profit=total / len(trades),
        total_profit_loss=total,
        current_win_streak=current,
        max_win_streak=best,
    )


def group_by(trades: Iterable[Trade], key: Union[str, KeyFunc]) -> dict[Any, GroupStats]:
    """Compute statistics for each group of trades.

    Args:
        trades: Trades to group.
        key: A key function, or one of "symbol", "strategy", "timeframe".

    Returns:
        Mapping of key to GroupStats in first-seen order. Groups without
        trades never appear.

    Raises:
        ValueError: If key is a string that is not a known attribute.
    """
    return {
        group_key: group_stats(group_key, members)
        for group_key, members in partition(trades, key).items()
        if members
    }


def top_symbols(trades: Iterable[Trade], n: int = DEFAULT_TOP_SYMBOLS) -> list[GroupStats]:
    """Most traded symbols, by trade count descending.

    Ties keep the order in which symbols first appear in the input.
    """
    return rank_by_count(group_by(trades, "symbol"), n)


def rank_by_count(stats: dict[Any, GroupStats], n: int = DEFAULT_TOP_SYMBOLS) -> list[GroupStats]:
    ranked = sorted(stats.values(), key=lambda s: s.trade_count, reverse=True)
    return ranked[:n]


def strategy_patterns(trades: Iterable[Trade]) -> list[GroupStats]:
    """Strategy groups ordered by win rate, best first."""
    stats = group_by(trades, "strategy")
    return sorted(stats.values(), key=lambda s: s.win_rate, reverse=True)
