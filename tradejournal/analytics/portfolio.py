"""Portfolio-level aggregate statistics.

Every function here is total: an empty sequence of trades yields a
zero-valued result rather than an error.
"""

from typing import Iterable, Sequence

from tradejournal.models import PortfolioSummary, Trade


def total_profit_loss(trades: Iterable[Trade]) -> float:
    """Sum of P/L across all trades."""
    return sum((t.profit_loss for t in trades), 0.0)


def winning_trades(trades: Iterable[Trade]) -> list[Trade]:
    return [t for t in trades if t.profit_loss > 0]


def losing_trades(trades: Iterable[Trade]) -> list[Trade]:
    return [t for t in trades if t.profit_loss < 0]


def gross_profit(trades: Iterable[Trade]) -> float:
    return sum((t.profit_loss for t in winning_trades(trades)), 0.0)


def gross_loss(trades: Iterable[Trade]) -> float:
    """Absolute value of the summed losing P/L."""
    return abs(sum((t.profit_loss for t in losing_trades(trades)), 0.0))


def win_rate(trades: Sequence[Trade]) -> float:
    """Percentage of trades with positive P/L.

    Args:
        trades: Trades to evaluate.

    Returns:
        Win rate in [0, 100]; 0 for no trades.
    """
    if not trades:
        return 0.0
    return len(winning_trades(trades)) / len(trades) * 100


def profit_factor(trades: Sequence[Trade]) -> float:
    """Gross profit divided by gross loss.

    Returns 0 when there is no gross loss, which covers both the empty case
    and a journal without losing trades.
    """
    loss = gross_loss(trades)
    if loss == 0:
        return 0.0
    return gross_profit(trades) / loss


def average_risk_reward_ratio(trades: Iterable[Trade]) -> float:
    """Mean risk/reward over trades that define one (ratio > 0)."""
    ratios = [t.risk_reward_ratio for t in trades if t.risk_reward_ratio > 0]
    if not ratios:
        return 0.0
    return sum(ratios) / len(ratios)


def average_trade_amount(trades: Sequence[Trade]) -> float:
    if not trades:
        return 0.0
    return total_profit_loss(trades) / len(trades)


def largest_win(trades: Iterable[Trade]) -> float:
    """Best positive P/L, or 0 if nothing won."""
    return max((t.profit_loss for t in winning_trades(trades)), default=0.0)


def largest_loss(trades: Iterable[Trade]) -> float:
    """Worst negative P/L, or 0 if nothing lost."""
    return min((t.profit_loss for t in losing_trades(trades)), default=0.0)


def summarize(trades: Sequence[Trade]) -> PortfolioSummary:
    """Compute every headline statistic for a set of trades.

    Args:
        trades: Trades to summarize, typically already filtered.

    Returns:
        PortfolioSummary with all aggregate metrics.
    """
    trades = list(trades)
    return PortfolioSummary(
        trade_count=len(trades),
        total_profit_loss=total_profit_loss(trades),
        win_rate=win_rate(trades),
        profit_factor=profit_factor(trades),
        average_risk_reward=average_risk_reward_ratio(trades),
        average_trade=average_trade_amount(trades),
        largest_win=largest_win(trades),
        largest_loss=largest_loss(trades),
    )
