"""Date-ordered series built from trades: equity curve and monthly P/L."""

from typing import Iterable, Sequence

from tradejournal.models import EquityPoint, MonthlyBucket, Trade

# Fraction of the largest magnitude added above and below the chart range
Y_AXIS_PADDING = 0.1


def _by_date(trades: Iterable[Trade]) -> list[Trade]:
    # sorted() is stable, so trades sharing a timestamp keep input order
    return sorted(trades, key=lambda t: t.sort_date)


def equity_curve(trades: Iterable[Trade]) -> list[EquityPoint]:
    """Build the cumulative P/L curve.

    Trades are sorted ascending by date and each one contributes a point
    holding the running total after that trade.

    Args:
        trades: Trades in any order.

    Returns:
        One EquityPoint per trade in date order; empty for no trades.
    """
    points = []
    running_total = 0.0
    for trade in _by_date(trades):
        running_total += trade.profit_loss
        points.append(EquityPoint(date=trade.date, total=running_total))
    return points


def pnl_series(trades: Iterable[Trade]) -> list[EquityPoint]:
    """Per-trade P/L in date order (not cumulative)."""
    return [EquityPoint(date=t.date, total=t.profit_loss) for t in _by_date(trades)]


def y_axis_range(points: Sequence[EquityPoint]) -> tuple[float, float]:
    """Chart range covering zero and every point, padded by 10%.

    Args:
        points: Equity curve points.

    Returns:
        (lower, upper) bounds; (0.0, 0.0) when there are no points.
    """
    totals = [p.total for p in points]
    min_value = min(0.0, min(totals, default=0.0))
    max_value = max(0.0, max(totals, default=0.0))
    padding = max(abs(min_value), abs(max_value)) * Y_AXIS_PADDING
    return (min_value - padding, max_value + padding)


def monthly_buckets(trades: Iterable[Trade]) -> list[MonthlyBucket]:
    """Sum P/L per calendar month.

    The month is taken from each trade's own date, in its own timezone when
    the date is aware. Buckets are returned in chronological order.
    """
    totals: dict[tuple[int, int], float] = {}
    labels: dict[tuple[int, int], str] = {}
    for trade in trades:
        key = (trade.date.year, trade.date.month)
        totals[key] = totals.get(key, 0.0) + trade.profit_loss
        labels.setdefault(key, trade.date.strftime("%b %Y"))

    return [
        MonthlyBucket(label=labels[key], year=key[0], month=key[1], total=totals[key])
        for key in sorted(totals)
    ]
