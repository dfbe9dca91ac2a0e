"""Risk analysis: drawdown, risk buckets and profit bands."""

import math
from typing import Iterable, Optional, Sequence

from tradejournal.analytics.portfolio import average_risk_reward_ratio, win_rate
from tradejournal.models import DistributionBand, RiskBucket, RiskSummary, Trade

RISK_BUCKET_SIZE = 100.0

# Boundary between small and large wins/losses, in account currency
LARGE_TRADE_THRESHOLD = 100.0

LARGE_WIN = "Large Win"
SMALL_WIN = "Small Win"
SMALL_LOSS = "Small Loss"
LARGE_LOSS = "Large Loss"

PROFIT_BANDS = (LARGE_WIN, SMALL_WIN, SMALL_LOSS, LARGE_LOSS)


def max_drawdown(trades: Iterable[Trade]) -> float:
    """Largest percentage decline from a running peak of cumulative P/L.

    Trades are walked in the order given, not re-sorted. The peak starts at
    zero, and steps taken while the peak is not positive contribute 0.

    Args:
        trades: Trades in the order they should be accumulated.

    Returns:
        Maximum drawdown percentage (>= 0); 0 for no trades.
    """
    worst = 0.0
    peak = 0.0
    running = 0.0
    for trade in trades:
        running += trade.profit_loss
        peak = max(peak, running)
        if peak > 0:
            worst = max(worst, (peak - running) / peak * 100)
    return worst


def average_risk_per_trade(trades: Sequence[Trade]) -> float:
    if not trades:
        return 0.0
    return sum(t.risk_amount for t in trades) / len(trades)


def profitable_risk_trade_ratio(trades: Sequence[Trade]) -> float:
    """Percentage of trades that closed in profit."""
    return win_rate(trades)


def _round_half_up(value: float) -> float:
    # Python's round() is banker's rounding; bucket halves go up instead
    return math.floor(value + 0.5)


def risk_bucket(trade: Trade) -> float:
    """Risk amount rounded to the nearest RISK_BUCKET_SIZE."""
    return _round_half_up(trade.risk_amount / RISK_BUCKET_SIZE) * RISK_BUCKET_SIZE


def risk_distribution(trades: Iterable[Trade]) -> list[RiskBucket]:
    """Count trades per rounded risk amount, smallest bucket first."""
    counts: dict[float, int] = {}
    for trade in trades:
        bucket = risk_bucket(trade)
        counts[bucket] = counts.get(bucket, 0) + 1
    return [RiskBucket(risk=risk, count=counts[risk]) for risk in sorted(counts)]


def profit_band(trade: Trade) -> Optional[str]:
    """Name of the fixed profit band a trade falls in.

    Returns None for breakeven trades, which belong to no band.
    """
    pnl = trade.profit_loss
    if pnl > LARGE_TRADE_THRESHOLD:
        return LARGE_WIN
    if pnl > 0:
        return SMALL_WIN
    if pnl < -LARGE_TRADE_THRESHOLD:
        return LARGE_LOSS
    if pnl < 0:
        return SMALL_LOSS
    return None


def profit_distribution(trades: Sequence[Trade]) -> list[DistributionBand]:
    """Count and share of trades per profit band.

    Bands come in the order Large Win, Small Win, Small Loss, Large Loss.
    Percentages are relative to all trades, breakeven ones included, and
    bands without trades are left out.
    """
    if not trades:
        return []

    counts = dict.fromkeys(PROFIT_BANDS, 0)
    for trade in trades:
        band = profit_band(trade)
        if band is not None:
            counts[band] += 1

    return [
        DistributionBand(name=name, count=count, percentage=count / len(trades) * 100)
        for name, count in counts.items()
        if count > 0
    ]


def summarize_risk(trades: Sequence[Trade]) -> RiskSummary:
    trades = list(trades)
    return RiskSummary(
        average_risk_reward=average_risk_reward_ratio(trades),
        max_drawdown=max_drawdown(trades),
        average_risk=average_risk_per_trade(trades),
        profitable_ratio=profitable_risk_trade_ratio(trades),
    )
