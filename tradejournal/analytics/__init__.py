"""Trade analytics and aggregation engine.

Pure functions over sequences of Trade values. Nothing in this package
performs I/O.
"""

from tradejournal.analytics.filters import (
    ALL_STRATEGIES,
    DateFilter,
    Period,
    TradeFilter,
    filter_by_date,
    filter_by_period,
    filter_by_strategy,
    filter_by_timeframe,
    strategies,
)
from tradejournal.analytics.grouping import (
    current_win_streak,
    group_by,
    max_win_streak,
    strategy_patterns,
    top_symbols,
    win_streaks,
)
from tradejournal.analytics.portfolio import (
    average_risk_reward_ratio,
    average_trade_amount,
    largest_loss,
    largest_win,
    profit_factor,
    summarize,
    total_profit_loss,
    win_rate,
)
from tradejournal.analytics.risk import (
    average_risk_per_trade,
    max_drawdown,
    profit_distribution,
    profitable_risk_trade_ratio,
    risk_distribution,
    summarize_risk,
)
from tradejournal.analytics.timeseries import (
    equity_curve,
    monthly_buckets,
    pnl_series,
    y_axis_range,
)

__all__ = [
    # Portfolio
    "total_profit_loss",
    "win_rate",
    "profit_factor",
    "average_risk_reward_ratio",
    "average_trade_amount",
    "largest_win",
    "largest_loss",
    "summarize",
    # Time series
    "equity_curve",
    "pnl_series",
    "y_axis_range",
    "monthly_buckets",
    # Grouping
    "group_by",
    "current_win_streak",
    "max_win_streak",
    "win_streaks",
    "top_symbols",
    "strategy_patterns",
    # Risk
    "max_drawdown",
    "average_risk_per_trade",
    "profitable_risk_trade_ratio",
    "risk_distribution",
    "profit_distribution",
    "summarize_risk",
    # Filters
    "ALL_STRATEGIES",
    "DateFilter",
    "Period",
    "TradeFilter",
    "filter_by_date",
    "filter_by_period",
    "filter_by_timeframe",
    "filter_by_strategy",
    "strategies",
]
