"""Filter/query layer applied before aggregation.

Date windows are relative to "now": a trade is kept when its date is on or
after the cutoff. Categorical filters (timeframe, strategy) are exact
matches, and everything composes with logical AND.
"""

import calendar
from datetime import datetime, timedelta
from enum import Enum
from typing import Iterable, Optional

from pydantic import BaseModel, Field

from tradejournal.models import TimeFrame, Trade, local_naive

# Strategy filter value that matches every trade
ALL_STRATEGIES = "All"


def shift_months(moment: datetime, months: int) -> datetime:
    """Move a datetime by whole calendar months, clamping the day.

    Args:
        moment: Starting point.
        months: Months to add (negative to go back).

    Returns:
        The shifted datetime, e.g. Mar 31 - 1 month = Feb 28 (or 29).
    """
    month_index = moment.year * 12 + (moment.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


class DateFilter(str, Enum):
    """Rolling day windows used by the trade list."""

    LAST_7_DAYS = "Last 7 Days"
    LAST_30_DAYS = "Last 30 Days"
    LAST_3_MONTHS = "Last 3 Months"
    LAST_6_MONTHS = "Last 6 Months"
    LAST_YEAR = "Last Year"
    ALL_TIME = "All Time"

    @property
    def days_back(self) -> Optional[int]:
        return _DAYS_BACK[self]

    def cutoff(self, now: datetime) -> Optional[datetime]:
        """Earliest date kept, or None for All Time."""
        days = self.days_back
        if days is None:
            return None
        return now - timedelta(days=days)


_DAYS_BACK = {
    DateFilter.LAST_7_DAYS: 7,
    DateFilter.LAST_30_DAYS: 30,
    DateFilter.LAST_3_MONTHS: 90,
    DateFilter.LAST_6_MONTHS: 180,
    DateFilter.LAST_YEAR: 365,
    DateFilter.ALL_TIME: None,
}


class Period(str, Enum):
    """Calendar windows used by the analysis views."""

    WEEK = "Week"
    MONTH = "Month"
    QUARTER = "Quarter"
    YEAR = "Year"
    ALL_TIME = "All Time"

    def cutoff(self, now: datetime) -> Optional[datetime]:
        """Earliest date kept, or None for All Time."""
        if self is Period.WEEK:
            return now - timedelta(days=7)
        if self is Period.MONTH:
            return shift_months(now, -1)
        if self is Period.QUARTER:
            return shift_months(now, -3)
        if self is Period.YEAR:
            return shift_months(now, -12)
        return None


def _on_or_after(trade_date: datetime, cutoff: datetime) -> bool:
    # Naive values are local time, so both sides compare as naive local
    return local_naive(trade_date) >= local_naive(cutoff)


def filter_since(trades: Iterable[Trade], cutoff: Optional[datetime]) -> list[Trade]:
    """Keep trades dated on or after cutoff; None keeps everything."""
    if cutoff is None:
        return list(trades)
    return [t for t in trades if _on_or_after(t.date, cutoff)]


def filter_by_date(
    trades: Iterable[Trade],
    date_filter: DateFilter,
    now: Optional[datetime] = None,
) -> list[Trade]:
    return filter_since(trades, date_filter.cutoff(now or datetime.now()))


def filter_by_period(
    trades: Iterable[Trade],
    period: Period,
    now: Optional[datetime] = None,
) -> list[Trade]:
    return filter_since(trades, period.cutoff(now or datetime.now()))


def filter_by_timeframe(trades: Iterable[Trade], timeframe: TimeFrame) -> list[Trade]:
    return [t for t in trades if t.timeframe == timeframe]


def filter_by_strategy(trades: Iterable[Trade], strategy: str) -> list[Trade]:
    """Keep trades of one strategy; ALL_STRATEGIES keeps everything."""
    if strategy == ALL_STRATEGIES:
        return list(trades)
    return [t for t in trades if t.strategy == strategy]


def strategies(trades: Iterable[Trade]) -> list[str]:
    """Distinct strategy labels in first-seen order."""
    return list(dict.fromkeys(t.strategy for t in trades))


class TradeFilter(BaseModel):
    """A combination of filters applied together.

    Unset criteria do not filter.
    """

    date_filter: Optional[DateFilter] = Field(default=None, description="Rolling day window")
    period: Optional[Period] = Field(default=None, description="Calendar window")
    timeframe: Optional[TimeFrame] = Field(default=None, description="Exact timeframe")
    strategy: str = Field(default=ALL_STRATEGIES, description="Exact strategy or 'All'")

    model_config = {"frozen": True}

    def matches(self, trade: Trade, now: datetime) -> bool:
        for window in (self.date_filter, self.period):
            if window is None:
                continue
            cutoff = window.cutoff(now)
            if cutoff is not None and not _on_or_after(trade.date, cutoff):
                return False
        if self.timeframe is not None and trade.timeframe != self.timeframe:
            return False
        if self.strategy != ALL_STRATEGIES and trade.strategy != self.strategy:
            return False
        return True

    def apply(self, trades: Iterable[Trade], now: Optional[datetime] = None) -> list[Trade]:
        """Return the trades matching every criterion, in input order."""
        now = now or datetime.now()
        return [t for t in trades if self.matches(t, now)]
