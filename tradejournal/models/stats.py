"""Result models produced by the analytics engine."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class GroupStats(BaseModel):
    """Statistics for one group of trades (a symbol, strategy, timeframe...)."""

    key: Any = Field(..., description="Group key")
    trade_count: int = Field(..., ge=1, description="Number of trades in the group")
    win_rate: float = Field(..., ge=0, le=100, description="Win rate percentage")
    average_profit: float = Field(..., description="Mean P/L per trade")
    total_profit_loss: float = Field(..., description="Sum of P/L")
    current_win_streak: int = Field(default=0, ge=0, description="Wins since last non-win")
    max_win_streak: int = Field(default=0, ge=0, description="Longest run of wins")

    model_config = {"frozen": True}


class EquityPoint(BaseModel):
    """A single point on a date-ordered P/L series."""

    date: datetime = Field(..., description="Trade timestamp")
    total: float = Field(..., description="Value at this point")

    model_config = {"frozen": True}


class MonthlyBucket(BaseModel):
    """Summed P/L for one calendar month."""

    label: str = Field(..., description="Month label, e.g. 'Jan 2025'")
    year: int = Field(..., description="Calendar year")
    month: int = Field(..., ge=1, le=12, description="Calendar month")
    total: float = Field(..., description="Summed P/L")

    model_config = {"frozen": True}


class RiskBucket(BaseModel):
    """Number of trades whose risk rounds to a given amount."""

    risk: float = Field(..., ge=0, description="Risk amount rounded to the nearest 100")
    count: int = Field(..., ge=1, description="Number of trades")

    model_config = {"frozen": True}


class DistributionBand(BaseModel):
    """Trade count for a fixed profit band."""

    name: str = Field(..., description="Band name")
    count: int = Field(..., ge=1, description="Number of trades in the band")
    percentage: float = Field(..., ge=0, le=100, description="Share of all trades")

    model_config = {"frozen": True}


class PortfolioSummary(BaseModel):
    """Headline statistics for a set of trades."""

    trade_count: int = Field(..., ge=0, description="Number of trades")
    total_profit_loss: float = Field(..., description="Sum of P/L")
    win_rate: float = Field(..., ge=0, le=100, description="Win rate percentage")
    profit_factor: float = Field(..., ge=0, description="Gross profit / gross loss")
    average_risk_reward: float = Field(..., ge=0, description="Mean R:R of trades with R:R > 0")
    average_trade: float = Field(..., description="Mean P/L per trade")
    largest_win: float = Field(..., ge=0, description="Best trade P/L")
    largest_loss: float = Field(..., le=0, description="Worst trade P/L")

    model_config = {"frozen": True}


class RiskSummary(BaseModel):
    """Risk statistics for a set of trades."""

    average_risk_reward: float = Field(..., ge=0, description="Mean R:R of trades with R:R > 0")
    max_drawdown: float = Field(..., ge=0, description="Largest drawdown from peak, percent")
    average_risk: float = Field(..., ge=0, description="Mean risk amount per trade")
    profitable_ratio: float = Field(..., ge=0, le=100, description="Percent of winning trades")

    model_config = {"frozen": True}
