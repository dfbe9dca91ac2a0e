"""Data models for tradejournal."""

from tradejournal.models.trade import (
    ConfidenceLevel,
    MarketCondition,
    SetupQuality,
    TimeFrame,
    Trade,
    TradeSide,
    local_naive,
)
from tradejournal.models.stats import (
    DistributionBand,
    EquityPoint,
    GroupStats,
    MonthlyBucket,
    PortfolioSummary,
    RiskBucket,
    RiskSummary,
)

__all__ = [
    "Trade",
    "TradeSide",
    "TimeFrame",
    "ConfidenceLevel",
    "SetupQuality",
    "MarketCondition",
    "local_naive",
    "GroupStats",
    "EquityPoint",
    "MonthlyBucket",
    "RiskBucket",
    "DistributionBand",
    "PortfolioSummary",
    "RiskSummary",
]
