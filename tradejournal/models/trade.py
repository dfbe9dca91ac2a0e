"""Trade data model."""

from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def local_naive(moment: datetime) -> datetime:
    """Express an aware datetime as naive local time; naive values pass through."""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone().replace(tzinfo=None)


class TradeSide(str, Enum):
    """Direction of a trade."""

    LONG = "Long"
    SHORT = "Short"


class TimeFrame(str, Enum):
    """Chart timeframe the trade was taken on."""

    M1 = "1m"
    M5 = "5m"
    M15 = "15m"
    M30 = "30m"
    H1 = "1h"
    H4 = "4h"
    D1 = "1d"
    W1 = "1w"


class ConfidenceLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class SetupQuality(str, Enum):
    POOR = "Poor"
    GOOD = "Good"
    EXCELLENT = "Excellent"


class MarketCondition(str, Enum):
    BEARISH = "Bearish"
    NEUTRAL = "Neutral"
    BULLISH = "Bullish"


class Trade(BaseModel):
    """Represents a closed trade recorded in the journal.

    Financial metrics (P/L, fees, risk, reward) are read-only properties
    computed from the stored fields. The model is frozen, so they always
    agree with the inputs.
    """

    id: UUID = Field(default_factory=uuid4, description="Unique trade identifier")
    symbol: str = Field(..., min_length=1, description="Trading pair (e.g. BTC/USDT)")
    entry_price: float = Field(..., ge=0, description="Entry price")
    exit_price: float = Field(..., ge=0, description="Exit price")
    quantity: float = Field(..., ge=0, description="Position size")
    side: TradeSide = Field(..., description="Trade side (Long/Short)")
    date: datetime = Field(default_factory=datetime.now, description="Trade timestamp")
    notes: str = Field(default="", description="Free-text notes")
    strategy: str = Field(default="", description="Strategy label")
    emotions: str = Field(default="", description="Emotional state label")
    timeframe: TimeFrame = Field(default=TimeFrame.H1, description="Chart timeframe")
    stop_loss: float = Field(..., ge=0, description="Stop-loss price")
    take_profit: float = Field(..., ge=0, description="Take-profit price")
    fee_rate: float = Field(
        default=0.1, description="Fee as a percentage of notional (0.1 = 0.1%)"
    )
    leverage: float = Field(default=1.0, ge=1, description="Leverage multiplier")
    confidence: ConfidenceLevel = Field(
        default=ConfidenceLevel.MEDIUM, description="Pre-trade confidence"
    )
    setup_quality: SetupQuality = Field(
        default=SetupQuality.GOOD, description="Quality of the setup"
    )
    market_condition: MarketCondition = Field(
        default=MarketCondition.NEUTRAL, description="Market condition at entry"
    )

    model_config = {"frozen": True}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Trade):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def raw_profit_loss(self) -> float:
        """Unleveraged P/L before fees."""
        if self.side == TradeSide.LONG:
            price_difference = self.exit_price - self.entry_price
        else:
            price_difference = self.entry_price - self.exit_price
        return price_difference * self.quantity

    @property
    def total_fees(self) -> float:
        """Fees charged on both legs of the trade."""
        total_value = (self.entry_price + self.exit_price) * self.quantity
        return (self.fee_rate / 100) * total_value

    @property
    def profit_loss(self) -> float:
        """Leveraged, fee-adjusted P/L."""
        return self.raw_profit_loss * self.leverage - self.total_fees

    @property
    def risk_amount(self) -> float:
        return abs(self.entry_price - self.stop_loss) * self.quantity * self.leverage

    @property
    def reward_amount(self) -> float:
        return abs(self.take_profit - self.entry_price) * self.quantity * self.leverage

    @property
    def risk_reward_ratio(self) -> float:
        """Reward divided by risk, or 0 when the trade carries no risk."""
        risk = self.risk_amount
        return 0.0 if risk == 0 else self.reward_amount / risk

    @property
    def is_win(self) -> bool:
        return self.profit_loss > 0

    @property
    def sort_date(self) -> datetime:
        """Trade date as naive local time, comparable across timezones."""
        return local_naive(self.date)
