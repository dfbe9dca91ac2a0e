"""Validation of raw trade input from the add flow."""

from datetime import datetime
from typing import Optional

from pydantic import ValidationError

from tradejournal.models import (
    ConfidenceLevel,
    MarketCondition,
    SetupQuality,
    TimeFrame,
    Trade,
    TradeSide,
)


class TradeInputError(ValueError):
    """Raised when raw trade input cannot be turned into a Trade."""


def _parse_number(value: str) -> float:
    try:
        return float(value.strip())
    except ValueError:
        raise TradeInputError("Please enter valid numeric values") from None


def parse_trade_input(
    symbol: str,
    entry_price: str,
    exit_price: str,
    quantity: str,
    stop_loss: str,
    take_profit: str,
    side: str = TradeSide.LONG.value,
    fee_rate: str = "0.1",
    leverage: str = "1",
    timeframe: str = TimeFrame.H1.value,
    date: Optional[datetime] = None,
    notes: str = "",
    strategy: str = "",
    emotions: str = "",
    confidence: str = ConfidenceLevel.MEDIUM.value,
    setup_quality: str = SetupQuality.GOOD.value,
    market_condition: str = MarketCondition.NEUTRAL.value,
) -> Trade:
    """Build a Trade from text fields.

    Required fields are checked first, then numbers are parsed, then the
    Trade model validates ranges (non-negative prices, leverage >= 1).

    Returns:
        The validated Trade.

    Raises:
        TradeInputError: With a message suitable for showing to the user.
    """
    if not symbol.strip():
        raise TradeInputError("Please enter a crypto pair")
    if not entry_price.strip() or not exit_price.strip() or not quantity.strip():
        raise TradeInputError("Please fill in all required trade details")
    if not stop_loss.strip() or not take_profit.strip():
        raise TradeInputError("Stop Loss and Take Profit are required")

    fields = {
        "symbol": symbol.strip(),
        "entry_price": _parse_number(entry_price),
        "exit_price": _parse_number(exit_price),
        "quantity": _parse_number(quantity),
        "stop_loss": _parse_number(stop_loss),
        "take_profit": _parse_number(take_profit),
        "fee_rate": _parse_number(fee_rate),
        "leverage": _parse_number(leverage),
        "side": side,
        "timeframe": timeframe,
        "notes": notes,
        "strategy": strategy,
        "emotions": emotions,
        "confidence": confidence,
        "setup_quality": setup_quality,
        "market_condition": market_condition,
    }
    if date is not None:
        fields["date"] = date

    try:
        return Trade(**fields)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise TradeInputError(f"Invalid trade: {problems}") from e
