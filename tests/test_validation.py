"""Tests for raw trade input validation."""

from datetime import datetime

import pytest

from tradejournal.models import TimeFrame, TradeSide
from tradejournal.validation import TradeInputError, parse_trade_input

VALID = {
    "symbol": "BTC/USDT",
    "entry_price": "42000",
    "exit_price": "43500",
    "quantity": "0.1",
    "stop_loss": "41000",
    "take_profit": "44000",
}


def parse(**overrides):
    fields = dict(VALID)
    fields.update(overrides)
    return parse_trade_input(**fields)


class TestParseTradeInput:
    def test_valid_input(self):
        trade = parse(side="Short", timeframe="4h", strategy="Breakout")
        assert trade.symbol == "BTC/USDT"
        assert trade.entry_price == 42000
        assert trade.side == TradeSide.SHORT
        assert trade.timeframe == TimeFrame.H4
        assert trade.strategy == "Breakout"
        assert trade.fee_rate == 0.1
        assert trade.leverage == 1.0

    def test_strips_whitespace(self):
        trade = parse(symbol="  ETH/USDT ", entry_price=" 2200 ")
        assert trade.symbol == "ETH/USDT"
        assert trade.entry_price == 2200

    def test_explicit_date(self):
        when = datetime(2024, 2, 1, 10, 30)
        assert parse(date=when).date == when

    @pytest.mark.parametrize(
        "overrides,message",
        [
            ({"symbol": "  "}, "Please enter a crypto pair"),
            ({"entry_price": ""}, "Please fill in all required trade details"),
            ({"exit_price": " "}, "Please fill in all required trade details"),
            ({"quantity": ""}, "Please fill in all required trade details"),
            ({"stop_loss": ""}, "Stop Loss and Take Profit are required"),
            ({"take_profit": ""}, "Stop Loss and Take Profit are required"),
            ({"entry_price": "abc"}, "Please enter valid numeric values"),
            ({"fee_rate": "ten"}, "Please enter valid numeric values"),
        ],
    )
    def test_error_messages(self, overrides, message):
        with pytest.raises(TradeInputError) as exc_info:
            parse(**overrides)
        assert str(exc_info.value) == message

    def test_symbol_checked_before_numbers(self):
        with pytest.raises(TradeInputError, match="crypto pair"):
            parse(symbol="", entry_price="")

    @pytest.mark.parametrize(
        "overrides,field",
        [
            ({"entry_price": "-5"}, "entry_price"),
            ({"leverage": "0.5"}, "leverage"),
            ({"side": "Sideways"}, "side"),
            ({"timeframe": "2h"}, "timeframe"),
        ],
    )
    def test_model_errors_are_wrapped(self, overrides, field):
        with pytest.raises(TradeInputError, match=f"Invalid trade: {field}"):
            parse(**overrides)

    def test_is_a_value_error(self):
        assert issubclass(TradeInputError, ValueError)
