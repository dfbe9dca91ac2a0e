"""Trade management commands for tradejournal CLI.

Handles recording, listing, inspecting and deleting trades.
"""

from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

import click
from rich.panel import Panel
from rich.table import Table

from tradejournal.analytics.filters import filter_since
from tradejournal.cli.common import (
    TIMEFRAME_CHOICES,
    console,
    currency,
    empty_panel,
    error_panel,
    format_money,
    get_config,
    get_journal,
)
from tradejournal.db import DEFAULT_PAGE_SIZE
from tradejournal.models import ConfidenceLevel, MarketCondition, SetupQuality, TradeSide


@click.command()
@click.argument("symbol")
@click.option("--entry", "entry_price", required=True, help="Entry price.")
@click.option("--exit", "exit_price", required=True, help="Exit price.")
@click.option("--qty", "quantity", required=True, help="Position size.")
@click.option("--sl", "stop_loss", required=True, help="Stop-loss price.")
@click.option("--tp", "take_profit", required=True, help="Take-profit price.")
@click.option(
    "--side",
    type=click.Choice([s.value for s in TradeSide], case_sensitive=False),
    default=TradeSide.LONG.value,
    show_default=True,
    help="Trade side.",
)
@click.option("--fees", "fee_rate", default=None, help="Fee rate in percent of notional.")
@click.option("--leverage", default=None, help="Leverage multiplier.")
@click.option(
    "--timeframe", "-t",
    type=click.Choice(TIMEFRAME_CHOICES),
    default=None,
    help="Chart timeframe of the trade.",
)
@click.option("--date", "trade_date", type=click.DateTime(), default=None, help="Trade date/time.")
@click.option("--strategy", default="", help="Strategy label.")
@click.option("--notes", default="", help="Free-text notes.")
@click.option("--emotions", default="", help="How you felt during the trade.")
@click.option(
    "--confidence",
    type=click.Choice([c.value for c in ConfidenceLevel]),
    default=ConfidenceLevel.MEDIUM.value,
    help="Pre-trade confidence.",
)
@click.option(
    "--setup",
    "setup_quality",
    type=click.Choice([s.value for s in SetupQuality]),
    default=SetupQuality.GOOD.value,
    help="Setup quality.",
)
@click.option(
    "--market",
    "market_condition",
    type=click.Choice([m.value for m in MarketCondition]),
    default=MarketCondition.NEUTRAL.value,
    help="Market condition.",
)
def add(
    symbol: str,
    entry_price: str,
    exit_price: str,
    quantity: str,
    stop_loss: str,
    take_profit: str,
    side: str,
    fee_rate: Optional[str],
    leverage: Optional[str],
    timeframe: Optional[str],
    trade_date: Optional[datetime],
    strategy: str,
    notes: str,
    emotions: str,
    confidence: str,
    setup_quality: str,
    market_condition: str,
) -> None:
    """Record a closed trade.

    SYMBOL is the trading pair (e.g. BTC/USDT).

    \b
    Examples:
      tradejournal add BTC/USDT --entry 42000 --exit 43500 --qty 0.1 \\
          --sl 41000 --tp 44000 --strategy "Trend Following"
      tradejournal add ETH/USDT --side Short --entry 2200 --exit 2150 \\
          --qty 1 --sl 2250 --tp 2100 --leverage 3
    """
    from tradejournal.validation import TradeInputError, parse_trade_input

    config = get_config()
    defaults = config.get("defaults", {})

    try:
        trade = parse_trade_input(
            symbol=symbol,
            entry_price=entry_price,
            exit_price=exit_price,
            quantity=quantity,
            stop_loss=stop_loss,
            take_profit=take_profit,
            side=side.capitalize(),
            fee_rate=fee_rate if fee_rate is not None else str(defaults.get("fee_rate", 0.1)),
            leverage=leverage if leverage is not None else str(defaults.get("leverage", 1.0)),
            timeframe=timeframe or defaults.get("timeframe", "1h"),
            date=trade_date,
            notes=notes,
            strategy=strategy,
            emotions=emotions,
            confidence=confidence,
            setup_quality=setup_quality,
            market_condition=market_condition,
        )
    except TradeInputError as e:
        error_panel(str(e), title="Invalid Trade")

    journal = get_journal(config)
    journal.add_trade(trade)

    symbol_ccy = currency(config)
    console.print(Panel(
        f"[bold]{trade.symbol}[/bold] {trade.side.value} x{trade.quantity:g} "
        f"@ {trade.entry_price:g} -> {trade.exit_price:g}\n\n"
        f"P/L:  {format_money(trade.profit_loss, symbol_ccy)}\n"
        f"Fees: {symbol_ccy}{trade.total_fees:,.2f}\n"
        f"R:R:  {trade.risk_reward_ratio:.2f}\n\n"
        f"[dim]ID: {trade.id}[/dim]",
        title="[bold green]Trade Recorded[/bold green]",
        border_style="green",
    ))


@click.command()
@click.option(
    "--days",
    type=int,
    default=None,
    help="Only show trades from the last N days.",
)
@click.option("--symbol", default=None, help="Only show trades for this symbol.")
@click.option(
    "--limit",
    type=int,
    default=DEFAULT_PAGE_SIZE,
    show_default=True,
    help="Maximum number of trades to show.",
)
def trades(days: Optional[int], symbol: Optional[str], limit: int) -> None:
    """List recorded trades, newest first.

    \b
    Examples:
      tradejournal trades               # All trades
      tradejournal trades --days 7      # Last 7 days
      tradejournal trades --symbol BTC/USDT
    """
    config = get_config()
    journal = get_journal(config)

    rows = journal.trades
    if symbol:
        rows = [t for t in rows if t.symbol == symbol]
    if days is not None:
        rows = filter_since(rows, datetime.now() - timedelta(days=days))
    shown = rows[:limit]

    if not rows:
        empty_panel("Trade Journal")
        return

    symbol_ccy = currency(config)
    table = Table(
        title="Trade Journal",
        show_header=True,
        header_style="bold cyan",
    )

    table.add_column("Date/Time", style="dim")
    table.add_column("Symbol", style="bold")
    table.add_column("Side", justify="center")
    table.add_column("Qty", justify="right")
    table.add_column("Entry", justify="right")
    table.add_column("Exit", justify="right")
    table.add_column("P/L", justify="right")
    table.add_column("R:R", justify="right")
    table.add_column("Strategy", max_width=20)
    table.add_column("ID", style="dim", max_width=8)

    for trade in shown:
        side_color = "green" if trade.side == TradeSide.LONG else "red"
        table.add_row(
            trade.date.strftime("%Y-%m-%d %H:%M"),
            trade.symbol,
            f"[{side_color}]{trade.side.value}[/{side_color}]",
            f"{trade.quantity:g}",
            f"{trade.entry_price:,.2f}",
            f"{trade.exit_price:,.2f}",
            format_money(trade.profit_loss, symbol_ccy),
            f"{trade.risk_reward_ratio:.2f}",
            trade.strategy or "-",
            str(trade.id)[:8],
        )

    console.print(table)
    console.print(f"\n[bold]Total Trades:[/bold] {len(rows)}")
    if len(shown) < len(rows):
        console.print(f"[dim]Showing the newest {len(shown)}, use --limit to see more[/dim]")


def _resolve_trade_id(journal, trade_id: str, title: str) -> UUID:
    """Turn a full trade id or a unique prefix into a UUID."""
    try:
        return UUID(trade_id)
    except ValueError:
        pass

    matches = [t.id for t in journal.trades if str(t.id).startswith(trade_id.lower())]
    if len(matches) != 1:
        error_panel(
            f"No unique trade matches '{trade_id}' ({len(matches)} found)",
            title=title,
        )
    return matches[0]


@click.command()
@click.argument("trade_id")
def show(trade_id: str) -> None:
    """Show every detail of one trade.

    TRADE_ID is the full trade identifier or a unique prefix of it.

    \b
    Examples:
      tradejournal show 3f2a9c1e
    """
    config = get_config()
    journal = get_journal(config)

    target = _resolve_trade_id(journal, trade_id, "Trade Not Found")
    trade = journal.find_trade(target)
    if trade is None:
        error_panel(f"Trade {target} not found", title="Trade Not Found")

    ccy = currency(config)
    side_color = "green" if trade.side == TradeSide.LONG else "red"
    details = (
        f"[bold]{trade.symbol}[/bold] [{side_color}]{trade.side.value}[/{side_color}] "
        f"[dim]{trade.date.strftime('%Y-%m-%d %H:%M')} · {trade.timeframe.value}[/dim]\n\n"
        f"[bold]Trade Details[/bold]\n"
        f"Entry:        {trade.entry_price:,.2f}\n"
        f"Exit:         {trade.exit_price:,.2f}\n"
        f"Quantity:     {trade.quantity:g}\n"
        f"Leverage:     {trade.leverage:g}x\n"
        f"Fee Rate:     {trade.fee_rate:g}%\n\n"
        f"[bold]Performance[/bold]\n"
        f"Gross P/L:    {format_money(trade.raw_profit_loss * trade.leverage, ccy)}\n"
        f"Fees:         {ccy}{trade.total_fees:,.2f}\n"
        f"Net P/L:      {format_money(trade.profit_loss, ccy)}\n\n"
        f"[bold]Risk Management[/bold]\n"
        f"Stop Loss:    {trade.stop_loss:,.2f}\n"
        f"Take Profit:  {trade.take_profit:,.2f}\n"
        f"Risk:         {ccy}{trade.risk_amount:,.2f}\n"
        f"Reward:       {ccy}{trade.reward_amount:,.2f}\n"
        f"R:R:          {trade.risk_reward_ratio:.2f}\n\n"
        f"[bold]Context[/bold]\n"
        f"Strategy:     {trade.strategy or '-'}\n"
        f"Confidence:   {trade.confidence.value}\n"
        f"Setup:        {trade.setup_quality.value}\n"
        f"Market:       {trade.market_condition.value}\n\n"
        f"[bold]Additional Info[/bold]\n"
        f"Emotions:     {trade.emotions or '-'}\n"
        f"Notes:        {trade.notes or '-'}\n\n"
        f"[dim]ID: {trade.id}[/dim]"
    )

    console.print(Panel(
        details,
        title="[bold cyan]Trade Detail[/bold cyan]",
        border_style="cyan",
    ))


@click.command()
@click.argument("trade_id")
def delete(trade_id: str) -> None:
    """Delete a trade by its ID.

    TRADE_ID is the full trade identifier or a unique prefix of it.

    \b
    Examples:
      tradejournal delete 3f2a9c1e
    """
    journal = get_journal()
    target = _resolve_trade_id(journal, trade_id, "Delete Failed")

    if not journal.delete_trade(target):
        error_panel(f"Trade {target} not found", title="Delete Failed")

    console.print(f"[green]✓[/green] Deleted trade [bold]{target}[/bold]")


@click.command()
def seed() -> None:
    """Add sample trades to an empty journal."""
    journal = get_journal()
    if journal.seed_sample_data():
        console.print(f"[green]✓[/green] Added {len(journal.trades)} sample trades")
    else:
        console.print("[yellow]Journal already has trades, nothing added[/yellow]")
